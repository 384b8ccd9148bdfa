import os

class Config:
    SECRET_KEY = os.environ.get('SECRET_KEY') or 'you-will-never-guess'
    SQLALCHEMY_DATABASE_URI = os.environ.get('DATABASE_URL') or 'sqlite:///revdict.db'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    # Word sources
    RANDOM_WORD_API_URL = os.environ.get('RANDOM_WORD_API_URL', 'https://random-word-api.vercel.app/api')
    DICTIONARY_API_URL = os.environ.get('DICTIONARY_API_URL', 'https://api.dictionaryapi.dev/api/v2/entries/en')
    # Per-request timeout for word lookups (seconds)
    LOOKUP_TIMEOUT_SEC = float(os.environ.get('LOOKUP_TIMEOUT_SEC', '5'))
    # Candidates tried before a round start gives up
    WORD_LOOKUP_MAX_ATTEMPTS = int(os.environ.get('WORD_LOOKUP_MAX_ATTEMPTS', '5'))
    # Seconds added to a word's difficulty per wrong guess
    MISTAKE_PENALTY_SEC = float(os.environ.get('MISTAKE_PENALTY_SEC', '5'))
    DEFAULT_MODE = os.environ.get('DEFAULT_MODE', 'free-play')
    # Comma-separated pool used by the fixed-set mode
    FIXED_WORD_POOL = [
        w.strip().lower()
        for w in os.environ.get(
            'FIXED_WORD_POOL',
            'apple,bridge,candle,desert,engine,forest,garden,harbor,island,jungle,'
            'kettle,ladder,mirror,needle,orchard,pillow,quarry,ribbon,saddle,tunnel',
        ).split(',')
        if w.strip()
    ]
