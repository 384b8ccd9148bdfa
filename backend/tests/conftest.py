import os
import sys
import pytest

# Ensure the backend root (containing the `revdict` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from revdict import create_app, db, socketio
from revdict.services.lookup import DefinedWord, WordLookup


class TestConfig:
    TESTING = True
    SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
    SQLALCHEMY_DATABASE_URI = 'sqlite://'
    SQLALCHEMY_TRACK_MODIFICATIONS = False
    RANDOM_WORD_API_URL = 'http://words.test/api'
    DICTIONARY_API_URL = 'http://dictionary.test/entries/en'
    LOOKUP_TIMEOUT_SEC = 1
    WORD_LOOKUP_MAX_ATTEMPTS = 3
    MISTAKE_PENALTY_SEC = 5
    DEFAULT_MODE = 'free-play'
    FIXED_WORD_POOL = ['apple', 'bridge', 'candle']


DEFINITIONS = {
    'cat': 'A small domesticated carnivorous mammal.',
    'apple': 'The round fruit of a tree of the rose family.',
    'bridge': 'A structure carrying a road across a river.',
    'candle': 'A stick of wax with a central wick.',
}


@pytest.fixture()
def flask_app():
    application = create_app(TestConfig)
    with application.app_context():
        # Ensure models are imported so tables are created
        import revdict.models  # noqa: F401
        db.create_all()
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


@pytest.fixture()
def sio_client(flask_app):
    test_client = socketio.test_client(
        flask_app,
        flask_test_client=flask_app.test_client(),
        namespace='/ws'
    )
    yield test_client
    try:
        test_client.disconnect(namespace='/ws')
    except Exception:
        pass


@pytest.fixture()
def fake_words(monkeypatch):
    """Route word lookups to an in-memory dictionary; random candidates come from ``queue``."""
    queue = ['cat']

    def candidate(self, length=None):
        if self.pool is not None:
            return self.pool[0]
        return queue[0] if len(queue) == 1 else queue.pop(0)

    def define(self, word):
        if word in DEFINITIONS:
            return DefinedWord(word=word, definition=DEFINITIONS[word])
        return None

    monkeypatch.setattr(WordLookup, 'candidate', candidate)
    monkeypatch.setattr(WordLookup, 'define', define)
    return queue
