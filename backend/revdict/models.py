from revdict import db
from datetime import datetime
import string
import random

MODES = ('free-play', 'fixed-set')
MAX_WORD_CHARS = 64


class AttemptEvent(db.Model):
    """One finished round: a submitted guess or a skip."""
    __tablename__ = 'attempt_event'
    id = db.Column(db.Integer, primary_key=True)
    player = db.Column(db.String(64), nullable=False, index=True)
    word = db.Column(db.String(MAX_WORD_CHARS), nullable=False, index=True)
    definition = db.Column(db.Text, nullable=True)
    guess = db.Column(db.String(128), nullable=False, default='')
    correct = db.Column(db.Boolean, nullable=False, default=False)
    skipped = db.Column(db.Boolean, nullable=False, default=False)
    reaction_time = db.Column(db.Float, nullable=True)
    mode = db.Column(db.String(32), nullable=False, index=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)


class ScoreEvent(db.Model):
    """Running total of a player after a correctly guessed round."""
    __tablename__ = 'score_event'
    id = db.Column(db.Integer, primary_key=True)
    player = db.Column(db.String(64), nullable=False, index=True)
    mode = db.Column(db.String(32), nullable=False, index=True)
    score = db.Column(db.Integer, nullable=False)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def to_dict(self):
        return {
            'id': self.id,
            'player': self.player,
            'mode': self.mode,
            'score': self.score,
            'created_at': self.created_at.isoformat() if self.created_at else None,
        }


def generate_session_code(length=6):
    """Generate a unique, short session code."""
    while True:
        code = ''.join(random.choices(string.ascii_uppercase + string.digits, k=length))
        if not PlaySession.query.filter_by(session_code=code).first():
            return code


class PlaySession(db.Model):
    """Server-side state of one player's sitting (running score, current round)."""
    __tablename__ = 'play_session'
    id = db.Column(db.Integer, primary_key=True)
    session_code = db.Column(db.String(8), unique=True, index=True)
    player = db.Column(db.String(64), nullable=False)
    mode = db.Column(db.String(32), nullable=False, default='free-play')
    word_length = db.Column(db.Integer, nullable=True)
    score = db.Column(db.Integer, nullable=False, default=0)
    rounds_played = db.Column(db.Integer, nullable=False, default=0)
    current_word = db.Column(db.String(MAX_WORD_CHARS), nullable=True)
    current_definition = db.Column(db.Text, nullable=True)
    round_started_at = db.Column(db.Float, nullable=True)
    created_at = db.Column(db.DateTime, default=datetime.utcnow)

    def __init__(self, **kwargs):
        super(PlaySession, self).__init__(**kwargs)
        if not self.session_code:
            self.session_code = generate_session_code()

    def to_round_session(self):
        from revdict.services.rounds import RoundSession
        return RoundSession(
            player=self.player,
            mode=self.mode,
            score=int(self.score or 0),
            rounds_played=int(self.rounds_played or 0),
            word_length=self.word_length,
            word=self.current_word,
            definition=self.current_definition,
            started_at=self.round_started_at,
        )

    def close_round(self):
        """Clear the word in play; goes into the same commit as the round's attempt."""
        self.current_word = None
        self.current_definition = None
        self.round_started_at = None

    def apply(self, round_session):
        """Copy the controller's returned session back onto the row."""
        self.score = round_session.score
        self.rounds_played = round_session.rounds_played
        self.current_word = round_session.word
        self.current_definition = round_session.definition
        self.round_started_at = round_session.started_at

    def to_dict(self):
        # The current word is never serialized; clients only see the definition.
        return {
            'id': self.id,
            'session_code': self.session_code,
            'player': self.player,
            'mode': self.mode,
            'word_length': self.word_length,
            'score': self.score,
            'rounds_played': self.rounds_played,
            'in_round': self.current_word is not None,
            'definition': self.current_definition,
        }
