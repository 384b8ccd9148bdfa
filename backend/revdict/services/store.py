from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.exc import SQLAlchemyError

from revdict import db
from revdict.models import AttemptEvent, ScoreEvent


class TelemetryError(Exception):
    """Raised when an event could not be appended to the store."""


class EventStore:
    """Append-only access to attempt and score events.

    Reads always return the full matching set; aggregation needs the whole
    snapshot in memory.
    """

    def __init__(self, session=None):
        self.session = session or db.session

    def append(self, *events) -> None:
        try:
            for event in events:
                self.session.add(event)
            self.session.commit()
        except SQLAlchemyError as exc:
            self.session.rollback()
            raise TelemetryError(str(exc)) from exc

    def query_all(self, model, **filters) -> list:
        return self.session.query(model).filter_by(**filters).order_by(model.id).all()

    def attempts(self, mode: Optional[str] = None) -> List[AttemptEvent]:
        filters = {'mode': mode} if mode else {}
        return self.query_all(AttemptEvent, **filters)

    def scores(self, mode: Optional[str] = None) -> List[ScoreEvent]:
        filters = {'mode': mode} if mode else {}
        return self.query_all(ScoreEvent, **filters)

    def best_score(self, player: str, mode: str) -> int:
        best = (
            self.session.query(func.max(ScoreEvent.score))
            .filter(ScoreEvent.player == player, ScoreEvent.mode == mode)
            .scalar()
        )
        return int(best or 0)

    def latest_score(self, player: str, mode: str) -> Optional[ScoreEvent]:
        return (
            self.session.query(ScoreEvent)
            .filter_by(player=player, mode=mode)
            .order_by(ScoreEvent.created_at.desc(), ScoreEvent.id.desc())
            .first()
        )
