"""One guessing round: resolve a word, time the player, record telemetry.

The controller holds no per-player state. Every call takes a ``RoundSession``
and hands back the updated one, so the caller decides where it lives.
"""
import time
from dataclasses import dataclass, replace
from typing import Callable, Optional, Tuple, Union

from revdict.models import AttemptEvent, ScoreEvent
from revdict.services.lookup import LookupFailed
from revdict.services.store import TelemetryError


class RoundNotActive(Exception):
    """A guess or skip arrived while no word was in play."""


@dataclass(frozen=True)
class RoundSession:
    player: str
    mode: str
    score: int = 0
    rounds_played: int = 0
    word_length: Optional[int] = None
    word: Optional[str] = None
    definition: Optional[str] = None
    started_at: Optional[float] = None

    @property
    def in_round(self) -> bool:
        return self.word is not None and self.started_at is not None


@dataclass(frozen=True)
class WordFound:
    word: str
    definition: str
    attempts: int


@dataclass(frozen=True)
class WordNotFound:
    attempts: int


RoundStart = Union[WordFound, WordNotFound]


@dataclass(frozen=True)
class RoundResult:
    session: RoundSession
    word: str
    correct: bool
    skipped: bool
    reaction_time: float
    telemetry_recorded: bool


def is_correct_guess(guess: str, word: str) -> bool:
    return (guess or '').strip().lower() == (word or '').strip().lower()


class RoundController:
    def __init__(self, lookup, store, logger, max_attempts: int = 5,
                 clock: Callable[[], float] = time.time,
                 on_recorded: Optional[Callable[[str], None]] = None):
        self.lookup = lookup
        self.store = store
        self.logger = logger
        self.max_attempts = max(1, int(max_attempts))
        self.clock = clock
        self.on_recorded = on_recorded

    def start_round(self, session: RoundSession,
                    length: Optional[int] = None) -> Tuple[RoundSession, RoundStart]:
        """Find a word that has a definition, trying at most ``max_attempts`` candidates.

        Returns ``(session, WordFound)`` with the round clock started, or the
        untouched session and ``WordNotFound`` once the attempts run out.
        """
        length = length if length is not None else session.word_length
        for attempt in range(1, self.max_attempts + 1):
            try:
                candidate = self.lookup.candidate(length)
                found = self.lookup.define(candidate)
            except LookupFailed as exc:
                self.logger.warning(f"[lookup-failed] player={session.player} attempt={attempt} error={exc}")
                continue
            if found is None:
                self.logger.info(f"[lookup-miss] player={session.player} attempt={attempt} candidate={candidate}")
                continue
            started = replace(session, word=found.word, definition=found.definition, started_at=self.clock())
            self.logger.info(f"[round-start] player={session.player} mode={session.mode} attempts={attempt}")
            return started, WordFound(word=found.word, definition=found.definition, attempts=attempt)

        self.logger.warning(
            f"[lookup-exhausted] player={session.player} mode={session.mode} attempts={self.max_attempts}"
        )
        return session, WordNotFound(attempts=self.max_attempts)

    def submit_guess(self, session: RoundSession, text: str) -> RoundResult:
        return self._finish(session, guess=text or '', skipped=False)

    def skip_round(self, session: RoundSession) -> RoundResult:
        return self._finish(session, guess='', skipped=True)

    def _finish(self, session: RoundSession, guess: str, skipped: bool) -> RoundResult:
        if not session.in_round:
            raise RoundNotActive(f'{session.player} has no round in progress')

        elapsed = round(max(0.0, self.clock() - session.started_at), 2)
        correct = not skipped and is_correct_guess(guess, session.word)
        score = session.score + 1 if correct else session.score

        attempt = AttemptEvent(
            player=session.player,
            word=session.word,
            definition=session.definition,
            guess=guess,
            correct=correct,
            skipped=skipped,
            reaction_time=elapsed,
            mode=session.mode,
        )
        attempt_recorded = self._record(attempt, session)
        recorded = attempt_recorded
        if correct:
            recorded = self._record(
                ScoreEvent(player=session.player, mode=session.mode, score=score), session
            ) and recorded

        self.logger.info(
            f"[round-end] player={session.player} word={session.word} correct={correct} "
            f"skipped={skipped} time={elapsed:.2f}s score={score}"
        )
        # word statistics change as soon as the attempt lands
        if attempt_recorded and self.on_recorded:
            self.on_recorded(session.mode)

        finished = replace(
            session,
            score=score,
            rounds_played=session.rounds_played + 1,
            word=None,
            definition=None,
            started_at=None,
        )
        return RoundResult(
            session=finished,
            word=session.word,
            correct=correct,
            skipped=skipped,
            reaction_time=elapsed,
            telemetry_recorded=recorded,
        )

    def _record(self, event, session: RoundSession) -> bool:
        try:
            self.store.append(event)
        except TelemetryError as exc:
            self.logger.error(
                f"[telemetry-failed] player={session.player} event={type(event).__name__} error={exc}"
            )
            return False
        return True
