"""Leaderboard and word statistics, recomputed from a full event snapshot.

Both entry points are pure: they take lists of attempt and score events
(model rows or plain dicts), never touch the database, and return the same
rows for the same input. Events that are missing a player or word, or that
contradict themselves, are dropped rather than failing the whole view.

Ordering rules:

- Leaderboard rows go from highest to lowest score. Equal scores keep the order
  in which players were first seen: score events first, then attempt events.
  Players who only have attempts are listed with a score of 0.
- Word rows go from lowest to highest guess rate (hardest first). Equal rates
  keep the order in which words were first seen.
"""
from dataclasses import dataclass
from typing import Dict, Iterable, List, Optional

PLACEHOLDER = 'N/A'
DEFAULT_MISTAKE_PENALTY = 5.0


def _field(event, name):
    if isinstance(event, dict):
        return event.get(name)
    return getattr(event, name, None)


def _label(value) -> Optional[str]:
    if not isinstance(value, str):
        return None
    value = value.strip()
    return value or None


def _seconds(value: Optional[float]) -> str:
    return PLACEHOLDER if value is None else f'{value:.2f}'


def _mean(values: List[float]) -> Optional[float]:
    return sum(values) / len(values) if values else None


@dataclass(frozen=True)
class Attempt:
    """Validated view of one attempt event."""
    player: str
    word: str
    correct: bool
    skipped: bool
    reaction_time: Optional[float]


def _attempts(events: Iterable, mode: str) -> List[Attempt]:
    cleaned = []
    for event in events or []:
        if _field(event, 'mode') != mode:
            continue
        player = _label(_field(event, 'player'))
        word = _label(_field(event, 'word'))
        if not player or not word:
            continue
        correct = bool(_field(event, 'correct'))
        skipped = bool(_field(event, 'skipped'))
        if correct and skipped:
            continue
        rt = _field(event, 'reaction_time')
        if correct:
            if isinstance(rt, bool) or not isinstance(rt, (int, float)) or rt < 0:
                continue
            rt = float(rt)
        cleaned.append(Attempt(player, word.lower(), correct, skipped, rt))
    return cleaned


# ---- Leaderboard ----

@dataclass(frozen=True)
class LeaderboardRow:
    player: str
    score: int
    shortest: Optional[float]
    longest: Optional[float]
    average: Optional[float]
    wrongs: int
    easiest_word: Optional[str]
    hardest_word: Optional[str]

    def to_dict(self):
        return {
            'player': self.player,
            'score': self.score,
            'shortest': _seconds(self.shortest),
            'longest': _seconds(self.longest),
            'average': _seconds(self.average),
            'wrongs': self.wrongs,
            'easiest_word': self.easiest_word or PLACEHOLDER,
            'hardest_word': self.hardest_word or PLACEHOLDER,
        }


class _WordTally:
    __slots__ = ('times', 'mistakes')

    def __init__(self):
        self.times: List[float] = []
        self.mistakes = 0


def difficulty_score(times: List[float], mistakes: int,
                     penalty: float = DEFAULT_MISTAKE_PENALTY) -> float:
    """Average correct-answer latency plus ``penalty`` seconds per wrong guess."""
    return _mean(times) + mistakes * penalty


def compute_leaderboard(attempts: Iterable, scores: Iterable, mode: str,
                        mistake_penalty: float = DEFAULT_MISTAKE_PENALTY) -> List[LeaderboardRow]:
    best: Dict[str, int] = {}
    for event in scores or []:
        if _field(event, 'mode') != mode:
            continue
        player = _label(_field(event, 'player'))
        value = _field(event, 'score')
        if not player or isinstance(value, bool) or not isinstance(value, int):
            continue
        best[player] = max(best.get(player, value), value)

    # player -> word -> tally, both in first-seen order
    tallies: Dict[str, Dict[str, _WordTally]] = {}
    for a in _attempts(attempts, mode):
        tally = tallies.setdefault(a.player, {}).setdefault(a.word, _WordTally())
        if a.skipped:
            continue
        if a.correct:
            tally.times.append(a.reaction_time)
        else:
            tally.mistakes += 1

    players = list(best)
    players.extend(p for p in tallies if p not in best)

    rows = []
    for player in players:
        words = tallies.get(player, {})
        times = [t for tally in words.values() for t in tally.times]
        ranked = sorted(
            (w for w, tally in words.items() if tally.times),
            key=lambda w: difficulty_score(words[w].times, words[w].mistakes, mistake_penalty),
        )
        rows.append(LeaderboardRow(
            player=player,
            score=best.get(player, 0),
            shortest=min(times) if times else None,
            longest=max(times) if times else None,
            average=_mean(times),
            wrongs=sum(tally.mistakes for tally in words.values()),
            easiest_word=ranked[0] if ranked else None,
            hardest_word=ranked[-1] if ranked else None,
        ))

    rows.sort(key=lambda r: -r.score)
    return rows


# ---- Word statistics ----

@dataclass(frozen=True)
class WordStatRow:
    word: str
    guess_rate: float
    mistakes: int
    average_reaction_time: Optional[float]
    attempts: int
    players: int

    def to_dict(self):
        return {
            'word': self.word,
            'guess_rate': f'{self.guess_rate:.1f}',
            'mistakes': self.mistakes,
            'average_reaction_time': _seconds(self.average_reaction_time),
            'attempts': self.attempts,
            'players': self.players,
        }


def guess_rate(correct_players: int, attempted_players: int) -> float:
    if not attempted_players:
        return 0.0
    return round(correct_players / attempted_players * 100, 1)


def compute_word_statistics(attempts: Iterable, mode: str) -> List[WordStatRow]:
    seen: Dict[str, dict] = {}
    for a in _attempts(attempts, mode):
        stat = seen.setdefault(a.word, {
            'attempted': set(), 'correct': set(), 'times': [], 'mistakes': 0, 'records': 0,
        })
        stat['records'] += 1
        if a.skipped:
            continue
        stat['attempted'].add(a.player)
        if a.correct:
            stat['correct'].add(a.player)
            stat['times'].append(a.reaction_time)
        else:
            stat['mistakes'] += 1

    rows = [
        WordStatRow(
            word=word,
            guess_rate=guess_rate(len(stat['correct']), len(stat['attempted'])),
            mistakes=stat['mistakes'],
            average_reaction_time=_mean(stat['times']),
            attempts=stat['records'],
            players=len(stat['attempted']),
        )
        for word, stat in seen.items()
    ]
    rows.sort(key=lambda r: r.guess_rate)
    return rows
