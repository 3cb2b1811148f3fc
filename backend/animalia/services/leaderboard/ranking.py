"""Leaderboard ranking rules.

Everything here is pure: callers load entries from the store, run them
through these functions and persist the result themselves.
"""

from dataclasses import dataclass, replace
from datetime import datetime, timezone
from typing import Iterable, List, Optional, Tuple


@dataclass(frozen=True)
class ScoreEntry:
    player_name: str
    score: float
    recorded_at: datetime

    @classmethod
    def from_dict(cls, data: dict) -> 'ScoreEntry':
        return cls(
            player_name=data['player_name'],
            score=data['score'],
            recorded_at=parse_timestamp(data.get('recorded_at')),
        )

    def to_dict(self) -> dict:
        return {
            'player_name': self.player_name,
            'score': self.score,
            'recorded_at': self.recorded_at.isoformat(),
        }


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def parse_timestamp(value) -> datetime:
    """Parse an ISO-8601 string (or pass a datetime through) as aware UTC.

    Naive values are taken to be UTC; a missing value means "now".
    """
    if value is None or value == '':
        return utcnow()
    if isinstance(value, datetime):
        parsed = value
    else:
        text = str(value).strip()
        if text.endswith('Z'):
            text = text[:-1] + '+00:00'
        parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def school_year_window(now: datetime) -> Tuple[datetime, datetime]:
    """Return [Sep 1 of the starting year, Sep 1 of the next year)."""
    start_year = now.year if now.month >= 9 else now.year - 1
    start = datetime(start_year, 9, 1, tzinfo=now.tzinfo)
    end = datetime(start_year + 1, 9, 1, tzinfo=now.tzinfo)
    return start, end


def filter_by_active_window(entries: Iterable[ScoreEntry], now: datetime) -> List[ScoreEntry]:
    start, end = school_year_window(now)
    return [e for e in entries if start <= e.recorded_at < end]


def rank_descending(entries: Iterable[ScoreEntry]) -> List[ScoreEntry]:
    # sorted() is stable, so equal scores keep their input order
    return sorted(entries, key=lambda e: e.score, reverse=True)


def upsert_score(entries: Iterable[ScoreEntry], player_name: str, new_score, now: datetime) -> List[ScoreEntry]:
    """Record a score, keeping one entry per player.

    Within the current school year an existing entry only changes when the
    new score is strictly higher; its timestamp moves to ``now`` then. An
    entry left over from an earlier school year is always replaced, so the
    player is back on this year's board. Unknown players are appended.
    """
    start, end = school_year_window(now)
    updated = list(entries)
    for idx, entry in enumerate(updated):
        if entry.player_name == player_name:
            stale = not (start <= entry.recorded_at < end)
            if stale or new_score > entry.score:
                updated[idx] = replace(entry, score=new_score, recorded_at=now)
            return updated
    updated.append(ScoreEntry(player_name=player_name, score=new_score, recorded_at=now))
    return updated


def rank_of(entries: Iterable[ScoreEntry], player_name: str, now: datetime) -> int:
    """1-based rank among this school year's entries, 0 when absent."""
    for position, entry in enumerate(rank_descending(filter_by_active_window(entries, now)), start=1):
        if entry.player_name == player_name:
            return position
    return 0


def ranked_view(entries: Iterable[ScoreEntry], now: datetime, limit: Optional[int] = None) -> List[ScoreEntry]:
    ranked = rank_descending(filter_by_active_window(entries, now))
    if limit is not None:
        ranked = ranked[:limit]
    return ranked
