import logging
from datetime import datetime
from typing import Optional
from sqlalchemy.orm import Session
from animalia.errors import ValidationFailure
from animalia.repositories import LeaderboardRepository
from animalia.services.admin import parse_room_id, to_number
from .ranking import rank_of, upsert_score, utcnow

logger = logging.getLogger(__name__)


def submit_score(session: Session, room_id, player_name, score, now: Optional[datetime] = None) -> int:
    """Store a player's score for a room and return their current rank."""
    room_id = parse_room_id(room_id)
    name = str(player_name or '').strip()
    if not name:
        raise ValidationFailure('Player name is required')
    score = to_number(score, 'score')
    now = now or utcnow()

    leaderboard = LeaderboardRepository(session).require(room_id, for_update=True)
    entries = upsert_score(leaderboard.score_entries, name, score, now)
    leaderboard.score_entries = entries
    session.commit()

    rank = rank_of(entries, name, now)
    logger.info(f"[score-submit] room={room_id} player={name!r} score={score} rank={rank}")
    return rank
