"""Leaderboard services: pure ranking rules and score submission."""

from .ranking import (
    ScoreEntry,
    filter_by_active_window,
    rank_descending,
    rank_of,
    ranked_view,
    school_year_window,
    upsert_score,
)
