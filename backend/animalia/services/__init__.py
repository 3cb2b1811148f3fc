"""Room, leaderboard and game-round services.

Views in ``animalia.main`` and ``animalia.admin`` call into these modules;
HTTP concerns stay in the views.
"""
