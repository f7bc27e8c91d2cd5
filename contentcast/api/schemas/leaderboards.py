"""
Leaderboard schemas.
"""

from typing import Optional

from .common import CamelModel


class LeaderboardEntry(CamelModel):
    id: str
    wallet_address: str
    username: Optional[str] = None
    total_points: float
    rank: int
    streak: int
    # Lifetime totals; no time-windowed sums are kept
    weekly_points: float
    monthly_points: float
    yearly_points: float
    has_sbt: bool = False
