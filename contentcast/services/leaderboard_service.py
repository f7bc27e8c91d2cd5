"""
Leaderboard aggregation over the quest ledger.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional

import structlog

from contentcast.models.base import utcnow
from contentcast.services.quest_service import QuestService
from contentcast.storage import Storage

logger = structlog.get_logger(__name__)


class LeaderboardService:
    """Ranks users by lifetime quest points."""

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = utcnow):
        self.storage = storage
        self.quests = QuestService(storage, clock)
        self.logger = logger.bind(service="leaderboard_service")

    async def get_leaderboard(self, limit: Optional[int] = None) -> List[Dict[str, Any]]:
        """
        Users with positive points, highest first.

        Ties keep user creation order. Weekly, monthly and yearly points are
        the lifetime total; the ledger keeps no time-windowed sums.
        A limit of None or 0 returns every entry.
        """
        totals: Dict[str, Decimal] = {}
        for quest in await self.storage.list_all_user_quests():
            totals[quest.user_id] = (
                totals.get(quest.user_id, Decimal("0")) + Decimal(quest.total_points or 0)
            )

        sbt_holders = {
            badge.user_id for badge in await self.storage.list_sbt_badges()
            if (badge.mint_count or 0) > 0
        }

        entries = []
        for user in await self.storage.list_users():
            total = totals.get(user.id, Decimal("0"))
            if total <= 0:
                continue
            entries.append({
                "id": user.id,
                "wallet_address": user.wallet_address,
                "username": user.farcaster_username,
                "total_points": total,
                "streak": await self.quests.get_current_streak(user.id),
                "weekly_points": total,
                "monthly_points": total,
                "yearly_points": total,
                "has_sbt": user.id in sbt_holders,
            })

        entries.sort(key=lambda e: e["total_points"], reverse=True)
        for position, entry in enumerate(entries, start=1):
            entry["rank"] = position

        self.logger.debug("Leaderboard built", users=len(entries), limit=limit)

        if limit:
            return entries[:limit]
        return entries


async def get_leaderboard_service(
    storage: Storage,
    clock: Callable[[], datetime] = utcnow
) -> LeaderboardService:
    """Get leaderboard service instance."""
    return LeaderboardService(storage, clock)
