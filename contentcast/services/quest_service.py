"""
Quest ledger service.
Records quest completions, enforces cooldown and one-time rules,
and derives totals and streaks from the ledger.
"""

from datetime import datetime, timedelta
from decimal import Decimal
from typing import Any, Callable, Dict, List, Optional, Tuple

import structlog

from contentcast.core.config import QuestConfig
from contentcast.core.exceptions import QuestCooldownError, UserNotFoundError
from contentcast.models import UserQuest, QuestCompletion
from contentcast.models.base import utcnow
from contentcast.services.reset_clock import calendar_date
from contentcast.storage import Storage

logger = structlog.get_logger(__name__)

COOLDOWN = timedelta(hours=QuestConfig.COOLDOWN_HOURS)


class QuestService:
    """Service for the per-user quest ledger."""

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = utcnow):
        self.storage = storage
        self.clock = clock
        self.logger = logger.bind(service="quest_service")

    # ============================================================================
    # LEDGER PRIMITIVES
    # ============================================================================

    async def can_complete(self, user_id: str, quest_type: str) -> bool:
        """
        Whether the user may complete this quest type now.

        The cooldown is a rolling 24 hour window from the last completion,
        not a ledger-day boundary.
        """
        quest = await self.storage.get_user_quest(user_id, quest_type)
        if not quest or not quest.last_completed_at:
            return True

        if quest.is_one_time and quest.is_completed:
            return False

        return self.clock() - quest.last_completed_at >= COOLDOWN

    async def record_completion(
        self,
        user_id: str,
        quest_type: str,
        points: Decimal
    ) -> UserQuest:
        """
        Credit one completion. Does not check cooldown; callers do.
        """
        now = self.clock()
        points = Decimal(points)
        quest = await self.storage.get_user_quest(user_id, quest_type)

        if quest:
            quest.total_points = Decimal(quest.total_points or 0) + points
            quest.completion_count = (quest.completion_count or 0) + 1
            quest.last_completed_at = now
        else:
            quest = UserQuest(
                user_id=user_id,
                quest_type=quest_type,
                last_completed_at=now,
                total_points=points,
                completion_count=1,
                is_one_time=QuestConfig.is_one_time(quest_type),
                is_completed=False,
            )

        quest = await self.storage.save_user_quest(quest)
        await self.storage.add_quest_completion(
            QuestCompletion(
                user_id=user_id,
                quest_type=quest_type,
                points=points,
                completed_at=now,
            )
        )

        self.logger.info(
            "Quest completion recorded",
            user_id=user_id,
            quest_type=quest_type,
            points=str(points),
            completion_count=quest.completion_count
        )
        return quest

    async def mark_one_time_completed(self, user_id: str, quest_type: str) -> None:
        quest = await self.storage.get_user_quest(user_id, quest_type)
        if not quest:
            return
        quest.is_completed = True
        await self.storage.save_user_quest(quest)

    async def total_points(self, user_id: str) -> Decimal:
        quests = await self.storage.list_user_quests(user_id)
        return sum((Decimal(q.total_points or 0) for q in quests), Decimal("0"))

    async def get_user_quest(self, user_id: str, quest_type: str) -> Optional[UserQuest]:
        return await self.storage.get_user_quest(user_id, quest_type)

    # ============================================================================
    # STREAK
    # ============================================================================

    async def get_current_streak(self, user_id: str) -> int:
        """
        Consecutive UTC calendar days, walking back from today, with at least
        one daily quest completion. A missing today does not break the streak
        while the latest completion is under 24 hours old.
        """
        daily_quests = await self.storage.list_user_quests(
            user_id, QuestConfig.DAILY_STREAK_QUESTS
        )
        if not daily_quests:
            return 0

        now = self.clock()
        lookback_start = now - timedelta(days=QuestConfig.STREAK_LOOKBACK_DAYS + 1)
        completions = await self.storage.list_quest_completions(
            user_id, QuestConfig.DAILY_STREAK_QUESTS, lookback_start
        )

        completed_dates = {calendar_date(c.completed_at) for c in completions}
        completed_dates.update(
            calendar_date(q.last_completed_at)
            for q in daily_quests if q.last_completed_at
        )

        today = calendar_date(now)
        streak = 0
        for i in range(QuestConfig.STREAK_LOOKBACK_DAYS):
            if today - timedelta(days=i) in completed_dates:
                streak += 1
                continue

            if i == 0:
                recent = any(
                    q.last_completed_at and now - q.last_completed_at < COOLDOWN
                    for q in daily_quests
                )
                if recent:
                    continue
            break

        return streak

    # ============================================================================
    # QUEST ACTIONS
    # ============================================================================

    async def complete_quest(self, user_id: str, quest_type: str) -> Tuple[UserQuest, Decimal]:
        """
        Cooldown-checked completion used by the quest endpoint.

        Returns the updated record and the points credited.
        """
        user = await self.storage.get_user(user_id)
        if not user:
            raise UserNotFoundError(user_id)

        if not await self.can_complete(user_id, quest_type):
            self.logger.info("Quest on cooldown", user_id=user_id, quest_type=quest_type)
            raise QuestCooldownError(user_id, quest_type)

        points = QuestConfig.points_for(quest_type)
        quest = await self.record_completion(user_id, quest_type, points)

        if QuestConfig.is_one_time(quest_type):
            await self.mark_one_time_completed(user_id, quest_type)

        await self.storage.commit()
        return quest, points

    async def get_quest_status(self, user_id: str) -> Dict[str, Any]:
        """Totals, streak and per-quest eligibility for the quest screen."""
        now = self.clock()
        total = await self.total_points(user_id)
        streak = await self.get_current_streak(user_id)

        daily: Dict[str, Dict[str, Any]] = {}
        daily_cast_count = 0
        for quest_type in QuestConfig.DAILY_QUESTS:
            quest = await self.storage.get_user_quest(user_id, quest_type)
            time_until_next = 0
            if quest_type == QuestConfig.DAILY_CAST:
                daily_cast_count = quest.completion_count if quest else 0
            elif quest and quest.last_completed_at:
                elapsed = now - quest.last_completed_at
                time_until_next = max(0, int((COOLDOWN - elapsed).total_seconds() * 1000))

            daily[quest_type] = {
                "record": quest,
                "can_complete": await self.can_complete(user_id, quest_type),
                "time_until_next": time_until_next,
            }

        bonus: Dict[str, Dict[str, Any]] = {}
        for quest_type in QuestConfig.BONUS_QUESTS:
            quest = await self.storage.get_user_quest(user_id, quest_type)
            bonus[quest_type] = {
                "record": quest,
                "can_complete": await self.can_complete(user_id, quest_type),
                "is_completed": bool(quest and quest.is_completed),
            }

        return {
            "total_points": total,
            "current_streak": streak,
            "daily_cast_count": daily_cast_count,
            "quests": daily,
            "bonus_quests": bonus,
        }

    async def list_all_quests(self) -> List[UserQuest]:
        return await self.storage.list_all_user_quests()


async def get_quest_service(
    storage: Storage,
    clock: Callable[[], datetime] = utcnow
) -> QuestService:
    """Get quest service instance."""
    return QuestService(storage, clock)
