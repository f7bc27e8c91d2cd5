"""
Daily cast counter keyed by ledger day.
"""

from datetime import datetime
from typing import Any, Callable, Dict

import structlog

from contentcast.core.config import QuestConfig
from contentcast.models import DailyCastLimit
from contentcast.models.base import utcnow
from contentcast.services.reset_clock import current_ledger_day, seconds_until_next_reset
from contentcast.storage import Storage

logger = structlog.get_logger(__name__)


class CastLimitService:
    """Per (user, ledger day) cast counter capped at ``MAX_DAILY_CASTS``."""

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = utcnow):
        self.storage = storage
        self.clock = clock
        self.logger = logger.bind(service="cast_limit_service")

    def ledger_day(self) -> str:
        return current_ledger_day(self.clock())

    def reset_in(self) -> int:
        return seconds_until_next_reset(self.clock())

    async def get_count(self, user_id: str, ledger_day: str) -> int:
        record = await self.storage.get_daily_cast_limit(user_id, ledger_day)
        return record.cast_count if record else 0

    async def can_cast(self, user_id: str) -> bool:
        record = await self.storage.get_daily_cast_limit(user_id, self.ledger_day())
        if not record:
            return True
        return record.cast_count < QuestConfig.MAX_DAILY_CASTS

    async def increment(self, user_id: str) -> Dict[str, Any]:
        """
        Add one cast for the current ledger day.

        Always writes, even past the cap; check ``can_cast`` first.
        """
        day = self.ledger_day()
        record = await self.storage.get_daily_cast_limit(user_id, day)

        if record:
            record.cast_count = (record.cast_count or 0) + 1
        else:
            record = DailyCastLimit(user_id=user_id, date=day, cast_count=1)

        record = await self.storage.save_daily_cast_limit(record)
        count = record.cast_count

        self.logger.info("Cast counted", user_id=user_id, date=day, count=count)

        return {
            "count": count,
            "can_cast": count < QuestConfig.MAX_DAILY_CASTS,
            "reset_in": self.reset_in(),
        }

    async def get_status(self, user_id: str) -> Dict[str, Any]:
        """Snapshot for the cast-limits endpoint."""
        day = self.ledger_day()
        count = await self.get_count(user_id, day)
        can_cast = await self.can_cast(user_id)
        return {
            "date": day,
            "count": count,
            "remaining": max(0, QuestConfig.MAX_DAILY_CASTS - count),
            "max_daily_casts": QuestConfig.MAX_DAILY_CASTS,
            "can_cast": can_cast,
            "limit_reached": not can_cast,
            "reset_in": self.reset_in(),
        }


async def get_cast_limit_service(
    storage: Storage,
    clock: Callable[[], datetime] = utcnow
) -> CastLimitService:
    """Get cast limit service instance."""
    return CastLimitService(storage, clock)
