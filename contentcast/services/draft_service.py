"""
Content drafts and the cast publish flow.
"""

from datetime import datetime
from typing import Any, Callable, Dict, List, Optional

import structlog

from contentcast.core.config import QuestConfig
from contentcast.core.exceptions import (
    DailyCastLimitError, DraftNotFoundError, ValidationError
)
from contentcast.models import ContentDraft
from contentcast.models.base import utcnow
from contentcast.services.cast_limit_service import CastLimitService
from contentcast.services.farcaster_service import FarcasterService, farcaster_service
from contentcast.services.quest_service import QuestService
from contentcast.storage import Storage

logger = structlog.get_logger(__name__)

# Placeholder fid for users who have not linked Farcaster yet
DEMO_FID = "123456"


class DraftService:
    """Draft CRUD plus publishing through a compose link."""

    def __init__(
        self,
        storage: Storage,
        clock: Callable[[], datetime] = utcnow,
        farcaster: Optional[FarcasterService] = None
    ):
        self.storage = storage
        self.cast_limits = CastLimitService(storage, clock)
        self.quests = QuestService(storage, clock)
        self.farcaster = farcaster or farcaster_service
        self.logger = logger.bind(service="draft_service")

    async def create(self, **fields: Any) -> ContentDraft:
        draft = await self.storage.create_draft(**fields)
        await self.storage.commit()
        return draft

    async def list_for_user(self, user_id: str) -> List[ContentDraft]:
        return await self.storage.list_drafts_by_user(user_id)

    async def get(self, draft_id: str) -> ContentDraft:
        draft = await self.storage.get_draft(draft_id)
        if not draft:
            raise DraftNotFoundError(draft_id)
        return draft

    async def update(self, draft_id: str, updates: Dict[str, Any]) -> ContentDraft:
        draft = await self.get(draft_id)
        draft = await self.storage.update_draft(draft, updates)
        await self.storage.commit()
        return draft

    async def delete(self, draft_id: str) -> None:
        draft = await self.get(draft_id)
        await self.storage.delete_draft(draft)
        await self.storage.commit()

    async def publish(self, draft_id: str, image_url: Optional[str] = None) -> Dict[str, Any]:
        """
        Prepare a cast for the user to post and count it against today's cap.

        The cast counter and the daily_cast credit are committed separately;
        a failed credit is logged and the cast still goes through.
        """
        draft = await self.get(draft_id)

        user = await self.storage.get_user(draft.user_id)
        if not user:
            raise ValidationError("User not found", {"user_id": draft.user_id})

        if not await self.cast_limits.can_cast(user.id):
            raise DailyCastLimitError(QuestConfig.MAX_DAILY_CASTS)

        fid = user.farcaster_fid
        if not fid:
            self.logger.info("Using demo fid for cast", user_id=user.id)
            fid = DEMO_FID

        prepared = self.farcaster.prepare_cast(fid, draft.generated_content or "", image_url)

        cast_info = await self.cast_limits.increment(user.id)
        await self.storage.commit()

        try:
            await self.quests.record_completion(
                user.id,
                QuestConfig.DAILY_CAST,
                QuestConfig.points_for(QuestConfig.DAILY_CAST)
            )
            await self.storage.commit()
        except Exception as e:
            await self.storage.rollback()
            self.logger.warning("Failed to credit daily cast quest", user_id=user.id, error=str(e))

        # Published only once the user posts it and reports the hash
        await self.storage.update_draft(
            draft, {"is_published": False, "farcaster_cast_hash": None}
        )
        await self.storage.commit()

        return {
            **prepared,
            "message": "Cast prepared for manual posting to Farcaster",
            "daily_cast_info": {
                "count": cast_info["count"],
                "remaining": max(0, QuestConfig.MAX_DAILY_CASTS - cast_info["count"]),
                "can_cast": cast_info["can_cast"],
                "reset_in": cast_info["reset_in"],
            },
        }


async def get_draft_service(
    storage: Storage,
    clock: Callable[[], datetime] = utcnow
) -> DraftService:
    """Get draft service instance."""
    return DraftService(storage, clock)
