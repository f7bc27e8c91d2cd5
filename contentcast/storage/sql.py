"""
Postgres-backed storage over an async SQLAlchemy session.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy import select, text
from sqlalchemy.ext.asyncio import AsyncSession

from contentcast.core.logging import get_logger
from contentcast.models import (
    User, ContentDraft, Feedback, UserQuest, QuestCompletion, DailyCastLimit, SbtBadge
)

logger = get_logger(__name__)


class SqlStorage:
    """Storage implementation for the ``database`` backend."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def _add(self, obj):
        self.session.add(obj)
        await self.session.flush()
        return obj

    # ========================================
    # Users
    # ========================================

    async def get_user(self, user_id: str) -> Optional[User]:
        return await self.session.get(User, user_id)

    async def get_user_by_wallet(self, wallet_address: str) -> Optional[User]:
        result = await self.session.execute(
            select(User).where(User.wallet_address == wallet_address)
        )
        return result.scalar_one_or_none()

    async def list_users(self) -> List[User]:
        result = await self.session.execute(select(User).order_by(User.created_at))
        return list(result.scalars().all())

    async def create_user(self, **fields: Any) -> User:
        return await self._add(User(**fields))

    async def update_user(self, user: User, updates: Dict[str, Any]) -> User:
        for key, value in updates.items():
            setattr(user, key, value)
        return await self._add(user)

    # ========================================
    # Drafts
    # ========================================

    async def get_draft(self, draft_id: str) -> Optional[ContentDraft]:
        return await self.session.get(ContentDraft, draft_id)

    async def list_drafts_by_user(self, user_id: str) -> List[ContentDraft]:
        result = await self.session.execute(
            select(ContentDraft)
            .where(ContentDraft.user_id == user_id)
            .order_by(ContentDraft.created_at.desc())
        )
        return list(result.scalars().all())

    async def create_draft(self, **fields: Any) -> ContentDraft:
        return await self._add(ContentDraft(**fields))

    async def update_draft(self, draft: ContentDraft, updates: Dict[str, Any]) -> ContentDraft:
        for key, value in updates.items():
            setattr(draft, key, value)
        return await self._add(draft)

    async def delete_draft(self, draft: ContentDraft) -> None:
        await self.session.delete(draft)
        await self.session.flush()

    # ========================================
    # Feedback
    # ========================================

    async def create_feedback(self, **fields: Any) -> Feedback:
        return await self._add(Feedback(**fields))

    # ========================================
    # Quest ledger
    # ========================================

    async def get_user_quest(self, user_id: str, quest_type: str) -> Optional[UserQuest]:
        result = await self.session.execute(
            select(UserQuest).where(
                UserQuest.user_id == user_id,
                UserQuest.quest_type == quest_type,
            )
        )
        return result.scalar_one_or_none()

    async def list_user_quests(
        self, user_id: str, quest_types: Optional[Sequence[str]] = None
    ) -> List[UserQuest]:
        stmt = select(UserQuest).where(UserQuest.user_id == user_id)
        if quest_types is not None:
            stmt = stmt.where(UserQuest.quest_type.in_(list(quest_types)))
        result = await self.session.execute(stmt.order_by(UserQuest.created_at))
        return list(result.scalars().all())

    async def list_all_user_quests(self) -> List[UserQuest]:
        result = await self.session.execute(select(UserQuest).order_by(UserQuest.created_at))
        return list(result.scalars().all())

    async def save_user_quest(self, quest: UserQuest) -> UserQuest:
        return await self._add(quest)

    async def add_quest_completion(self, completion: QuestCompletion) -> QuestCompletion:
        return await self._add(completion)

    async def list_quest_completions(
        self, user_id: str, quest_types: Sequence[str], since: datetime
    ) -> List[QuestCompletion]:
        result = await self.session.execute(
            select(QuestCompletion)
            .where(
                QuestCompletion.user_id == user_id,
                QuestCompletion.quest_type.in_(list(quest_types)),
                QuestCompletion.completed_at >= since,
            )
            .order_by(QuestCompletion.completed_at.desc())
        )
        return list(result.scalars().all())

    # ========================================
    # Cast limits
    # ========================================

    async def get_daily_cast_limit(self, user_id: str, date: str) -> Optional[DailyCastLimit]:
        result = await self.session.execute(
            select(DailyCastLimit).where(
                DailyCastLimit.user_id == user_id,
                DailyCastLimit.date == date,
            )
        )
        return result.scalar_one_or_none()

    async def save_daily_cast_limit(self, limit: DailyCastLimit) -> DailyCastLimit:
        return await self._add(limit)

    # ========================================
    # SBT badges
    # ========================================

    async def get_sbt_badge(self, user_id: str) -> Optional[SbtBadge]:
        result = await self.session.execute(
            select(SbtBadge).where(SbtBadge.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def list_sbt_badges(self) -> List[SbtBadge]:
        result = await self.session.execute(select(SbtBadge))
        return list(result.scalars().all())

    async def save_sbt_badge(self, badge: SbtBadge) -> SbtBadge:
        return await self._add(badge)

    # ========================================
    # Unit of work
    # ========================================

    async def commit(self) -> None:
        await self.session.commit()

    async def rollback(self) -> None:
        await self.session.rollback()

    async def ping(self) -> bool:
        try:
            await self.session.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.error("Storage ping failed", error=str(e))
            return False
