"""
Storage capability interface.

Services talk to persistence only through these primitives. Two backends
implement them: ``SqlStorage`` over an async SQLAlchemy session and
``MemoryStorage`` over in-process dictionaries.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Protocol, Sequence

from contentcast.models import (
    User, ContentDraft, Feedback, UserQuest, QuestCompletion, DailyCastLimit, SbtBadge
)


class Storage(Protocol):
    # Users
    async def get_user(self, user_id: str) -> Optional[User]: ...

    async def get_user_by_wallet(self, wallet_address: str) -> Optional[User]: ...

    async def list_users(self) -> List[User]: ...

    async def create_user(self, **fields: Any) -> User: ...

    async def update_user(self, user: User, updates: Dict[str, Any]) -> User: ...

    # Drafts
    async def get_draft(self, draft_id: str) -> Optional[ContentDraft]: ...

    async def list_drafts_by_user(self, user_id: str) -> List[ContentDraft]: ...

    async def create_draft(self, **fields: Any) -> ContentDraft: ...

    async def update_draft(
        self, draft: ContentDraft, updates: Dict[str, Any]
    ) -> ContentDraft: ...

    async def delete_draft(self, draft: ContentDraft) -> None: ...

    # Feedback
    async def create_feedback(self, **fields: Any) -> Feedback: ...

    # Quest ledger
    async def get_user_quest(self, user_id: str, quest_type: str) -> Optional[UserQuest]: ...

    async def list_user_quests(
        self, user_id: str, quest_types: Optional[Sequence[str]] = None
    ) -> List[UserQuest]: ...

    async def list_all_user_quests(self) -> List[UserQuest]: ...

    async def save_user_quest(self, quest: UserQuest) -> UserQuest: ...

    async def add_quest_completion(self, completion: QuestCompletion) -> QuestCompletion: ...

    async def list_quest_completions(
        self, user_id: str, quest_types: Sequence[str], since: datetime
    ) -> List[QuestCompletion]: ...

    # Cast limits
    async def get_daily_cast_limit(self, user_id: str, date: str) -> Optional[DailyCastLimit]: ...

    async def save_daily_cast_limit(self, limit: DailyCastLimit) -> DailyCastLimit: ...

    # SBT badges
    async def get_sbt_badge(self, user_id: str) -> Optional[SbtBadge]: ...

    async def list_sbt_badges(self) -> List[SbtBadge]: ...

    async def save_sbt_badge(self, badge: SbtBadge) -> SbtBadge: ...

    # Unit of work
    async def commit(self) -> None: ...

    async def rollback(self) -> None: ...

    async def ping(self) -> bool: ...
