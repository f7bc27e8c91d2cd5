"""
In-process storage used for local development and tests.

Rows are the same model classes the database backend uses, kept in plain
dictionaries. Column defaults are applied on insert the way a flush would.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional, Sequence, Tuple

from contentcast.models import (
    User, ContentDraft, Feedback, UserQuest, QuestCompletion, DailyCastLimit, SbtBadge
)
from contentcast.models.base import utcnow


def _apply_defaults(obj) -> None:
    for column in obj.__table__.columns:
        if getattr(obj, column.key, None) is not None or column.default is None:
            continue
        default = column.default
        if default.is_scalar:
            setattr(obj, column.key, default.arg)
        elif default.is_callable:
            setattr(obj, column.key, default.arg(None))


def _touch(obj) -> None:
    if hasattr(obj, "updated_at"):
        obj.updated_at = utcnow()


class MemoryStorage:
    """Storage implementation for the ``memory`` backend."""

    def __init__(self):
        self.users: Dict[str, User] = {}
        self.drafts: Dict[str, ContentDraft] = {}
        self.feedback: Dict[str, Feedback] = {}
        self.user_quests: Dict[Tuple[str, str], UserQuest] = {}
        self.completions: List[QuestCompletion] = []
        self.cast_limits: Dict[Tuple[str, str], DailyCastLimit] = {}
        self.sbt_badges: Dict[str, SbtBadge] = {}

    # Users

    async def get_user(self, user_id: str) -> Optional[User]:
        return self.users.get(user_id)

    async def get_user_by_wallet(self, wallet_address: str) -> Optional[User]:
        return next(
            (u for u in self.users.values() if u.wallet_address == wallet_address),
            None
        )

    async def list_users(self) -> List[User]:
        return list(self.users.values())

    async def create_user(self, **fields: Any) -> User:
        user = User(**fields)
        _apply_defaults(user)
        self.users[user.id] = user
        return user

    async def update_user(self, user: User, updates: Dict[str, Any]) -> User:
        for key, value in updates.items():
            setattr(user, key, value)
        _touch(user)
        return user

    # Drafts

    async def get_draft(self, draft_id: str) -> Optional[ContentDraft]:
        return self.drafts.get(draft_id)

    async def list_drafts_by_user(self, user_id: str) -> List[ContentDraft]:
        drafts = [d for d in self.drafts.values() if d.user_id == user_id]
        return sorted(drafts, key=lambda d: d.created_at, reverse=True)

    async def create_draft(self, **fields: Any) -> ContentDraft:
        draft = ContentDraft(**fields)
        _apply_defaults(draft)
        self.drafts[draft.id] = draft
        return draft

    async def update_draft(self, draft: ContentDraft, updates: Dict[str, Any]) -> ContentDraft:
        for key, value in updates.items():
            setattr(draft, key, value)
        _touch(draft)
        return draft

    async def delete_draft(self, draft: ContentDraft) -> None:
        self.drafts.pop(draft.id, None)

    # Feedback

    async def create_feedback(self, **fields: Any) -> Feedback:
        item = Feedback(**fields)
        _apply_defaults(item)
        self.feedback[item.id] = item
        return item

    # Quest ledger

    async def get_user_quest(self, user_id: str, quest_type: str) -> Optional[UserQuest]:
        return self.user_quests.get((user_id, quest_type))

    async def list_user_quests(
        self, user_id: str, quest_types: Optional[Sequence[str]] = None
    ) -> List[UserQuest]:
        return [
            q for (uid, qtype), q in self.user_quests.items()
            if uid == user_id and (quest_types is None or qtype in quest_types)
        ]

    async def list_all_user_quests(self) -> List[UserQuest]:
        return list(self.user_quests.values())

    async def save_user_quest(self, quest: UserQuest) -> UserQuest:
        key = (quest.user_id, quest.quest_type)
        if key in self.user_quests:
            _touch(quest)
        else:
            _apply_defaults(quest)
        self.user_quests[key] = quest
        return quest

    async def add_quest_completion(self, completion: QuestCompletion) -> QuestCompletion:
        _apply_defaults(completion)
        self.completions.append(completion)
        return completion

    async def list_quest_completions(
        self, user_id: str, quest_types: Sequence[str], since: datetime
    ) -> List[QuestCompletion]:
        found = [
            c for c in self.completions
            if c.user_id == user_id and c.quest_type in quest_types and c.completed_at >= since
        ]
        return sorted(found, key=lambda c: c.completed_at, reverse=True)

    # Cast limits

    async def get_daily_cast_limit(self, user_id: str, date: str) -> Optional[DailyCastLimit]:
        return self.cast_limits.get((user_id, date))

    async def save_daily_cast_limit(self, limit: DailyCastLimit) -> DailyCastLimit:
        key = (limit.user_id, limit.date)
        if key in self.cast_limits:
            _touch(limit)
        else:
            _apply_defaults(limit)
        self.cast_limits[key] = limit
        return limit

    # SBT badges

    async def get_sbt_badge(self, user_id: str) -> Optional[SbtBadge]:
        return self.sbt_badges.get(user_id)

    async def list_sbt_badges(self) -> List[SbtBadge]:
        return list(self.sbt_badges.values())

    async def save_sbt_badge(self, badge: SbtBadge) -> SbtBadge:
        if badge.user_id in self.sbt_badges:
            _touch(badge)
        else:
            _apply_defaults(badge)
        self.sbt_badges[badge.user_id] = badge
        return badge

    # Writes are applied immediately; there is nothing to commit or undo.

    async def commit(self) -> None:
        return None

    async def rollback(self) -> None:
        return None

    async def ping(self) -> bool:
        return True
