"""
Database models for ContentCast backend.

Users, content drafts and feedback, plus the quest ledger,
daily cast counters and SBT badges.
"""

from .base import Base, BaseModel, TimestampMixin
from .user import User
from .draft import ContentDraft
from .feedback import Feedback
from .quest import UserQuest
from .completion import QuestCompletion
from .cast_limit import DailyCastLimit
from .sbt import SbtBadge

__all__ = [
    "Base",
    "BaseModel",
    "TimestampMixin",
    "User",
    "ContentDraft",
    "Feedback",
    "UserQuest",
    "QuestCompletion",
    "DailyCastLimit",
    "SbtBadge",
]
