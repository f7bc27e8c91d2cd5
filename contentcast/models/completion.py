"""
Append-only log of quest completions.
"""

from datetime import datetime
from decimal import Decimal

from sqlalchemy import String, DECIMAL, ForeignKey, DateTime, Index
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel


class QuestCompletion(BaseModel):
    """A single completion event; ``UserQuest`` holds the running totals."""

    __tablename__ = "quest_completions"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        comment="Owner user ID"
    )

    quest_type: Mapped[str] = mapped_column(String(50))

    points: Mapped[Decimal] = mapped_column(
        DECIMAL(10, 2),
        comment="Points credited by this completion"
    )

    completed_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        comment="Completion time"
    )

    __table_args__ = (
        Index("ix_quest_completions_user_completed", "user_id", "completed_at"),
    )
