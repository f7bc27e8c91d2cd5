"""
Quest ledger models: per (user, quest type) completion records.
"""

from datetime import datetime
from typing import Optional
from decimal import Decimal

from sqlalchemy import (
    String, Integer, Boolean, DECIMAL, ForeignKey, DateTime, UniqueConstraint, Index
)
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, TimestampMixin


class UserQuest(BaseModel, TimestampMixin):
    """
    One row per (user, quest type).

    Points accumulate and the completion count grows on every completion.
    For one-time quests, ``is_completed`` closes the record for good.
    """

    __tablename__ = "user_quests"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        comment="Owner user ID"
    )

    quest_type: Mapped[str] = mapped_column(
        String(50),
        comment="Quest type tag, e.g. daily_checkin"
    )

    last_completed_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        comment="Time of the most recent completion"
    )

    total_points: Mapped[Decimal] = mapped_column(
        DECIMAL(10, 2),
        default=Decimal("0"),
        comment="Cumulative points earned from this quest type"
    )

    completion_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        comment="Number of completions"
    )

    is_one_time: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        comment="Bonus quest that can only be completed once"
    )

    is_completed: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        comment="One-time quest completion status"
    )

    __table_args__ = (
        UniqueConstraint("user_id", "quest_type", name="uq_user_quests_user_quest_type"),
        Index("ix_user_quests_user_id", "user_id"),
    )

    def __repr__(self) -> str:
        return (
            f"<UserQuest(user={self.user_id}, type={self.quest_type}, "
            f"count={self.completion_count})>"
        )
