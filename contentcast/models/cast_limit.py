"""
Per-day cast counter model.
"""

from sqlalchemy import String, Integer, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, TimestampMixin


class DailyCastLimit(BaseModel, TimestampMixin):
    """Number of casts a user published during one ledger day."""

    __tablename__ = "daily_cast_limits"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        index=True,
        comment="Owner user ID"
    )

    date: Mapped[str] = mapped_column(
        String(10),
        comment="Ledger day, YYYY-MM-DD"
    )

    # May exceed the daily cap; callers compare against it.
    cast_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        comment="Casts counted for this ledger day"
    )

    __table_args__ = (
        UniqueConstraint("user_id", "date", name="uq_daily_cast_limits_user_date"),
    )

    def __repr__(self) -> str:
        return f"<DailyCastLimit(user={self.user_id}, date={self.date}, count={self.cast_count})>"
