"""
Soulbound badge model. One row per user, accumulating mints.
"""

from datetime import datetime
from decimal import Decimal
from typing import Optional, Dict, Any

from sqlalchemy import String, Integer, DECIMAL, ForeignKey, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, TimestampMixin


class SbtBadge(BaseModel, TimestampMixin):
    """Off-chain record of a user's SBT mints."""

    __tablename__ = "sbt_badges"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        unique=True,
        comment="Owner user ID"
    )

    mint_count: Mapped[int] = mapped_column(
        Integer,
        default=0,
        comment="Number of mints recorded"
    )

    total_paid: Mapped[Decimal] = mapped_column(
        DECIMAL(18, 6),
        default=Decimal("0"),
        comment="Sum of mint payments in ETH"
    )

    badge_metadata: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON,
        comment="Token metadata stored on first mint"
    )

    last_minted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        comment="Time of the most recent mint"
    )

    def __repr__(self) -> str:
        return f"<SbtBadge(user={self.user_id}, mints={self.mint_count})>"
