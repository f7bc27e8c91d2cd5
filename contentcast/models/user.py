"""
User model keyed by EVM wallet address.
"""

from typing import Optional

from sqlalchemy import String, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, TimestampMixin


class User(BaseModel, TimestampMixin):
    """Mini-app user with optional linked Farcaster identity."""

    __tablename__ = "users"

    wallet_address: Mapped[str] = mapped_column(
        String(42),
        unique=True,
        index=True,
        comment="EVM wallet address (0x + 40 hex)"
    )

    # Farcaster identity
    farcaster_fid: Mapped[Optional[str]] = mapped_column(
        String(32),
        comment="Farcaster id"
    )

    farcaster_username: Mapped[Optional[str]] = mapped_column(
        String(100),
        comment="Farcaster username"
    )

    farcaster_display_name: Mapped[Optional[str]] = mapped_column(
        String(255),
        comment="Farcaster display name"
    )

    farcaster_avatar: Mapped[Optional[str]] = mapped_column(
        Text,
        comment="Profile picture URL"
    )

    farcaster_bio: Mapped[Optional[str]] = mapped_column(
        Text,
        comment="Profile bio"
    )

    base_username: Mapped[Optional[str]] = mapped_column(String(100))
    ens_username: Mapped[Optional[str]] = mapped_column(String(255))

    follower_count: Mapped[Optional[int]] = mapped_column(
        Integer,
        default=0,
        comment="Farcaster follower count"
    )

    following_count: Mapped[Optional[int]] = mapped_column(
        Integer,
        default=0,
        comment="Farcaster following count"
    )

    # Profile links
    x_url: Mapped[Optional[str]] = mapped_column(Text)
    github_url: Mapped[Optional[str]] = mapped_column(Text)
    farcaster_url: Mapped[Optional[str]] = mapped_column(Text)

    neynar_score: Mapped[Optional[int]] = mapped_column(
        Integer,
        comment="Neynar user score scaled to 0-100"
    )

    def __repr__(self) -> str:
        return f"<User(id={self.id}, wallet={self.wallet_address})>"
