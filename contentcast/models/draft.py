"""
Content draft model: generated cast text plus the chosen image.
"""

from typing import Optional, Dict, Any

from sqlalchemy import String, Boolean, Text, ForeignKey, JSON
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, TimestampMixin


class ContentDraft(BaseModel, TimestampMixin):
    """A cast being prepared by a user."""

    __tablename__ = "content_drafts"

    user_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("users.id"),
        index=True,
        comment="Owner user ID"
    )

    topic: Mapped[str] = mapped_column(Text, comment="Requested topic")
    content_type: Mapped[str] = mapped_column(String(50), comment="Post format")
    tone: Mapped[str] = mapped_column(String(50), comment="Requested tone")

    generated_content: Mapped[Optional[str]] = mapped_column(
        Text,
        comment="Text produced by the LLM (possibly edited)"
    )

    selected_image: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON,
        comment="{url, alt, photographer, source}"
    )

    is_published: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        comment="Whether the cast hash is known"
    )

    farcaster_cast_hash: Mapped[Optional[str]] = mapped_column(String(100))

    def __repr__(self) -> str:
        return f"<ContentDraft(id={self.id}, user={self.user_id})>"
