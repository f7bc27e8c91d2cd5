from datetime import datetime
from typing import Optional

from sqlalchemy import String, Text, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from .base import BaseModel, utcnow


class Feedback(BaseModel):
    """User feedback submitted from the app."""

    __tablename__ = "feedback"

    type: Mapped[str] = mapped_column(
        String(20),
        comment="bug, feature, general or compliment"
    )
    message: Mapped[str] = mapped_column(Text)
    user_agent: Mapped[Optional[str]] = mapped_column(Text)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow
    )
