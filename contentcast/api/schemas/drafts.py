"""
Content draft and cast publish schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field

from .common import CamelModel


class SelectedImage(CamelModel):
    url: str
    alt: Optional[str] = None
    photographer: Optional[str] = None
    source: Optional[str] = None


class DraftCreateRequest(CamelModel):
    user_id: str = Field(min_length=1)
    topic: str = Field(min_length=1)
    content_type: str = Field(min_length=1)
    tone: str = Field(min_length=1)
    generated_content: Optional[str] = None
    selected_image: Optional[SelectedImage] = None
    is_published: bool = False
    farcaster_cast_hash: Optional[str] = None


class DraftUpdateRequest(CamelModel):
    topic: Optional[str] = None
    content_type: Optional[str] = None
    tone: Optional[str] = None
    generated_content: Optional[str] = None
    selected_image: Optional[SelectedImage] = None
    is_published: Optional[bool] = None
    farcaster_cast_hash: Optional[str] = None


class DraftResponse(CamelModel):
    id: str
    user_id: str
    topic: str
    content_type: str
    tone: str
    generated_content: Optional[str] = None
    selected_image: Optional[SelectedImage] = None
    is_published: bool = False
    farcaster_cast_hash: Optional[str] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None


class PublishCastRequest(CamelModel):
    draft_id: str = Field(min_length=1, description="Draft to publish")
    image_url: Optional[str] = None


class DailyCastInfo(CamelModel):
    count: int
    remaining: int
    can_cast: bool
    reset_in: int = Field(description="Seconds until the next daily reset")


class PublishCastResponse(CamelModel):
    cast_content: str
    farcaster_url: str
    ready: bool
    message: str
    daily_cast_info: DailyCastInfo
