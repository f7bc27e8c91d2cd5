"""
User schemas.
"""

from datetime import datetime
from typing import Optional

from pydantic import Field, field_validator

from contentcast.utils.validation import validate_wallet_address
from .common import CamelModel


class UserProfileFields(CamelModel):
    farcaster_fid: Optional[str] = None
    farcaster_username: Optional[str] = None
    farcaster_display_name: Optional[str] = None
    farcaster_avatar: Optional[str] = None
    farcaster_bio: Optional[str] = None
    base_username: Optional[str] = None
    ens_username: Optional[str] = None
    follower_count: Optional[int] = Field(default=None, ge=0)
    following_count: Optional[int] = Field(default=None, ge=0)
    x_url: Optional[str] = None
    github_url: Optional[str] = None
    farcaster_url: Optional[str] = None
    neynar_score: Optional[int] = None


class UserCreateRequest(UserProfileFields):
    wallet_address: str = Field(description="EVM wallet address")

    @field_validator("wallet_address")
    @classmethod
    def check_wallet(cls, v: str) -> str:
        if not validate_wallet_address(v):
            raise ValueError("Invalid wallet address format")
        return v


class UserUpdateRequest(UserProfileFields):
    """Partial update; only fields present in the body are applied."""


class UserResponse(UserProfileFields):
    id: str
    wallet_address: str
    created_at: Optional[datetime] = None
