"""
Content generation, image search and Farcaster lookup schemas.
"""

from typing import Any, Dict, List, Literal, Optional

from pydantic import Field

from .common import CamelModel


class GenerateContentRequest(CamelModel):
    topic: str = Field(min_length=1)
    content_type: str = Field(min_length=1)
    tone: str = Field(min_length=1)


class GenerateContentResponse(CamelModel):
    content: str


class ShortAnswerResponse(CamelModel):
    ok: bool = True
    provider: str
    model: str
    lang: str
    text: str
    content: str
    result: str
    message: str


class ImageSearchResponse(CamelModel):
    # Pexels photo objects are passed through unchanged
    photos: List[Dict[str, Any]]


class SuggestSearchRequest(CamelModel):
    content: str = Field(min_length=1)


class SuggestSearchResponse(CamelModel):
    search_term: str


class FarcasterUserResponse(CamelModel):
    fid: Optional[str] = None
    username: Optional[str] = None
    display_name: Optional[str] = None
    pfp_url: Optional[str] = None
    bio: Optional[str] = None
    follower_count: Optional[int] = None
    following_count: Optional[int] = None
    verified_addresses: List[str] = Field(default_factory=list)
    neynar_score: Optional[int] = None


class FeedbackRequest(CamelModel):
    type: Literal["bug", "feature", "general", "compliment"]
    message: str = Field(min_length=1)


class FeedbackResponse(CamelModel):
    success: bool = True
    message: str
    id: str
