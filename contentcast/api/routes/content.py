"""
Content generation and image search API routes.
"""

from fastapi import APIRouter, Depends, Query

import structlog

from contentcast.api.dependencies import get_content_service, get_pexels_service
from contentcast.api.schemas.content import (
    GenerateContentRequest, GenerateContentResponse, ShortAnswerResponse,
    ImageSearchResponse, SuggestSearchRequest, SuggestSearchResponse
)
from contentcast.core.exceptions import ValidationError
from contentcast.services.content_service import ContentService
from contentcast.services.pexels_service import PexelsService

router = APIRouter(tags=["Content"])
images_router = APIRouter(tags=["Images"])
logger = structlog.get_logger(__name__)


@router.post(
    "/content/generate",
    response_model=GenerateContentResponse,
    summary="Generate Post",
    description="Draft a cast for a topic, format and tone"
)
async def generate_post(
    request: GenerateContentRequest,
    content: ContentService = Depends(get_content_service)
):
    text = await content.generate_post(request.topic, request.content_type, request.tone)
    return GenerateContentResponse(content=text)


@router.get(
    "/generate",
    response_model=ShortAnswerResponse,
    summary="Short Answer",
    description="Short answer to a prompt with Turkish/English auto-detection"
)
async def generate_short(
    prompt: str = Query("", description="User prompt"),
    lang: str = Query("", description="tr, en, or empty to auto-detect"),
    content: ContentService = Depends(get_content_service)
):
    return ShortAnswerResponse(**await content.generate_short(prompt, lang))


@images_router.get(
    "/search",
    response_model=ImageSearchResponse,
    summary="Search Images"
)
async def search_images(
    q: str = Query(..., min_length=1, description="Search query"),
    per_page: int = Query(12, ge=1, le=80),
    pexels: PexelsService = Depends(get_pexels_service)
):
    return ImageSearchResponse(photos=await pexels.search_photos(q, per_page))


@images_router.get(
    "/featured",
    response_model=ImageSearchResponse,
    summary="Featured Images",
    description="A mix of crypto, landscape, AI and meme photos"
)
async def featured_images(
    pexels: PexelsService = Depends(get_pexels_service)
):
    return ImageSearchResponse(photos=await pexels.get_featured_photos())


@images_router.post(
    "/suggest-search",
    response_model=SuggestSearchResponse,
    summary="Suggest Image Search",
    description="Suggest a stock photo search term for a piece of content"
)
async def suggest_image_search(
    request: SuggestSearchRequest,
    content: ContentService = Depends(get_content_service)
):
    if not request.content.strip():
        raise ValidationError("Content is required")
    return SuggestSearchResponse(search_term=await content.suggest_image_search(request.content))
