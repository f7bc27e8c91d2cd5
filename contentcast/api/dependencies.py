"""
API dependencies for FastAPI endpoints.
Provides storage selection, the clock and external service clients.
"""

from datetime import datetime
from typing import AsyncGenerator, Callable

from fastapi import Path, Request

import structlog

from contentcast.core.database import sql_storage
from contentcast.core.exceptions import ValidationError
from contentcast.models.base import utcnow
from contentcast.services.content_service import ContentService, content_service
from contentcast.services.farcaster_service import FarcasterService, farcaster_service
from contentcast.services.pexels_service import PexelsService, pexels_service
from contentcast.storage import Storage
from contentcast.utils.validation import validate_wallet_address


logger = structlog.get_logger(__name__)


async def get_storage(request: Request) -> AsyncGenerator[Storage, None]:
    """
    Storage backend chosen at start-up.

    The memory backend lives on ``app.state``; otherwise each request gets
    its own database session.
    """
    memory = getattr(request.app.state, "memory_storage", None)
    if memory is not None:
        yield memory
        return

    async with sql_storage() as storage:
        yield storage


def get_clock() -> Callable[[], datetime]:
    return utcnow


def get_farcaster_service() -> FarcasterService:
    return farcaster_service


def get_pexels_service() -> PexelsService:
    return pexels_service


def get_content_service() -> ContentService:
    return content_service


async def validate_wallet_param(
    wallet_address: str = Path(..., description="EVM wallet address")
) -> str:
    """Validate wallet address path parameter."""
    if not validate_wallet_address(wallet_address):
        logger.warning("Invalid wallet address provided", wallet=wallet_address)
        raise ValidationError("Invalid wallet address format", {"wallet": wallet_address})
    return wallet_address
