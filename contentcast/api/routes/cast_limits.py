"""
Daily cast limit API routes.
"""

from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends, Path

import structlog

from contentcast.api.dependencies import get_storage, get_clock
from contentcast.api.schemas.cast_limits import CastLimitResponse
from contentcast.core.config import QuestConfig
from contentcast.core.exceptions import DailyCastLimitError, UserNotFoundError
from contentcast.services.cast_limit_service import get_cast_limit_service
from contentcast.storage import Storage

router = APIRouter(tags=["Cast Limits"])
logger = structlog.get_logger(__name__)


@router.get(
    "/{user_id}",
    response_model=CastLimitResponse,
    summary="Get Daily Cast Limit",
    description="Casts used in the current ledger day and time until reset"
)
async def get_cast_limit(
    user_id: str = Path(..., description="User ID"),
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    cast_limit_service = await get_cast_limit_service(storage, clock)
    return CastLimitResponse(**await cast_limit_service.get_status(user_id))


@router.post(
    "/{user_id}/increment",
    response_model=CastLimitResponse,
    summary="Count A Cast",
    description="Count one cast against today's limit; 429 once the limit is reached"
)
async def increment_cast_limit(
    user_id: str = Path(..., description="User ID"),
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    if not await storage.get_user(user_id):
        raise UserNotFoundError(user_id)

    cast_limit_service = await get_cast_limit_service(storage, clock)
    if not await cast_limit_service.can_cast(user_id):
        raise DailyCastLimitError(QuestConfig.MAX_DAILY_CASTS)

    await cast_limit_service.increment(user_id)
    await storage.commit()

    return CastLimitResponse(**await cast_limit_service.get_status(user_id))
