"""
Leaderboard API routes.
"""

from datetime import datetime
from typing import Callable, List, Optional

from fastapi import APIRouter, Depends, Query

import structlog

from contentcast.api.dependencies import get_storage, get_clock
from contentcast.api.schemas.leaderboards import LeaderboardEntry
from contentcast.services.leaderboard_service import get_leaderboard_service
from contentcast.storage import Storage

router = APIRouter(tags=["Leaderboard"])
logger = structlog.get_logger(__name__)


@router.get(
    "",
    response_model=List[LeaderboardEntry],
    summary="Get Leaderboard",
    description="Users with points, ranked by lifetime quest points"
)
async def get_leaderboard(
    limit: Optional[int] = Query(None, ge=1, le=1000, description="Number of entries to return"),
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    leaderboard_service = await get_leaderboard_service(storage, clock)
    entries = await leaderboard_service.get_leaderboard(limit)
    return [LeaderboardEntry(**entry) for entry in entries]
