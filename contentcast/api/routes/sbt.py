"""
SBT badge and DEGEN reward API routes.
"""

from datetime import datetime
from typing import Callable

from fastapi import APIRouter, Depends, Path

import structlog

from contentcast.api.dependencies import get_storage, get_clock
from contentcast.api.schemas.sbt import (
    SbtMintRequest, SbtMintResponse, SbtBadgeResponse,
    ClaimDegenRequest, ClaimDegenResponse
)
from contentcast.services.rewards_service import get_rewards_service
from contentcast.services.sbt_service import get_sbt_service
from contentcast.storage import Storage

router = APIRouter(tags=["SBT"])
rewards_router = APIRouter(tags=["Rewards"])
logger = structlog.get_logger(__name__)


@router.post(
    "/mint",
    response_model=SbtMintResponse,
    summary="Record SBT Mint",
    description="Record a confirmed SBT mint transaction and credit the mint reward"
)
async def mint_sbt(
    request: SbtMintRequest,
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    sbt_service = await get_sbt_service(storage, clock)
    result = await sbt_service.mint(request.user_id, request.transaction_hash)

    return SbtMintResponse(
        badge=SbtBadgeResponse.model_validate(result["badge"]),
        points_earned=float(result["points_earned"]),
        transaction_hash=result["transaction_hash"],
    )


@router.get(
    "/user/{user_id}",
    response_model=SbtBadgeResponse,
    response_model_exclude_none=True,
    summary="Get User SBT",
    description="The user's badge, or a zero mint count when none was minted"
)
async def get_user_sbt(
    user_id: str = Path(..., description="User ID"),
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    sbt_service = await get_sbt_service(storage, clock)
    badge = await sbt_service.get_badge(user_id)
    if not badge:
        return SbtBadgeResponse()
    return SbtBadgeResponse.model_validate(badge)


@rewards_router.post(
    "/claim-degen",
    response_model=ClaimDegenResponse,
    summary="Claim DEGEN",
    description="Convert points to DEGEN at 0.1 per point; requires at least 250 points"
)
async def claim_degen(request: ClaimDegenRequest):
    rewards_service = get_rewards_service()
    return ClaimDegenResponse(**rewards_service.claim_degen(request.user_id, request.points))
