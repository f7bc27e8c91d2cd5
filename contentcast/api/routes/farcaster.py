"""
Farcaster API routes: cast publishing, profile lookups and the app webhook.
"""

from datetime import datetime
from typing import Any, Callable, Dict, Optional

from fastapi import APIRouter, Body, Depends, Path

import structlog

from contentcast.api.dependencies import (
    get_storage, get_clock, get_farcaster_service, validate_wallet_param
)
from contentcast.api.schemas.common import AckResponse
from contentcast.api.schemas.content import FarcasterUserResponse
from contentcast.api.schemas.drafts import PublishCastRequest, PublishCastResponse
from contentcast.core.exceptions import NotFoundError
from contentcast.services.draft_service import DraftService
from contentcast.services.farcaster_service import FarcasterService
from contentcast.storage import Storage

router = APIRouter(tags=["Farcaster"])
logger = structlog.get_logger(__name__)


@router.post(
    "/farcaster/cast",
    response_model=PublishCastResponse,
    summary="Publish Cast",
    description="Prepare a compose link for a draft and count it against the daily limit"
)
async def publish_cast(
    request: PublishCastRequest,
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock),
    farcaster: FarcasterService = Depends(get_farcaster_service)
):
    draft_service = DraftService(storage, clock, farcaster)
    result = await draft_service.publish(request.draft_id, request.image_url)
    return PublishCastResponse(**result)


@router.get(
    "/farcaster/profile/{fid}",
    summary="Get Farcaster Profile",
    description="Raw hub user data for a Farcaster id"
)
async def get_farcaster_profile(
    fid: str = Path(..., description="Farcaster id"),
    farcaster: FarcasterService = Depends(get_farcaster_service)
) -> Dict[str, Any]:
    return await farcaster.get_user_profile(fid)


@router.get(
    "/farcaster/user-by-wallet/{wallet_address}",
    response_model=FarcasterUserResponse,
    summary="Find Farcaster User By Wallet"
)
async def get_farcaster_user_by_wallet(
    wallet_address: str = Depends(validate_wallet_param),
    farcaster: FarcasterService = Depends(get_farcaster_service)
):
    profile = await farcaster.get_user_by_wallet(wallet_address)
    if not profile:
        raise NotFoundError("User not found on Farcaster", {"wallet": wallet_address})
    return FarcasterUserResponse(**profile)


@router.post(
    "/webhook",
    response_model=AckResponse,
    summary="Mini App Webhook",
    description="Acknowledge Farcaster mini app events"
)
async def webhook(payload: Optional[Dict[str, Any]] = Body(None)):
    payload = payload or {}
    logger.info("Farcaster webhook received", webhook_event=payload.get("event"), keys=sorted(payload))
    return AckResponse()
