"""
Content draft API routes.
"""

from datetime import datetime
from typing import Callable, List

from fastapi import APIRouter, Depends, Path

import structlog

from contentcast.api.dependencies import get_storage, get_clock
from contentcast.api.schemas.common import AckResponse
from contentcast.api.schemas.drafts import DraftCreateRequest, DraftUpdateRequest, DraftResponse
from contentcast.services.draft_service import get_draft_service
from contentcast.storage import Storage

router = APIRouter(tags=["Drafts"])
logger = structlog.get_logger(__name__)


@router.post("", response_model=DraftResponse, summary="Create Draft")
async def create_draft(
    request: DraftCreateRequest,
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    draft_service = await get_draft_service(storage, clock)
    draft = await draft_service.create(**request.model_dump())
    return DraftResponse.model_validate(draft)


@router.get("/user/{user_id}", response_model=List[DraftResponse], summary="List User Drafts")
async def list_user_drafts(
    user_id: str = Path(..., description="User ID"),
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    draft_service = await get_draft_service(storage, clock)
    drafts = await draft_service.list_for_user(user_id)
    return [DraftResponse.model_validate(d) for d in drafts]


@router.patch("/{draft_id}", response_model=DraftResponse, summary="Update Draft")
async def update_draft(
    request: DraftUpdateRequest,
    draft_id: str = Path(..., description="Draft ID"),
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    draft_service = await get_draft_service(storage, clock)
    draft = await draft_service.update(draft_id, request.model_dump(exclude_unset=True))
    return DraftResponse.model_validate(draft)


@router.delete("/{draft_id}", response_model=AckResponse, summary="Delete Draft")
async def delete_draft(
    draft_id: str = Path(..., description="Draft ID"),
    storage: Storage = Depends(get_storage),
    clock: Callable[[], datetime] = Depends(get_clock)
):
    draft_service = await get_draft_service(storage, clock)
    await draft_service.delete(draft_id)
    return AckResponse()
