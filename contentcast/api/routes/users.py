"""
User API routes.
Users are keyed by wallet and enriched from Farcaster on lookup.
"""

from fastapi import APIRouter, Depends, Path

import structlog

from contentcast.api.dependencies import (
    get_storage, get_farcaster_service, validate_wallet_param
)
from contentcast.api.schemas.users import UserCreateRequest, UserUpdateRequest, UserResponse
from contentcast.services.farcaster_service import FarcasterService
from contentcast.services.user_service import UserService
from contentcast.storage import Storage

router = APIRouter(tags=["Users"])
logger = structlog.get_logger(__name__)


@router.post(
    "",
    response_model=UserResponse,
    summary="Create User",
    description="Create a user for a wallet, or return the existing one"
)
async def create_user(
    request: UserCreateRequest,
    storage: Storage = Depends(get_storage),
    farcaster: FarcasterService = Depends(get_farcaster_service)
):
    user_service = UserService(storage, farcaster)
    fields = request.model_dump(exclude_unset=True, exclude={"wallet_address"})
    user = await user_service.get_or_create(request.wallet_address, **fields)
    return UserResponse.model_validate(user)


@router.get(
    "/{wallet_address}",
    response_model=UserResponse,
    summary="Get User By Wallet",
    description="Fetch a user and fill empty profile fields from Farcaster"
)
async def get_user_by_wallet(
    wallet_address: str = Depends(validate_wallet_param),
    storage: Storage = Depends(get_storage),
    farcaster: FarcasterService = Depends(get_farcaster_service)
):
    user_service = UserService(storage, farcaster)
    user = await user_service.get_by_wallet(wallet_address)
    return UserResponse.model_validate(user)


@router.patch(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update User",
    description="Partially update a user's profile fields"
)
async def update_user(
    request: UserUpdateRequest,
    user_id: str = Path(..., description="User ID"),
    storage: Storage = Depends(get_storage),
    farcaster: FarcasterService = Depends(get_farcaster_service)
):
    user_service = UserService(storage, farcaster)
    user = await user_service.update(user_id, request.model_dump(exclude_unset=True))
    return UserResponse.model_validate(user)
