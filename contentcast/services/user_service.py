"""
User accounts keyed by wallet, enriched from Farcaster.
"""

from typing import Any, Dict, Optional

import structlog

from contentcast.core.exceptions import UserNotFoundError
from contentcast.models import User
from contentcast.services.farcaster_service import FarcasterService, farcaster_service
from contentcast.storage import Storage

logger = structlog.get_logger(__name__)

# User column -> Farcaster lookup field, filled only while the column is empty
ENRICHED_FIELDS = {
    "farcaster_fid": "fid",
    "farcaster_username": "username",
    "farcaster_display_name": "display_name",
    "farcaster_avatar": "pfp_url",
    "farcaster_bio": "bio",
    "follower_count": "follower_count",
    "following_count": "following_count",
}


class UserService:

    def __init__(self, storage: Storage, farcaster: Optional[FarcasterService] = None):
        self.storage = storage
        self.farcaster = farcaster or farcaster_service
        self.logger = logger.bind(service="user_service")

    async def get_or_create(self, wallet_address: str, **fields: Any) -> User:
        """Return the user for this wallet, creating it on first connection."""
        existing = await self.storage.get_user_by_wallet(wallet_address)
        if existing:
            return existing

        user = await self.storage.create_user(wallet_address=wallet_address, **fields)
        await self.storage.commit()
        self.logger.info("User created", user_id=user.id, wallet=wallet_address)
        return user

    async def get_by_wallet(self, wallet_address: str, enrich: bool = True) -> User:
        user = await self.storage.get_user_by_wallet(wallet_address)
        if not user:
            raise UserNotFoundError(wallet_address)
        if enrich:
            user = await self.enrich_from_farcaster(user)
        return user

    async def enrich_from_farcaster(self, user: User) -> User:
        profile = await self.farcaster.get_user_by_wallet(user.wallet_address)
        if not profile:
            return user

        updates: Dict[str, Any] = {}
        for column, key in ENRICHED_FIELDS.items():
            if not getattr(user, column) and profile.get(key):
                updates[column] = profile[key]
        # The score is refreshed on every lookup
        if profile.get("neynar_score") is not None:
            updates["neynar_score"] = profile["neynar_score"]

        if not updates:
            return user

        user = await self.storage.update_user(user, updates)
        await self.storage.commit()
        self.logger.info("User enriched from Farcaster", user_id=user.id, fields=sorted(updates))
        return user

    async def update(self, user_id: str, updates: Dict[str, Any]) -> User:
        user = await self.storage.get_user(user_id)
        if not user:
            raise UserNotFoundError(user_id)
        user = await self.storage.update_user(user, updates)
        await self.storage.commit()
        return user


async def get_user_service(storage: Storage) -> UserService:
    """Get user service instance."""
    return UserService(storage)
