"""
Soulbound badge bookkeeping.
The on-chain mint happens in the client wallet; this records it and
credits the mint reward.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Callable, Dict, Optional

import structlog

from contentcast.core.config import QuestConfig, settings
from contentcast.core.exceptions import UserNotFoundError
from contentcast.models import SbtBadge
from contentcast.models.base import utcnow
from contentcast.services.quest_service import QuestService
from contentcast.storage import Storage

logger = structlog.get_logger(__name__)

BADGE_NAME = "ContentCastAI Profile SBT"
BADGE_DESCRIPTION = "Official ContentCastAI Soulbound Token - Proof of Contribution"
BADGE_IMAGE_URL = "/icon.png"


def build_badge_metadata(payment_amount: Decimal) -> Dict[str, Any]:
    return {
        "imageUrl": BADGE_IMAGE_URL,
        "name": BADGE_NAME,
        "description": BADGE_DESCRIPTION,
        "attributes": [
            {"trait_type": "Type", "value": "Profile SBT"},
            {"trait_type": "Mint Count", "value": 1},
            {"trait_type": "Total Contribution", "value": f"{payment_amount} DEGEN"},
        ],
    }


class SbtService:
    """Records SBT mints; minting is repeatable."""

    def __init__(self, storage: Storage, clock: Callable[[], datetime] = utcnow):
        self.storage = storage
        self.clock = clock
        self.quests = QuestService(storage, clock)
        self.logger = logger.bind(service="sbt_service")

    async def get_badge(self, user_id: str) -> Optional[SbtBadge]:
        return await self.storage.get_sbt_badge(user_id)

    async def record_mint(
        self,
        user_id: str,
        payment_amount: Optional[Decimal] = None
    ) -> SbtBadge:
        amount = Decimal(payment_amount if payment_amount is not None else settings.sbt_mint_price)
        now = self.clock()
        badge = await self.storage.get_sbt_badge(user_id)

        if badge:
            badge.mint_count = (badge.mint_count or 0) + 1
            badge.total_paid = Decimal(badge.total_paid or 0) + amount
            badge.last_minted_at = now
        else:
            badge = SbtBadge(
                user_id=user_id,
                mint_count=1,
                total_paid=amount,
                badge_metadata=build_badge_metadata(amount),
                last_minted_at=now,
            )

        return await self.storage.save_sbt_badge(badge)

    async def mint(self, user_id: str, transaction_hash: str) -> Dict[str, Any]:
        """
        Record a confirmed mint transaction and credit the mint reward.

        The reward is not cooldown-gated.
        """
        if not await self.storage.get_user(user_id):
            raise UserNotFoundError(user_id)

        badge = await self.record_mint(user_id)
        points = QuestConfig.SBT_MINT_POINTS
        await self.quests.record_completion(user_id, QuestConfig.MINT_SBT, points)
        await self.storage.commit()

        self.logger.info(
            "SBT mint recorded",
            user_id=user_id,
            transaction_hash=transaction_hash,
            mint_count=badge.mint_count,
            points=str(points)
        )

        return {
            "badge": badge,
            "points_earned": points,
            "transaction_hash": transaction_hash,
        }


async def get_sbt_service(
    storage: Storage,
    clock: Callable[[], datetime] = utcnow
) -> SbtService:
    """Get SBT service instance."""
    return SbtService(storage, clock)
