"""
DEGEN reward claims.
"""

import math
from decimal import Decimal
from typing import Any, Dict

import structlog

from contentcast.core.config import RewardsConfig
from contentcast.core.exceptions import ValidationError

logger = structlog.get_logger(__name__)


def degen_amount(points: Decimal) -> int:
    return math.floor(Decimal(points) * RewardsConfig.DEGEN_PER_POINT)


class RewardsService:
    """Converts points into a DEGEN claim."""

    def __init__(self):
        self.logger = logger.bind(service="rewards_service")

    def claim_degen(self, user_id: str, points: Decimal) -> Dict[str, Any]:
        # Points are not deducted, so a claim can be repeated.
        points = Decimal(points)
        if points < RewardsConfig.MIN_CLAIM_POINTS:
            raise ValidationError(
                f"Minimum {RewardsConfig.MIN_CLAIM_POINTS} points required to claim DEGEN",
                {"points": str(points), "minimum": RewardsConfig.MIN_CLAIM_POINTS}
            )

        amount = degen_amount(points)
        self.logger.info("DEGEN claim simulated", user_id=user_id, points=str(points), amount=amount)

        return {
            "success": True,
            "degen_amount": amount,
            "message": f"Successfully claimed {amount} DEGEN tokens!",
            "contract_address": RewardsConfig.DEGEN_CONTRACT_ADDRESS,
            "chain_id": RewardsConfig.CHAIN_ID,
        }


def get_rewards_service() -> RewardsService:
    return RewardsService()
