"""
SBT badge and DEGEN reward schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import Field, field_serializer

from .common import CamelModel


class SbtMintRequest(CamelModel):
    user_id: str = Field(min_length=1)
    transaction_hash: str = Field(min_length=1)


class SbtBadgeResponse(CamelModel):
    id: Optional[str] = None
    user_id: Optional[str] = None
    mint_count: int = 0
    total_paid: Decimal = Decimal("0")
    badge_metadata: Optional[Dict[str, Any]] = None
    last_minted_at: Optional[datetime] = None
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    @field_serializer("total_paid")
    def serialize_total_paid(self, value: Decimal) -> str:
        return format(Decimal(value).normalize(), "f") if value else "0"


class SbtMintResponse(CamelModel):
    success: bool = True
    badge: SbtBadgeResponse
    points_earned: float
    transaction_hash: str


class ClaimDegenRequest(CamelModel):
    user_id: str = Field(min_length=1)
    points: Decimal = Field(gt=0)


class ClaimDegenResponse(CamelModel):
    success: bool = True
    degen_amount: int
    message: str
    contract_address: str
    chain_id: int
