"""
Test SBT mint bookkeeping and DEGEN claims.
"""

from decimal import Decimal

import pytest

from contentcast.core.config import QuestConfig, RewardsConfig
from contentcast.core.exceptions import UserNotFoundError, ValidationError
from contentcast.services.quest_service import QuestService
from contentcast.services.rewards_service import RewardsService, degen_amount
from contentcast.services.sbt_service import SbtService


@pytest.fixture
def sbt(storage, clock):
    return SbtService(storage, clock)


@pytest.mark.asyncio
async def test_first_mint_creates_badge(sbt, user, clock):
    result = await sbt.mint(user.id, "0xhash1")

    badge = result["badge"]
    assert badge.mint_count == 1
    assert badge.total_paid == Decimal("0.00125")
    assert badge.last_minted_at == clock()
    assert badge.badge_metadata["name"] == "ContentCastAI Profile SBT"
    assert result["points_earned"] == Decimal("50")
    assert result["transaction_hash"] == "0xhash1"


@pytest.mark.asyncio
async def test_minting_is_repeatable(sbt, user, storage, clock):
    await sbt.mint(user.id, "0xhash1")
    # The mint reward has no cooldown
    result = await sbt.mint(user.id, "0xhash2")

    badge = result["badge"]
    assert badge.mint_count == 2
    assert badge.total_paid == Decimal("0.0025")

    quest = await storage.get_user_quest(user.id, QuestConfig.MINT_SBT)
    assert quest.completion_count == 2
    assert await QuestService(storage, clock).total_points(user.id) == Decimal("100")


@pytest.mark.asyncio
async def test_mint_for_unknown_user(sbt, storage):
    with pytest.raises(UserNotFoundError):
        await sbt.mint("missing-user", "0xhash")

    assert storage.sbt_badges == {}


def test_degen_amount_rounds_down():
    assert degen_amount(Decimal("250")) == 25
    assert degen_amount(Decimal("259.9")) == 25
    assert degen_amount(Decimal("1000")) == 100


def test_claim_below_minimum():
    with pytest.raises(ValidationError) as exc_info:
        RewardsService().claim_degen("user-1", Decimal("249"))

    assert exc_info.value.status_code == 400


def test_claim_at_minimum():
    result = RewardsService().claim_degen("user-1", Decimal(RewardsConfig.MIN_CLAIM_POINTS))

    assert result["success"] is True
    assert result["degen_amount"] == 25
    assert result["message"] == "Successfully claimed 25 DEGEN tokens!"
    assert result["chain_id"] == 8453
