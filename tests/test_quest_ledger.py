"""
Test quest completions, cooldowns and one-time quests.
"""

from datetime import timedelta
from decimal import Decimal

import pytest

from contentcast.core.config import QuestConfig
from contentcast.core.exceptions import QuestCooldownError, UserNotFoundError
from contentcast.services.quest_service import QuestService


@pytest.fixture
def quests(storage, clock):
    return QuestService(storage, clock)


@pytest.mark.asyncio
async def test_first_completion_creates_record(quests, user, clock):
    """A first completion creates the record with the quest's points."""
    quest, points = await quests.complete_quest(user.id, QuestConfig.DAILY_CHECKIN)

    assert points == Decimal("1")
    assert quest.total_points == Decimal("1")
    assert quest.completion_count == 1
    assert quest.last_completed_at == clock()
    assert quest.is_one_time is False
    assert await quests.total_points(user.id) == Decimal("1")


@pytest.mark.asyncio
async def test_cooldown_is_rolling_24_hours(quests, user, clock):
    """Eligibility returns exactly 24 hours after the last completion."""
    await quests.complete_quest(user.id, QuestConfig.DAILY_CHECKIN)

    with pytest.raises(QuestCooldownError) as exc_info:
        await quests.complete_quest(user.id, QuestConfig.DAILY_CHECKIN)
    assert exc_info.value.status_code == 429

    clock.advance(hours=23, minutes=59)
    assert await quests.can_complete(user.id, QuestConfig.DAILY_CHECKIN) is False

    clock.advance(minutes=1)
    assert await quests.can_complete(user.id, QuestConfig.DAILY_CHECKIN) is True

    quest, _ = await quests.complete_quest(user.id, QuestConfig.DAILY_CHECKIN)
    assert quest.completion_count == 2
    assert quest.total_points == Decimal("2")


@pytest.mark.asyncio
async def test_rejected_completion_changes_nothing(quests, user, storage):
    await quests.complete_quest(user.id, QuestConfig.DAILY_GM)

    with pytest.raises(QuestCooldownError):
        await quests.complete_quest(user.id, QuestConfig.DAILY_GM)

    quest = await quests.get_user_quest(user.id, QuestConfig.DAILY_GM)
    assert quest.completion_count == 1
    assert len(storage.completions) == 1


@pytest.mark.asyncio
async def test_one_time_quest_never_repeats(quests, user, clock):
    """Bonus quests stay closed once completed."""
    quest, _ = await quests.complete_quest(user.id, QuestConfig.ADD_MINIAPP)
    assert quest.is_one_time is True
    assert quest.is_completed is True

    clock.advance(days=30)
    assert await quests.can_complete(user.id, QuestConfig.ADD_MINIAPP) is False

    with pytest.raises(QuestCooldownError):
        await quests.complete_quest(user.id, QuestConfig.ADD_MINIAPP)


@pytest.mark.asyncio
async def test_total_points_sums_all_quest_types(quests, user):
    await quests.complete_quest(user.id, QuestConfig.DAILY_CHECKIN)
    await quests.complete_quest(user.id, QuestConfig.DAILY_GM)
    await quests.complete_quest(user.id, QuestConfig.NFT_HOLDING)

    assert await quests.total_points(user.id) == Decimal("11.25")


@pytest.mark.asyncio
async def test_mint_sbt_completion_earns_nothing(quests, user):
    """The mint reward is paid by the SBT mint, not the generic completion."""
    quest, points = await quests.complete_quest(user.id, QuestConfig.MINT_SBT)

    assert points == Decimal("0")
    assert quest.total_points == Decimal("0")
    assert await quests.total_points(user.id) == Decimal("0")


@pytest.mark.asyncio
async def test_unknown_user_is_rejected(quests):
    with pytest.raises(UserNotFoundError):
        await quests.complete_quest("missing-user", QuestConfig.DAILY_CHECKIN)


@pytest.mark.asyncio
async def test_record_completion_skips_cooldown(quests, user):
    """Internal credits such as daily_cast accumulate without a cooldown."""
    for _ in range(3):
        await quests.record_completion(user.id, QuestConfig.DAILY_CAST, Decimal("1"))

    quest = await quests.get_user_quest(user.id, QuestConfig.DAILY_CAST)
    assert quest.completion_count == 3
    assert quest.total_points == Decimal("3")


@pytest.mark.asyncio
async def test_quest_status(quests, user, clock):
    """Status reports totals, eligibility and the remaining cooldown."""
    await quests.complete_quest(user.id, QuestConfig.DAILY_CHECKIN)
    await quests.complete_quest(user.id, QuestConfig.FOLLOW_X)
    clock.advance(hours=6)

    status = await quests.get_quest_status(user.id)

    assert status["total_points"] == Decimal("2")
    checkin = status["quests"][QuestConfig.DAILY_CHECKIN]
    assert checkin["can_complete"] is False
    assert checkin["time_until_next"] == int(timedelta(hours=18).total_seconds() * 1000)

    gm = status["quests"][QuestConfig.DAILY_GM]
    assert gm["record"] is None
    assert gm["can_complete"] is True
    assert gm["time_until_next"] == 0

    follow_x = status["bonus_quests"][QuestConfig.FOLLOW_X]
    assert follow_x["is_completed"] is True
    assert follow_x["can_complete"] is False
    assert status["bonus_quests"][QuestConfig.ADD_MINIAPP]["is_completed"] is False
