"""
Test the per ledger day cast counter.
"""

from datetime import datetime, timezone

import pytest

from contentcast.core.config import QuestConfig
from contentcast.services.cast_limit_service import CastLimitService


@pytest.fixture
def cast_limits(storage, clock):
    return CastLimitService(storage, clock)


@pytest.mark.asyncio
async def test_fresh_user_status(cast_limits, user):
    status = await cast_limits.get_status(user.id)

    assert status["date"] == "2025-03-10"
    assert status["count"] == 0
    assert status["remaining"] == QuestConfig.MAX_DAILY_CASTS
    assert status["can_cast"] is True
    assert status["limit_reached"] is False
    assert status["reset_in"] == 12 * 3600


@pytest.mark.asyncio
async def test_limit_reached_after_ten_casts(cast_limits, user):
    for expected in range(1, QuestConfig.MAX_DAILY_CASTS + 1):
        info = await cast_limits.increment(user.id)
        assert info["count"] == expected
        assert info["can_cast"] is (expected < QuestConfig.MAX_DAILY_CASTS)

    assert info["can_cast"] is False
    assert await cast_limits.can_cast(user.id) is False

    status = await cast_limits.get_status(user.id)
    assert status["remaining"] == 0
    assert status["limit_reached"] is True


@pytest.mark.asyncio
async def test_increment_writes_past_the_cap(cast_limits, user):
    for _ in range(QuestConfig.MAX_DAILY_CASTS + 2):
        await cast_limits.increment(user.id)

    assert await cast_limits.get_count(user.id, "2025-03-10") == 12
    status = await cast_limits.get_status(user.id)
    assert status["remaining"] == 0


@pytest.mark.asyncio
async def test_counter_rolls_over_at_reset(cast_limits, user, clock):
    """Casts before 03:00 Istanbul belong to the previous ledger day."""
    clock.set(datetime(2025, 3, 10, 23, 30, tzinfo=timezone.utc))
    for _ in range(QuestConfig.MAX_DAILY_CASTS):
        await cast_limits.increment(user.id)
    assert await cast_limits.can_cast(user.id) is False

    clock.advance(hours=1)

    assert cast_limits.ledger_day() == "2025-03-11"
    assert await cast_limits.can_cast(user.id) is True
    status = await cast_limits.get_status(user.id)
    assert status["count"] == 0
    assert status["reset_in"] == 23 * 3600 + 30 * 60


@pytest.mark.asyncio
async def test_counters_are_per_user(cast_limits, user, storage):
    other = await storage.create_user(wallet_address="0x" + "3" * 40)

    await cast_limits.increment(user.id)

    assert await cast_limits.get_count(other.id, cast_limits.ledger_day()) == 0
