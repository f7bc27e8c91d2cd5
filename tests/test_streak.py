"""
Test the daily streak walk over UTC calendar days.
"""

from datetime import datetime, timezone

import pytest

from contentcast.core.config import QuestConfig
from contentcast.services.quest_service import QuestService


@pytest.fixture
def quests(storage, clock):
    return QuestService(storage, clock)


async def checkin_at(quests, clock, user_id, moment, quest_type=QuestConfig.DAILY_CHECKIN):
    clock.set(moment)
    await quests.record_completion(user_id, quest_type, QuestConfig.points_for(quest_type))


@pytest.mark.asyncio
async def test_no_daily_quests_means_no_streak(quests, user):
    assert await quests.get_current_streak(user.id) == 0


@pytest.mark.asyncio
async def test_only_non_daily_quests_do_not_count(quests, user):
    await quests.complete_quest(user.id, QuestConfig.FOLLOW_X)

    assert await quests.get_current_streak(user.id) == 0


@pytest.mark.asyncio
async def test_three_consecutive_days(quests, user, clock):
    for day in (10, 11, 12):
        await checkin_at(quests, clock, user.id, datetime(2025, 3, day, 12, 0, tzinfo=timezone.utc))

    assert await quests.get_current_streak(user.id) == 3


@pytest.mark.asyncio
async def test_either_daily_quest_keeps_streak(quests, user, clock):
    await checkin_at(quests, clock, user.id, datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc))
    await checkin_at(
        quests, clock, user.id,
        datetime(2025, 3, 11, 9, 0, tzinfo=timezone.utc), QuestConfig.DAILY_GM
    )
    await checkin_at(quests, clock, user.id, datetime(2025, 3, 12, 9, 0, tzinfo=timezone.utc))

    assert await quests.get_current_streak(user.id) == 3


@pytest.mark.asyncio
async def test_same_day_counts_once(quests, user, clock):
    await checkin_at(quests, clock, user.id, datetime(2025, 3, 10, 8, 0, tzinfo=timezone.utc))
    await checkin_at(
        quests, clock, user.id,
        datetime(2025, 3, 10, 9, 0, tzinfo=timezone.utc), QuestConfig.DAILY_GM
    )

    assert await quests.get_current_streak(user.id) == 1


@pytest.mark.asyncio
async def test_gap_breaks_streak(quests, user, clock):
    await checkin_at(quests, clock, user.id, datetime(2025, 3, 8, 12, 0, tzinfo=timezone.utc))
    await checkin_at(quests, clock, user.id, datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc))

    assert await quests.get_current_streak(user.id) == 1


@pytest.mark.asyncio
async def test_today_missing_within_grace(quests, user, clock):
    """Yesterday late evening still counts while under 24 hours old."""
    await checkin_at(quests, clock, user.id, datetime(2025, 3, 9, 12, 0, tzinfo=timezone.utc))
    await checkin_at(quests, clock, user.id, datetime(2025, 3, 10, 23, 0, tzinfo=timezone.utc))

    clock.set(datetime(2025, 3, 11, 10, 0, tzinfo=timezone.utc))

    assert await quests.get_current_streak(user.id) == 2


@pytest.mark.asyncio
async def test_today_missing_after_grace(quests, user, clock):
    await checkin_at(quests, clock, user.id, datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc))

    clock.set(datetime(2025, 3, 11, 13, 0, tzinfo=timezone.utc))

    assert await quests.get_current_streak(user.id) == 0
