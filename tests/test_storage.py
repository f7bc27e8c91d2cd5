"""
Test the in-memory storage backend.
"""

from datetime import datetime, timedelta, timezone
from decimal import Decimal

import pytest

from contentcast.models import DailyCastLimit, QuestCompletion, UserQuest


@pytest.mark.asyncio
async def test_create_user_applies_column_defaults(storage):
    user = await storage.create_user(wallet_address="0x" + "a" * 40)

    assert len(user.id) == 36
    assert user.follower_count == 0
    assert user.following_count == 0
    assert user.created_at is not None
    assert await storage.get_user_by_wallet("0x" + "a" * 40) is user


@pytest.mark.asyncio
async def test_user_quest_is_unique_per_type(storage, user):
    quest = await storage.save_user_quest(UserQuest(user_id=user.id, quest_type="daily_gm"))
    assert quest.total_points == Decimal("0")
    assert quest.completion_count == 0

    quest.completion_count = 1
    await storage.save_user_quest(quest)

    assert len(await storage.list_user_quests(user.id)) == 1
    assert await storage.list_user_quests(user.id, ["daily_checkin"]) == []


@pytest.mark.asyncio
async def test_completions_filtered_by_type_and_time(storage, user):
    start = datetime(2025, 3, 1, tzinfo=timezone.utc)
    for day, quest_type in enumerate(["daily_checkin", "follow_x", "daily_gm"]):
        await storage.add_quest_completion(QuestCompletion(
            user_id=user.id,
            quest_type=quest_type,
            points=Decimal("1"),
            completed_at=start + timedelta(days=day),
        ))

    found = await storage.list_quest_completions(
        user.id, ["daily_checkin", "daily_gm"], start + timedelta(hours=1)
    )

    assert [c.quest_type for c in found] == ["daily_gm"]


@pytest.mark.asyncio
async def test_cast_limit_keyed_by_day(storage, user):
    await storage.save_daily_cast_limit(DailyCastLimit(user_id=user.id, date="2025-03-10"))

    record = await storage.get_daily_cast_limit(user.id, "2025-03-10")
    assert record.cast_count == 0
    assert await storage.get_daily_cast_limit(user.id, "2025-03-11") is None


@pytest.mark.asyncio
async def test_draft_lifecycle(storage, user):
    draft = await storage.create_draft(
        user_id=user.id, topic="gm", content_type="news", tone="casual"
    )
    assert draft.is_published is False

    await storage.update_draft(draft, {"generated_content": "gm frens"})
    assert (await storage.get_draft(draft.id)).generated_content == "gm frens"

    await storage.delete_draft(draft)
    assert await storage.list_drafts_by_user(user.id) == []
