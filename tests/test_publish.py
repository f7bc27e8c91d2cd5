"""
Test publishing when the daily_cast credit fails after the cast was counted.
"""

import pytest

from contentcast.core.config import QuestConfig
from contentcast.models import ContentDraft
from contentcast.services.draft_service import DraftService
from contentcast.storage import MemoryStorage
from tests.conftest import StubFarcaster, WALLET


class QuestWriteFailingStorage(MemoryStorage):
    """Memory backend whose daily_cast quest writes fail."""

    def __init__(self):
        super().__init__()
        self.rollbacks = 0

    async def save_user_quest(self, quest):
        if quest.quest_type == QuestConfig.DAILY_CAST:
            raise RuntimeError("quest table unavailable")
        return await super().save_user_quest(quest)

    async def rollback(self) -> None:
        self.rollbacks += 1
        await super().rollback()


@pytest.fixture
def storage():
    return QuestWriteFailingStorage()


async def make_draft(storage) -> ContentDraft:
    user = await storage.create_user(wallet_address=WALLET)
    return await storage.create_draft(
        user_id=user.id,
        topic="Base onchain summer",
        content_type="news",
        tone="casual",
        generated_content="gm Base",
    )


@pytest.mark.asyncio
async def test_cast_is_counted_when_quest_credit_fails(storage, clock):
    """The counter stays committed, the credit is rolled back and the cast succeeds."""
    draft = await make_draft(storage)

    result = await DraftService(storage, clock, StubFarcaster()).publish(draft.id)

    assert result["ready"] is True
    assert result["daily_cast_info"]["count"] == 1
    assert storage.rollbacks == 1
    assert [limit.cast_count for limit in storage.cast_limits.values()] == [1]
    assert (draft.user_id, QuestConfig.DAILY_CAST) not in storage.user_quests
    assert storage.completions == []
    assert (await storage.get_draft(draft.id)).is_published is False


def test_publish_route_succeeds_when_quest_credit_fails(client, storage):
    user = client.post("/api/users", json={"walletAddress": WALLET}).json()
    draft = client.post("/api/drafts", json={
        "userId": user["id"],
        "topic": "Base onchain summer",
        "contentType": "news",
        "tone": "casual",
        "generatedContent": "gm Base",
    }).json()

    response = client.post("/api/farcaster/cast", json={"draftId": draft["id"]})

    assert response.status_code == 200
    assert response.json()["dailyCastInfo"]["count"] == 1

    status = client.get(f"/api/quests/user/{user['id']}").json()
    assert status["dailyCastCount"] == 1
    assert status["totalPoints"] == 0.0
    assert status["quests"][QuestConfig.DAILY_CAST]["completionCount"] is None
