"""
Test the HTTP API on the memory backend.
"""

import pytest

from contentcast.api.main import app
from contentcast.core.config import QuestConfig
from tests.conftest import OTHER_WALLET, WALLET


def create_user(client, wallet=WALLET, **fields) -> dict:
    response = client.post("/api/users", json={"walletAddress": wallet, **fields})
    assert response.status_code == 200
    return response.json()


def complete(client, user_id, quest_type):
    return client.post("/api/quests/complete", json={"userId": user_id, "questType": quest_type})


def create_draft(client, user_id) -> dict:
    response = client.post("/api/drafts", json={
        "userId": user_id,
        "topic": "Base onchain summer",
        "contentType": "news",
        "tone": "casual",
        "generatedContent": "gm Base",
    })
    assert response.status_code == 200
    return response.json()


def test_health(client):
    response = client.get("/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_health_without_database(client):
    """With no memory backend and no engine the storage check fails."""
    app.state.memory_storage = None

    response = client.get("/health")

    assert response.status_code == 503
    assert response.json()["services"]["storage"] == "unhealthy"


def test_quest_ledger_scenario(client, clock):
    """Check-in, cooldown, one-time bonus and the resulting leaderboard."""
    user = create_user(client)
    create_user(client, OTHER_WALLET)

    response = complete(client, user["id"], QuestConfig.DAILY_CHECKIN)
    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["pointsEarned"] == 1.0
    assert body["quest"]["totalPoints"] == "1.00"
    assert body["quest"]["completionCount"] == 1

    clock.advance(hours=1)
    response = complete(client, user["id"], QuestConfig.DAILY_CHECKIN)
    assert response.status_code == 429
    assert response.json()["error"] == "QUEST_COOLDOWN"

    clock.advance(hours=23)
    status = client.get(f"/api/quests/user/{user['id']}").json()
    assert status["quests"]["daily_checkin"]["canComplete"] is True
    assert status["totalPoints"] == 1.0

    assert complete(client, user["id"], QuestConfig.ADD_MINIAPP).status_code == 200
    assert complete(client, user["id"], QuestConfig.ADD_MINIAPP).status_code == 429

    status = client.get(f"/api/quests/user/{user['id']}").json()
    assert status["totalPoints"] == 2.0
    assert status["bonusQuests"]["add_miniapp"]["isCompleted"] is True
    assert status["bonusQuests"]["add_miniapp"]["canComplete"] is False

    leaderboard = client.get("/api/leaderboard").json()
    assert len(leaderboard) == 1
    assert leaderboard[0]["id"] == user["id"]
    assert leaderboard[0]["rank"] == 1
    assert leaderboard[0]["totalPoints"] == 2.0


def test_quest_status_for_new_user(client):
    user = create_user(client)

    status = client.get(f"/api/quests/user/{user['id']}").json()

    assert status["totalPoints"] == 0
    assert status["currentStreak"] == 0
    assert status["dailyCastCount"] == 0
    assert status["quests"]["daily_gm"]["canComplete"] is True
    assert status["quests"]["daily_gm"]["timeUntilNext"] == 0


def test_complete_quest_unknown_user(client):
    response = complete(client, "missing-user", QuestConfig.DAILY_CHECKIN)

    assert response.status_code == 404
    assert response.json()["success"] is False


def test_complete_quest_missing_fields(client):
    response = client.post("/api/quests/complete", json={})

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_publish_cast(client):
    user = create_user(client)
    draft = create_draft(client, user["id"])

    response = client.post("/api/farcaster/cast", json={
        "draftId": draft["id"],
        "imageUrl": "https://img.example/a.png",
    })

    assert response.status_code == 200
    body = response.json()
    assert body["ready"] is True
    assert body["castContent"] == "gm Base"
    assert body["farcasterUrl"].startswith("https://warpcast.com/~/compose?text=gm%20Base")
    assert body["dailyCastInfo"]["count"] == 1
    assert body["dailyCastInfo"]["remaining"] == 9
    assert body["dailyCastInfo"]["canCast"] is True

    status = client.get(f"/api/quests/user/{user['id']}").json()
    assert status["dailyCastCount"] == 1
    assert status["totalPoints"] == 1.0

    drafts = client.get(f"/api/drafts/user/{user['id']}").json()
    assert drafts[0]["isPublished"] is False


def test_publish_cast_daily_limit(client):
    user = create_user(client)
    draft = create_draft(client, user["id"])

    for _ in range(QuestConfig.MAX_DAILY_CASTS):
        assert client.post("/api/farcaster/cast", json={"draftId": draft["id"]}).status_code == 200

    response = client.post("/api/farcaster/cast", json={"draftId": draft["id"]})

    assert response.status_code == 429
    body = response.json()
    assert body["error"] == "DAILY_LIMIT_EXCEEDED"
    assert body["maxDailyCasts"] == QuestConfig.MAX_DAILY_CASTS

    limits = client.get(f"/api/cast-limits/{user['id']}").json()
    assert limits["count"] == QuestConfig.MAX_DAILY_CASTS
    assert limits["canCast"] is False
    assert limits["remaining"] == 0


def test_publish_unknown_draft(client):
    response = client.post("/api/farcaster/cast", json={"draftId": "missing"})

    assert response.status_code == 404


def test_cast_limit_increment(client):
    user = create_user(client)

    response = client.post(f"/api/cast-limits/{user['id']}/increment")

    assert response.status_code == 200
    body = response.json()
    assert body["count"] == 1
    assert body["remaining"] == 9
    assert body["maxDailyCasts"] == 10
    assert body["date"] == "2025-03-10"


def test_draft_crud(client):
    user = create_user(client)
    draft = create_draft(client, user["id"])

    response = client.patch(f"/api/drafts/{draft['id']}", json={"generatedContent": "edited"})
    assert response.status_code == 200
    assert response.json()["generatedContent"] == "edited"
    assert response.json()["topic"] == "Base onchain summer"

    assert client.delete(f"/api/drafts/{draft['id']}").json() == {"success": True}
    assert client.get(f"/api/drafts/user/{user['id']}").json() == []
    assert client.delete(f"/api/drafts/{draft['id']}").status_code == 404


def test_create_user_is_idempotent(client):
    first = create_user(client)
    second = create_user(client)

    assert first["id"] == second["id"]


def test_create_user_rejects_bad_wallet(client):
    response = client.post("/api/users", json={"walletAddress": "not-a-wallet"})

    assert response.status_code == 400


def test_get_user_enriches_from_farcaster(client, farcaster):
    create_user(client)
    farcaster.profile = {
        "fid": "42",
        "username": "alice",
        "display_name": "Alice",
        "pfp_url": "https://img.example/alice.png",
        "bio": None,
        "follower_count": 10,
        "following_count": 5,
        "verified_addresses": [WALLET],
        "neynar_score": 87,
    }

    body = client.get(f"/api/users/{WALLET}").json()

    assert body["farcasterFid"] == "42"
    assert body["farcasterUsername"] == "alice"
    assert body["followerCount"] == 10
    assert body["neynarScore"] == 87
    assert body["farcasterBio"] is None


def test_get_unknown_user(client):
    assert client.get(f"/api/users/{OTHER_WALLET}").status_code == 404
    assert client.get("/api/users/0x123").status_code == 400


def test_sbt_mint_and_lookup(client):
    user = create_user(client)

    empty = client.get(f"/api/sbt/user/{user['id']}").json()
    assert empty["mintCount"] == 0
    assert empty["totalPaid"] == "0"

    response = client.post("/api/sbt/mint", json={"userId": user["id"], "transactionHash": "0xabc"})
    assert response.status_code == 200
    assert response.json()["pointsEarned"] == 50.0

    badge = client.get(f"/api/sbt/user/{user['id']}").json()
    assert badge["mintCount"] == 1
    assert badge["totalPaid"] == "0.00125"

    leaderboard = client.get("/api/leaderboard").json()
    assert leaderboard[0]["hasSbt"] is True


def test_mint_sbt_quest_type_earns_nothing_without_a_mint(client):
    """Only /api/sbt/mint pays the mint reward."""
    user = create_user(client)

    response = complete(client, user["id"], QuestConfig.MINT_SBT)

    assert response.status_code == 200
    assert response.json()["pointsEarned"] == 0.0
    assert client.get(f"/api/sbt/user/{user['id']}").json()["mintCount"] == 0
    assert client.get(f"/api/quests/user/{user['id']}").json()["totalPoints"] == 0.0
    assert client.get("/api/leaderboard").json() == []


def test_claim_degen(client):
    response = client.post("/api/rewards/claim-degen", json={"userId": "u1", "points": 300})
    assert response.status_code == 200
    assert response.json()["degenAmount"] == 30

    response = client.post("/api/rewards/claim-degen", json={"userId": "u1", "points": 100})
    assert response.status_code == 400


def test_feedback(client, storage):
    response = client.post("/api/feedback", json={"type": "bug", "message": "Button is broken"})

    assert response.status_code == 200
    assert response.json()["success"] is True
    assert len(storage.feedback) == 1

    assert client.post("/api/feedback", json={"type": "rant", "message": "x"}).status_code == 400


def test_generate_requires_prompt(client):
    response = client.get("/api/generate")

    assert response.status_code == 400
    assert response.json()["error"] == "VALIDATION_ERROR"


def test_webhook_ack(client):
    assert client.post("/api/webhook", json={"event": "frame_added"}).json() == {"success": True}


def test_webhook_accepts_empty_body(client):
    response = client.post("/api/webhook")

    assert response.status_code == 200
    assert response.json() == {"success": True}


@pytest.mark.parametrize("path", ["/api/farcaster/user-by-wallet/0x123", "/api/users/xyz"])
def test_wallet_param_validation(client, path):
    assert client.get(path).status_code == 400


def test_farcaster_user_by_wallet_not_found(client):
    assert client.get(f"/api/farcaster/user-by-wallet/{WALLET}").status_code == 404


def test_farcaster_profile(client):
    assert client.get("/api/farcaster/profile/42").json()["fid"] == "42"
