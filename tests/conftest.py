"""
Shared fixtures: a controllable clock, in-memory storage and an API client.
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import pytest
from fastapi.testclient import TestClient

from contentcast.api.dependencies import get_clock, get_farcaster_service
from contentcast.api.main import app
from contentcast.services.farcaster_service import FarcasterService
from contentcast.storage import MemoryStorage

WALLET = "0x1111111111111111111111111111111111111111"
OTHER_WALLET = "0x2222222222222222222222222222222222222222"


class FakeClock:
    """Callable clock that only moves when told to."""

    def __init__(self, start: datetime):
        self.now = start

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now += timedelta(**kwargs)

    def set(self, moment: datetime) -> None:
        self.now = moment


class StubFarcaster(FarcasterService):
    """Farcaster client that never leaves the process."""

    def __init__(self, profile: Optional[Dict[str, Any]] = None):
        super().__init__()
        self.profile = profile

    async def get_user_by_wallet(self, wallet_address: str) -> Optional[Dict[str, Any]]:
        return self.profile

    async def get_user_profile(self, fid: str) -> Dict[str, Any]:
        return {"messages": [], "fid": fid}


@pytest.fixture
def clock():
    # 2025-03-10 12:00 UTC is 15:00 in Istanbul
    return FakeClock(datetime(2025, 3, 10, 12, 0, tzinfo=timezone.utc))


@pytest.fixture
def storage():
    return MemoryStorage()


@pytest.fixture
async def user(storage):
    return await storage.create_user(wallet_address=WALLET)


@pytest.fixture
def farcaster():
    return StubFarcaster()


@pytest.fixture
def client(storage, clock, farcaster):
    """API client on the memory backend with the fake clock."""
    app.state.memory_storage = storage
    app.dependency_overrides[get_clock] = lambda: clock
    app.dependency_overrides[get_farcaster_service] = lambda: farcaster

    yield TestClient(app)

    app.dependency_overrides.clear()
    app.state.memory_storage = None
