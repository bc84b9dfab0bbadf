from unittest.mock import AsyncMock, MagicMock

import pytest
import pytest_asyncio
from dotenv import load_dotenv

from trophy_core.catalog import Catalog
from trophy_core.db.engine import Database
from trophy_core.db.models import CatalogApp

load_dotenv()


class FakeClock:
    """Manually advanced clock, in seconds."""

    def __init__(self, start: float = 1_000_000.0):
        self.now = start

    def __call__(self) -> float:
        return self.now

    def advance(self, minutes: float = 0, seconds: float = 0):
        self.now += minutes * 60 + seconds


CATALOG_ROWS = [
    (70, "Half-Life", "game"),
    (220, "Half-Life 2", "game"),
    (999001, "The Half-Life Experience", "game"),
    (380, "Half-Life 2: Episode One", "game"),
    (323140, "Half-Life 2 Soundtrack", "music"),
    (400, "Portal", "game"),
    (620, "Portal 2", "game"),
    (123, "100% Orange Juice", "game"),
    (1000, "1000 Amps", "game"),
    (555, "Removed Game", "invalid"),
    (777, "Untyped", None),
]


@pytest.fixture
def clock():
    return FakeClock()


@pytest_asyncio.fixture
async def database(tmp_path):
    # Use a temporary database file for tests
    db = Database(f"sqlite+aiosqlite:///{tmp_path / 'catalog.db'}")
    await db.connect()
    async with db.session as session:
        session.add_all([CatalogApp(appid=appid, name=name, type=kind) for appid, name, kind in CATALOG_ROWS])
        await session.commit()
    yield db
    await db.close()


@pytest_asyncio.fixture
async def catalog(database):
    return Catalog(database)


@pytest.fixture
def steam_manager():
    manager = MagicMock()
    manager.fetch_app_details = AsyncMock()
    manager.fetch_achievement_schema = AsyncMock()
    manager.fetch_user_stats = AsyncMock()
    manager.resolve_vanity_url = AsyncMock()
    return manager


def app_details_payload(appid: str, **data):
    body = {"name": "Portal", "type": "game", "is_free": False, "developers": ["Valve"]}
    body.update(data)
    return {appid: {"success": True, "data": body}}


def schema_payload(*names: str):
    return {
        "game": {
            "gameName": "Portal",
            "availableGameStats": {
                "achievements": [
                    {"name": n, "displayName": n.title(), "hidden": 0, "icon": f"http://icon/{n}.jpg"} for n in names
                ]
            },
        }
    }
