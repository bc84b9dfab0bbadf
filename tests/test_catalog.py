import pytest

from trophy_core.catalog import Catalog
from trophy_core.db.engine import Database
from trophy_core.models import AppSummary


@pytest.mark.asyncio
async def test_search_ranks_closest_names_first(catalog: Catalog):
    results = await catalog.search_apps("Half-Life")
    names = [app.name for app in results]

    assert names == [
        "Half-Life",
        "Half-Life 2",
        "Half-Life 2: Episode One",
        "The Half-Life Experience",
    ]
    assert all(isinstance(app, AppSummary) for app in results)


@pytest.mark.asyncio
async def test_search_only_returns_games(catalog: Catalog):
    results = await catalog.search_apps("Soundtrack")
    assert results == []


@pytest.mark.asyncio
async def test_search_is_case_insensitive(catalog: Catalog):
    results = await catalog.search_apps("half-life")
    assert results[0].name == "Half-Life"


@pytest.mark.asyncio
async def test_search_matches_exact_appid(catalog: Catalog):
    results = await catalog.search_apps("400")
    assert [app.appid for app in results] == [400]
    assert results[0].name == "Portal"
    assert results[0].type == "game"


@pytest.mark.asyncio
async def test_search_escapes_like_wildcards(catalog: Catalog):
    results = await catalog.search_apps("100%")
    assert [app.name for app in results] == ["100% Orange Juice"]


@pytest.mark.asyncio
async def test_search_prefers_smaller_remainder(catalog: Catalog):
    results = await catalog.search_apps("100")
    assert [app.name for app in results] == ["1000 Amps", "100% Orange Juice"]


@pytest.mark.asyncio
async def test_search_respects_limit(database):
    catalog = Catalog(database, limit=2)
    results = await catalog.search_apps("Half-Life")
    assert [app.name for app in results] == ["Half-Life", "Half-Life 2"]


@pytest.mark.asyncio
async def test_count_valid(catalog: Catalog):
    assert await catalog.count_valid(400) == 1
    # Non-game kinds are still valid appids
    assert await catalog.count_valid(323140) == 1
    assert await catalog.count_valid(555) == 0
    # Rows without a kind are not the invalid sentinel
    assert await catalog.count_valid(777) == 1
    assert await catalog.count_valid(42) == 0


@pytest.mark.asyncio
async def test_database_creates_parent_directory(tmp_path):
    db_path = tmp_path / "nested" / "dir" / "catalog.db"
    db = Database(f"sqlite:///{db_path}")
    await db.connect()
    try:
        assert db.db_url.startswith("sqlite+aiosqlite://")
        assert await Catalog(db).search_apps("anything") == []
    finally:
        await db.close()
    assert db_path.parent.is_dir()


@pytest.mark.asyncio
async def test_session_requires_connect():
    with pytest.raises(RuntimeError):
        Database("sqlite+aiosqlite:///unused.db").session
