import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from trophy_core.handler import AppHandler, user_cache_key
from trophy_core.models import AppSummary

from .conftest import app_details_payload, schema_payload

USER_STATS = {"playerstats": {"steamID": "76561197960287930", "achievements": [{"name": "a", "achieved": 1}]}}


@pytest.fixture
def mock_catalog():
    catalog = MagicMock()
    catalog.search_apps = AsyncMock(return_value=[AppSummary(appid=400, name="Portal", type="game")])
    catalog.count_valid = AsyncMock(return_value=1)
    return catalog


@pytest.fixture
def handler(mock_catalog, steam_manager, clock):
    steam_manager.fetch_app_details.return_value = app_details_payload("400")
    steam_manager.fetch_achievement_schema.return_value = schema_payload("a")
    steam_manager.fetch_user_stats.return_value = USER_STATS
    return AppHandler(mock_catalog, steam_manager, clock=clock)


# --- search ---


@pytest.mark.asyncio
async def test_search_caches_by_exact_string(handler, mock_catalog):
    first = await handler.search("Portal")
    second = await handler.search("Portal")
    await handler.search("portal")

    assert first == second
    assert mock_catalog.search_apps.await_count == 2


@pytest.mark.asyncio
async def test_search_rejects_oversized_input(handler, mock_catalog):
    assert await handler.search("x" * 1025) is None
    mock_catalog.search_apps.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_accepts_max_length(handler, mock_catalog):
    assert await handler.search("x" * 1024) is not None
    mock_catalog.search_apps.assert_awaited_once()


@pytest.mark.asyncio
async def test_search_degrades_to_empty_on_db_error(handler, mock_catalog):
    mock_catalog.search_apps.side_effect = OperationalError("SELECT", {}, Exception("db down"))

    assert await handler.search("Portal") == []

    # Failures are not cached
    mock_catalog.search_apps.side_effect = None
    assert len(await handler.search("Portal")) == 1


@pytest.mark.asyncio
async def test_search_refreshes_after_ttl(handler, mock_catalog, clock):
    await handler.search("Portal")
    clock.advance(minutes=61)
    await handler.search("Portal")
    assert mock_catalog.search_apps.await_count == 2


# --- validation ---


@pytest.mark.asyncio
async def test_is_valid_caches_negative_results(handler, mock_catalog):
    mock_catalog.count_valid.return_value = 0

    assert await handler.is_valid("555") is False
    assert await handler.is_valid("555") is False
    mock_catalog.count_valid.assert_awaited_once_with(555)


@pytest.mark.asyncio
async def test_is_valid_rejects_non_numeric_without_query(handler, mock_catalog):
    assert await handler.is_valid("portal") is False
    assert await handler.is_valid("") is False
    mock_catalog.count_valid.assert_not_awaited()


# --- app info ---


@pytest.mark.asyncio
async def test_get_app_info_fetches_and_caches(handler, steam_manager):
    info = await handler.get_app_info(400)
    again = await handler.get_app_info("400")

    assert info is not None
    assert info.name == "Portal"
    assert again is info
    steam_manager.fetch_app_details.assert_awaited_once()
    steam_manager.fetch_achievement_schema.assert_awaited_once()


@pytest.mark.asyncio
async def test_get_app_info_cache_hit_skips_validation(handler, mock_catalog, clock):
    await handler.get_app_info("400")
    clock.advance(minutes=30)
    await handler.get_app_info("400")
    mock_catalog.count_valid.assert_awaited_once()


@pytest.mark.asyncio
async def test_invalid_app_never_reaches_steam(handler, mock_catalog, steam_manager):
    mock_catalog.count_valid.return_value = 0

    # Fresh query, then cached validity
    assert await handler.get_app_info("555") is None
    assert await handler.get_app_info("555") is None

    mock_catalog.count_valid.assert_awaited_once()
    steam_manager.fetch_app_details.assert_not_awaited()
    steam_manager.fetch_achievement_schema.assert_not_awaited()
    assert handler.app_info_cache.get("555", allow_stale=True) is None


@pytest.mark.asyncio
async def test_get_app_info_missing_details_not_cached(handler, steam_manager):
    steam_manager.fetch_app_details.return_value = {"400": {"success": True}}

    assert await handler.get_app_info("400") is None
    assert await handler.get_app_info("400") is None
    assert steam_manager.fetch_app_details.await_count == 2


@pytest.mark.asyncio
async def test_get_app_info_db_error_returns_none(handler, mock_catalog, steam_manager):
    mock_catalog.count_valid.side_effect = OperationalError("SELECT", {}, Exception("db down"))

    assert await handler.get_app_info("400") is None
    steam_manager.fetch_app_details.assert_not_awaited()

    # The failed validation is not remembered
    mock_catalog.count_valid.side_effect = None
    assert await handler.get_app_info("400") is not None


@pytest.mark.asyncio
async def test_concurrent_misses_both_fetch(handler, steam_manager):
    first, second = await asyncio.gather(handler.get_app_info("400"), handler.get_app_info("400"))
    assert first.name == second.name == "Portal"
    assert steam_manager.fetch_app_details.await_count == 2


# --- user info ---


def test_user_cache_key_does_not_collide():
    assert user_cache_key("1", "23") != user_cache_key("12", "3")


@pytest.mark.asyncio
async def test_get_user_info_distinct_pairs(handler, steam_manager):
    await handler.get_user_info("1", "23")
    await handler.get_user_info("12", "3")
    await handler.get_user_info("1", "23")

    assert steam_manager.fetch_user_stats.await_count == 2
    assert handler.user_info_cache.get("1;23") is not None
    assert handler.user_info_cache.get("12;3") is not None


@pytest.mark.asyncio
async def test_get_user_info_expires_before_app_info(handler, steam_manager, clock):
    await handler.get_app_info("400")
    await handler.get_user_info("400", "76561197960287930")
    clock.advance(minutes=11)

    await handler.get_app_info("400")
    await handler.get_user_info("400", "76561197960287930")

    steam_manager.fetch_app_details.assert_awaited_once()
    assert steam_manager.fetch_user_stats.await_count == 2


@pytest.mark.asyncio
async def test_get_user_info_invalid_app(handler, mock_catalog, steam_manager):
    mock_catalog.count_valid.return_value = 0
    assert await handler.get_user_info("555", "76561197960287930") is None
    steam_manager.fetch_user_stats.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_user_info_rejects_non_numeric_user(handler, steam_manager):
    assert await handler.get_user_info("400", "gaben") is None
    steam_manager.fetch_user_stats.assert_not_awaited()


@pytest.mark.asyncio
async def test_get_user_info_private_profile_not_cached(handler, steam_manager):
    steam_manager.fetch_user_stats.return_value = {"playerstats": {"error": "Profile is not public"}}

    assert await handler.get_user_info("400", "76561197960287930") is None
    assert await handler.get_user_info("400", "76561197960287930") is None
    assert steam_manager.fetch_user_stats.await_count == 2


# --- steam id resolution ---


@pytest.mark.asyncio
async def test_resolve_steam_id_passthrough(handler, steam_manager):
    assert await handler.resolve_steam_id("76561197960287930") == "76561197960287930"
    steam_manager.resolve_vanity_url.assert_not_awaited()


@pytest.mark.asyncio
async def test_resolve_steam_id_caches_vanity(handler, steam_manager):
    steam_manager.resolve_vanity_url.return_value = "76561197960287930"

    assert await handler.resolve_steam_id("gaben") == "76561197960287930"
    assert await handler.resolve_steam_id("gaben") == "76561197960287930"
    steam_manager.resolve_vanity_url.assert_awaited_once_with("gaben")


@pytest.mark.asyncio
async def test_resolve_steam_id_unknown(handler, steam_manager):
    steam_manager.resolve_vanity_url.return_value = None
    assert await handler.resolve_steam_id("nobody") is None
    assert await handler.resolve_steam_id("nobody") is None
    assert steam_manager.resolve_vanity_url.await_count == 2


# --- inputs the catalog driver cannot take ---


@pytest.mark.asyncio
async def test_oversized_appid_is_invalid_without_query(handler, mock_catalog, steam_manager):
    huge = "9" * 30

    assert await handler.get_app_info(huge) is None
    assert await handler.get_user_info(huge, "76561197960287930") is None
    assert handler.validity_cache.get(huge) is False
    mock_catalog.count_valid.assert_not_awaited()
    steam_manager.fetch_app_details.assert_not_awaited()
    steam_manager.fetch_user_stats.assert_not_awaited()


@pytest.mark.asyncio
async def test_largest_appid_still_queries(handler, mock_catalog):
    mock_catalog.count_valid.return_value = 0
    assert await handler.is_valid(str(2**63 - 1)) is False
    mock_catalog.count_valid.assert_awaited_once_with(2**63 - 1)


@pytest.mark.asyncio
async def test_real_catalog_rejects_oversized_appid(catalog, steam_manager):
    handler = AppHandler(catalog, steam_manager)

    assert await handler.get_app_info("9" * 30) is None
    assert await handler.get_user_info("9" * 30, "76561197960287930") is None
    steam_manager.fetch_app_details.assert_not_awaited()


@pytest.mark.asyncio
async def test_search_unencodable_text_returns_empty(catalog, steam_manager):
    handler = AppHandler(catalog, steam_manager)
    assert await handler.search("\ud800") == []


@pytest.mark.asyncio
async def test_unexpected_catalog_errors_degrade(handler, mock_catalog, steam_manager):
    mock_catalog.search_apps.side_effect = ValueError("bad parameter")
    mock_catalog.count_valid.side_effect = ValueError("bad parameter")

    assert await handler.search("Portal") == []
    assert await handler.get_app_info("400") is None
    assert await handler.get_user_info("400", "76561197960287930") is None
    steam_manager.fetch_app_details.assert_not_awaited()
    steam_manager.fetch_user_stats.assert_not_awaited()
