import asyncio
import logging
from collections.abc import Awaitable
from typing import Any, TypeVar

from .exceptions import TrophyException
from .models import Achievement, AppInfo, Platforms, SupportInfo
from .steam_api_manager import SteamAPIManager

logger = logging.getLogger(__name__)

T = TypeVar("T")

# AppInfo fields copied verbatim from the appdetails "data" object
_PLAIN_FIELDS = (
    "name",
    "type",
    "website",
    "header_image",
    "is_free",
    "legal_notice",
    "about_the_game",
    "short_description",
    "detailed_description",
    "background",
    "background_raw",
    "controller_support",
    "price_overview",
    "release_date",
    "supported_languages",
    "developers",
    "publishers",
    "dlc",
)


async def _guarded(call: Awaitable[T], what: str) -> T | None:
    """Runs one upstream call; failures are logged and become None."""
    try:
        return await call
    except TrophyException as e:
        logger.warning(f"Steam lookup failed ({what}): {e}")
    except Exception as e:
        logger.exception(f"Unexpected error during Steam lookup ({what}): {e}")
    return None


async def fetch_app_info(appid: str, manager: SteamAPIManager) -> AppInfo | None:
    """
    Fetches store details and the achievement schema concurrently and merges them.
    Returns None when the store has no details for the app.
    """
    details, schema = await asyncio.gather(
        _guarded(manager.fetch_app_details(appid), f"appdetails {appid}"),
        _guarded(manager.fetch_achievement_schema(appid), f"schema {appid}"),
    )
    return compile_app_info(appid, details, schema)


async def fetch_user_achievements(appid: str, steamid: str, manager: SteamAPIManager) -> dict[str, Any] | None:
    """
    Returns the ``GetUserStatsForGame`` document, or None when the profile is
    private, the user never played the app, or the payload is malformed.
    """
    data = await _guarded(manager.fetch_user_stats(appid, steamid), f"user stats {appid}/{steamid}")
    if not isinstance(data, dict):
        return None

    stats = data.get("playerstats")
    if not isinstance(stats, dict) or "error" in stats:
        logger.info(f"No usable stats for user {steamid} in app {appid}")
        return None
    return data


async def resolve_vanity(vanity: str, manager: SteamAPIManager) -> str | None:
    return await _guarded(manager.resolve_vanity_url(vanity), f"vanity {vanity}")


def compile_app_info(appid: str, details: dict | None, schema: dict | None) -> AppInfo | None:
    """Builds an AppInfo from raw ``appdetails`` and ``GetSchemaForGame`` documents."""
    if not details:
        return None

    entry = details.get(str(appid))
    data = entry.get("data") if isinstance(entry, dict) else None
    if not isinstance(data, dict):
        return None

    info = AppInfo(appid=str(appid), **{field: data.get(field) for field in _PLAIN_FIELDS})

    platforms = data.get("platforms")
    if isinstance(platforms, dict):
        info.platforms = Platforms(
            windows=platforms.get("windows"),
            mac=platforms.get("mac"),
            linux=platforms.get("linux"),
        )

    support = data.get("support_info")
    if isinstance(support, dict):
        info.support_info = SupportInfo(url=support.get("url") or None, email=support.get("email") or None)

    info.achievements = _extract_achievements(schema)
    return info


def _extract_achievements(schema: dict | None) -> list[Achievement] | None:
    if not isinstance(schema, dict):
        return None
    game = schema.get("game")
    stats = game.get("availableGameStats") if isinstance(game, dict) else None
    raw = stats.get("achievements") if isinstance(stats, dict) else None
    if not isinstance(raw, list):
        return None
    return [Achievement.from_schema(a) for a in raw if isinstance(a, dict)]
