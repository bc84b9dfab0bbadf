import logging
import time
from collections.abc import Callable
from typing import Any

from sqlalchemy.exc import SQLAlchemyError

from .cache import TTLCache
from .catalog import Catalog
from .constants import (
    APP_INFO_CACHE_MINUTES,
    MAX_APP_ID,
    MAX_SEARCH_LENGTH,
    SEARCH_CACHE_MINUTES,
    USER_INFO_CACHE_MINUTES,
    VALIDITY_CACHE_MINUTES,
    VANITY_CACHE_MINUTES,
)
from .models import AppInfo, AppSummary
from .parser import is_steam_id64
from .steam import fetch_app_info, fetch_user_achievements, resolve_vanity
from .steam_api_manager import SteamAPIManager

logger = logging.getLogger(__name__)

# Errors a catalog query can surface; anything here degrades the answer instead of raising
DB_ERRORS = (SQLAlchemyError, OSError, RuntimeError)


class AppHandler:
    """
    Answers search, app and user lookups, keeping Steam traffic to a minimum.

    Each concern has its own TTLCache. Detail and user lookups are gated by a
    cheap catalog check so unknown appids never reach the Steam API. Public
    methods never raise: every failure ends in None (or an empty list for search).
    """

    def __init__(
        self,
        catalog: Catalog,
        steam: SteamAPIManager,
        search_ttl: float = SEARCH_CACHE_MINUTES,
        app_info_ttl: float = APP_INFO_CACHE_MINUTES,
        user_info_ttl: float = USER_INFO_CACHE_MINUTES,
        validity_ttl: float = VALIDITY_CACHE_MINUTES,
        vanity_ttl: float = VANITY_CACHE_MINUTES,
        clock: Callable[[], float] = time.time,
    ):
        self.catalog = catalog
        self.steam = steam

        self.app_list_cache: TTLCache[str, list[AppSummary]] = TTLCache(search_ttl, clock)
        self.app_info_cache: TTLCache[str, AppInfo] = TTLCache(app_info_ttl, clock)
        self.user_info_cache: TTLCache[str, dict[str, Any]] = TTLCache(user_info_ttl, clock)
        self.validity_cache: TTLCache[str, bool] = TTLCache(validity_ttl, clock)
        self.vanity_cache: TTLCache[str, str] = TTLCache(vanity_ttl, clock)

    async def search(self, text: str) -> list[AppSummary] | None:
        if len(text) > MAX_SEARCH_LENGTH:
            return None

        cached = self.app_list_cache.get(text)
        if cached is not None:
            return cached

        try:
            results = await self.catalog.search_apps(text)
        except DB_ERRORS as e:
            logger.error(f"Catalog search failed for {text[:64]!r}: {e}")
            return []
        except Exception as e:
            logger.exception(f"Unexpected error searching for {text[:64]!r}: {e}")
            return []

        self.app_list_cache.put(text, results)
        return results

    async def get_app_info(self, appid: str | int) -> AppInfo | None:
        appid = str(appid).strip()

        cached = self.app_info_cache.get(appid)
        if cached is not None:
            logger.debug(f"App info cache hit for {appid}")
            return cached

        if not await self._is_valid_or_false(appid):
            return None

        info = await fetch_app_info(appid, self.steam)
        if info is None:
            return None

        self.app_info_cache.put(appid, info)
        return info

    async def get_user_info(self, appid: str | int, steamid: str | int) -> dict[str, Any] | None:
        appid = str(appid).strip()
        steamid = str(steamid).strip()
        if not _is_digits(steamid):
            return None
        key = user_cache_key(appid, steamid)

        cached = self.user_info_cache.get(key)
        if cached is not None:
            return cached

        if not await self._is_valid_or_false(appid):
            return None

        info = await fetch_user_achievements(appid, steamid, self.steam)
        if info is None:
            return None

        self.user_info_cache.put(key, info)
        return info

    async def resolve_steam_id(self, user: str) -> str | None:
        """SteamID64 for a SteamID64 or a custom profile name."""
        user = user.strip()
        if is_steam_id64(user):
            return user

        cached = self.vanity_cache.get(user)
        if cached is not None:
            return cached

        steamid = await resolve_vanity(user, self.steam)
        if steamid:
            self.vanity_cache.put(user, steamid)
        return steamid

    async def is_valid(self, appid: str | int) -> bool:
        """
        Whether ``appid`` names a catalog entry that is not marked invalid.
        Both answers are cached. Database errors propagate.
        """
        appid = str(appid).strip()

        cached = self.validity_cache.get(appid)
        if cached is not None:
            return cached

        if not _is_digits(appid) or int(appid) > MAX_APP_ID:
            valid = False
        else:
            valid = await self.catalog.count_valid(int(appid)) > 0

        self.validity_cache.put(appid, valid)
        return valid

    async def _is_valid_or_false(self, appid: str) -> bool:
        try:
            valid = await self.is_valid(appid)
        except DB_ERRORS as e:
            logger.error(f"Validation query failed for {appid}: {e}")
            return False
        except Exception as e:
            logger.exception(f"Unexpected error validating {appid!r}: {e}")
            return False
        if not valid:
            logger.info(f"Rejected lookup for invalid appid {appid!r}")
        return valid


def user_cache_key(appid: str, steamid: str) -> str:
    # ids are digit-only, so ';' cannot occur inside either part
    return f"{appid};{steamid}"


def _is_digits(value: str) -> bool:
    return value.isascii() and value.isdigit()
