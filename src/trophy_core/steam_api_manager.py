import asyncio
import json
import logging
from typing import Any

import aiohttp

from .constants import (
    RESOLVE_VANITY_URL,
    SCHEMA_FOR_GAME_URL,
    STORE_APP_DETAILS_URL,
    STORE_CALLS_PER_SECOND,
    USER_STATS_FOR_GAME_URL,
    WEB_API_CALLS_PER_SECOND,
)
from .exceptions import (
    AccessDenied,
    APIError,
    AppNotFound,
    MalformedResponse,
    NetworkError,
    RateLimitExceeded,
)
from .network import DEFAULT_TIMEOUT_SECONDS, HEADERS, make_timeout
from .rate_limiter import RateLimiter

logger = logging.getLogger(__name__)


class SteamAPIManager:
    """
    Thin client for the Steam store API and the Steam Web API.

    Every method returns the decoded JSON document or raises a ``TrophyException``.
    Store calls and Web API calls are paced by separate limiters because the
    store endpoint has the much tighter budget.
    """

    def __init__(
        self,
        session: aiohttp.ClientSession,
        api_key: str,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        store_limiter: RateLimiter | None = None,
        web_limiter: RateLimiter | None = None,
    ):
        self.session = session
        self.api_key = api_key
        self.timeout = make_timeout(timeout)
        self.store_limiter = store_limiter or RateLimiter(calls_per_second=STORE_CALLS_PER_SECOND)
        self.web_limiter = web_limiter or RateLimiter(calls_per_second=WEB_API_CALLS_PER_SECOND)

    async def fetch_app_details(self, appid: str) -> dict[str, Any]:
        """Raw ``appdetails`` document: ``{appid: {"success": bool, "data": {...}}}``."""
        params = {"appids": appid, "l": "english"}
        data = await self._get_json(STORE_APP_DETAILS_URL, params, self.store_limiter, "appdetails")
        entry = data.get(str(appid)) if isinstance(data, dict) else None
        if not isinstance(entry, dict):
            raise MalformedResponse("appdetails", f"no entry for {appid}")
        if not entry.get("success") or not isinstance(entry.get("data"), dict):
            raise AppNotFound(str(appid))
        return data

    async def fetch_achievement_schema(self, appid: str) -> dict[str, Any]:
        """Raw ``GetSchemaForGame`` document; ``game`` may be empty for apps without stats."""
        params = {"key": self.api_key, "appid": appid}
        return await self._get_json(SCHEMA_FOR_GAME_URL, params, self.web_limiter, "GetSchemaForGame")

    async def fetch_user_stats(self, appid: str, steamid: str) -> dict[str, Any]:
        """Raw ``GetUserStatsForGame`` document for one user and one app."""
        params = {"key": self.api_key, "appid": appid, "steamid": steamid}
        return await self._get_json(USER_STATS_FOR_GAME_URL, params, self.web_limiter, "GetUserStatsForGame")

    async def resolve_vanity_url(self, vanity: str) -> str | None:
        """Returns the SteamID64 for a custom profile name, or None if Steam does not know it."""
        params = {"key": self.api_key, "vanityurl": vanity}
        data = await self._get_json(RESOLVE_VANITY_URL, params, self.web_limiter, "ResolveVanityURL")
        response = data.get("response") if isinstance(data, dict) else None
        if not isinstance(response, dict):
            raise MalformedResponse("ResolveVanityURL", "missing 'response'")
        if response.get("success") == 1 and response.get("steamid"):
            return str(response["steamid"])
        return None

    async def _get_json(self, url: str, params: dict[str, Any], limiter: RateLimiter, endpoint: str) -> Any:
        await limiter.acquire()

        try:
            async with self.session.get(url, params=params, headers=HEADERS, timeout=self.timeout) as resp:
                if resp.status == 429:
                    retry_after = _parse_retry_after(resp.headers.get("Retry-After"))
                    logger.warning(f"Steam rate limit hit on {endpoint}. Backing off.")
                    limiter.penalize(retry_after or 10.0)
                    raise RateLimitExceeded(endpoint, retry_after)
                if resp.status in (401, 403):
                    raise AccessDenied(endpoint, resp.status)
                if resp.status == 404:
                    raise APIError(endpoint, resp.status, "Not Found")
                if resp.status != 200:
                    raise APIError(endpoint, resp.status, (await resp.text())[:200])

                body = await resp.text()

        except aiohttp.ClientError as e:
            raise NetworkError(f"{endpoint} connection failed: {e}", e) from e
        except asyncio.TimeoutError as e:
            raise NetworkError(f"{endpoint} timed out", e) from e

        try:
            return json.loads(body)
        except json.JSONDecodeError as e:
            raise MalformedResponse(endpoint, str(e)) from e


def _parse_retry_after(value: str | None) -> float | None:
    if not value:
        return None
    try:
        return float(value)
    except ValueError:
        return None
