import aiohttp
from discord.ext import commands

from trophy_core.catalog import Catalog
from trophy_core.db.engine import Database
from trophy_core.handler import AppHandler
from trophy_core.rate_limiter import RateLimiter
from trophy_core.steam_api_manager import SteamAPIManager

from .config import (
    APP_INFO_CACHE_MINUTES,
    DATABASE_URL,
    HTTP_TIMEOUT,
    SEARCH_CACHE_MINUTES,
    STEAM_API_KEY,
    STORE_CALLS_PER_SECOND,
    USER_INFO_CACHE_MINUTES,
    VALIDITY_CACHE_MINUTES,
)
from .logging_config import get_logger

logger = get_logger(__name__)


class TrophyBot(commands.Bot):
    """
    The bot owns the process-wide resources: one HTTP session, one database
    pool and the single AppHandler that cogs reach through ``bot.handler``.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)

        self.db = Database(DATABASE_URL)
        self._http_session: aiohttp.ClientSession | None = None
        self.steam_manager: SteamAPIManager | None = None
        self.handler: AppHandler | None = None

    async def setup_hook(self):
        await self.db.connect()

        self._http_session = aiohttp.ClientSession()
        self.steam_manager = SteamAPIManager(
            session=self._http_session,
            api_key=STEAM_API_KEY,
            timeout=HTTP_TIMEOUT,
            store_limiter=RateLimiter(calls_per_second=STORE_CALLS_PER_SECOND),
        )
        self.handler = AppHandler(
            Catalog(self.db),
            self.steam_manager,
            search_ttl=SEARCH_CACHE_MINUTES,
            app_info_ttl=APP_INFO_CACHE_MINUTES,
            user_info_ttl=USER_INFO_CACHE_MINUTES,
            validity_ttl=VALIDITY_CACHE_MINUTES,
        )

        if not STEAM_API_KEY:
            logger.warning("STEAM_API_KEY is not set. Achievement schemas and user stats will be unavailable.")

        extensions = ["trophy_discord.cogs.lookup"]
        for ext in extensions:
            try:
                await self.load_extension(ext)
                logger.info(f"Loaded extension: {ext}")
            except Exception as e:
                logger.exception(f"Failed to load extension {ext}: {e}")

    async def close(self):
        if self._http_session:
            await self._http_session.close()

        await self.db.close()
        await super().close()
