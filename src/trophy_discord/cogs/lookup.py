from discord.ext import commands

from trophy_core.parser import extract_app_id, parse_steam_user

from ..logging_config import get_logger
from ..utils import create_app_embed, create_progress_embed, create_search_embed, send_message

logger = get_logger(__name__)


class Lookup(commands.Cog):
    """
    Lookup Cog: game search, app details and per-user achievement progress.
    """

    def __init__(self, bot):
        self.bot = bot

    @commands.command(name="search")
    async def search_command(self, ctx: commands.Context, *, text: str):
        """Search the catalog for games by name or appid."""
        results = await self.bot.handler.search(text)
        if results is None:
            await send_message(ctx, "❌ Search text is too long.", silent=True)
            return
        await send_message(ctx, embed=create_search_embed(text, results), silent=True)

    @commands.command(name="app")
    async def app_command(self, ctx: commands.Context, app: str):
        """Show store details and achievement count for an app (id or store URL)."""
        appid = extract_app_id(app)
        if not appid:
            await send_message(ctx, f"❌ `{app}` is not a Steam appid or store link.", silent=True)
            return

        info = await self.bot.handler.get_app_info(appid)
        if info is None:
            await send_message(ctx, f"❌ No details available for app `{appid}`.", silent=True)
            return
        await send_message(ctx, embed=create_app_embed(info), silent=True)

    @commands.command(name="achievements")
    async def achievements_command(self, ctx: commands.Context, app: str, user: str):
        """Show a user's achievement progress for an app."""
        appid = extract_app_id(app)
        if not appid:
            await send_message(ctx, f"❌ `{app}` is not a Steam appid or store link.", silent=True)
            return

        parsed = parse_steam_user(user)
        if parsed is None:
            await send_message(ctx, f"❌ `{user}` is not a Steam profile.", silent=True)
            return

        kind, value = parsed
        steamid = value if kind == "steamid" else await self.bot.handler.resolve_steam_id(value)
        if not steamid:
            await send_message(ctx, f"❌ Could not find Steam profile `{value}`.", silent=True)
            return

        user_info = await self.bot.handler.get_user_info(appid, steamid)
        if user_info is None:
            await send_message(
                ctx, "❌ No achievement data. The profile may be private or the game unplayed.", silent=True
            )
            return

        info = await self.bot.handler.get_app_info(appid)
        await send_message(ctx, embed=create_progress_embed(info, steamid, user_info), silent=True)

    @search_command.error
    @app_command.error
    @achievements_command.error
    async def lookup_error(self, ctx, error):
        if isinstance(error, commands.MissingRequiredArgument):
            await send_message(ctx, f"Missing argument: `{error.param.name}`.", silent=True)
        else:
            logger.error("lookup command failed: %s", error, exc_info=error)
            await send_message(ctx, "Lookup failed. See logs.", silent=True)


async def setup(bot):
    await bot.add_cog(Lookup(bot))
