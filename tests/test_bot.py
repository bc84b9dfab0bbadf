from unittest.mock import AsyncMock, MagicMock, patch

import discord
import pytest
from discord.ext import commands

from trophy_core.handler import AppHandler
from trophy_discord.bot import TrophyBot


@pytest.mark.asyncio
async def test_bot_initialization():
    with patch("trophy_discord.bot.Database") as MockDatabase:
        bot = TrophyBot(command_prefix="!", intents=discord.Intents.default())

        assert isinstance(bot, commands.Bot)
        assert bot.db is MockDatabase.return_value
        assert bot.handler is None


@pytest.mark.asyncio
async def test_bot_setup_hook_builds_single_handler():
    with (
        patch("aiohttp.ClientSession", return_value=MagicMock()) as mock_session,
        patch("trophy_discord.bot.Database") as MockDatabase,
    ):
        MockDatabase.return_value.connect = AsyncMock()

        bot = TrophyBot(command_prefix="!", intents=discord.Intents.default())
        bot.load_extension = AsyncMock()

        await bot.setup_hook()

        MockDatabase.return_value.connect.assert_awaited_once()
        mock_session.assert_called_once()
        assert isinstance(bot.handler, AppHandler)
        assert bot.handler.steam is bot.steam_manager
        bot.load_extension.assert_any_call("trophy_discord.cogs.lookup")
