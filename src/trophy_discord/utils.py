import logging
from typing import Any

import discord
from bs4 import BeautifulSoup

from trophy_core.models import AppInfo, AppSummary

logger = logging.getLogger(__name__)

SUPPORTS_SILENT = discord.version_info.major >= 2
EMBED_DESCRIPTION_LIMIT = 4000
STEAM_BLUE = discord.Color.from_str("#1B2838")


async def send_message(target, content=None, embed=None, silent=False):
    """Helper to send messages with optional silent flag, compatible with older discord.py."""
    kwargs = {}
    if content is not None:
        kwargs["content"] = content
    if embed is not None:
        kwargs["embed"] = embed
    if silent:
        kwargs["allowed_mentions"] = discord.AllowedMentions.none()
        if SUPPORTS_SILENT:
            kwargs["silent"] = True
    return await target.send(**kwargs)


def strip_html(html: str | None) -> str:
    """Steam descriptions are HTML fragments; embeds want plain text."""
    if not html:
        return ""
    return BeautifulSoup(html, "html.parser").get_text(" ", strip=True)


def truncate(text: str, limit: int) -> str:
    return text if len(text) <= limit else text[: limit - 3] + "..."


def create_search_embed(query: str, results: list[AppSummary]) -> discord.Embed:
    embed = discord.Embed(title=f"Search: {truncate(query, 200)}", color=STEAM_BLUE)
    if not results:
        embed.description = "No games found."
        return embed

    lines = [f"`{app.appid}` [{app.name}](https://store.steampowered.com/app/{app.appid}/)" for app in results]
    embed.description = truncate("\n".join(lines), EMBED_DESCRIPTION_LIMIT)
    embed.set_footer(text=f"{len(results)} result(s)")
    return embed


def create_app_embed(info: AppInfo) -> discord.Embed:
    embed = discord.Embed(
        title=info.name or f"App {info.appid}",
        url=info.store_url,
        description=truncate(strip_html(info.short_description), EMBED_DESCRIPTION_LIMIT),
        color=STEAM_BLUE,
    )
    if info.header_image:
        embed.set_image(url=info.header_image)

    if info.is_free:
        embed.add_field(name="Price", value="Free to Play", inline=True)
    elif info.price_overview:
        embed.add_field(name="Price", value=info.price_overview.get("final_formatted", "Unknown"), inline=True)

    if info.release_date:
        embed.add_field(name="Release Date", value=info.release_date.get("date") or "Unknown", inline=True)
    if info.developers:
        embed.add_field(name="Developers", value=truncate(", ".join(info.developers), 1024), inline=False)
    if info.publishers:
        embed.add_field(name="Publishers", value=truncate(", ".join(info.publishers), 1024), inline=False)

    if info.achievements is None:
        embed.add_field(name="Achievements", value="Unknown", inline=True)
    else:
        embed.add_field(name="Achievements", value=str(len(info.achievements)), inline=True)

    embed.set_footer(text=f"TrophyHunter • App {info.appid}")
    return embed


def summarize_progress(user_info: dict[str, Any]) -> tuple[int, int]:
    """(unlocked, listed) counts from a GetUserStatsForGame document."""
    achievements = user_info.get("playerstats", {}).get("achievements") or []
    unlocked = sum(1 for a in achievements if a.get("achieved"))
    return unlocked, len(achievements)


def create_progress_embed(info: AppInfo | None, steamid: str, user_info: dict[str, Any]) -> discord.Embed:
    stats = user_info.get("playerstats", {})
    title = stats.get("gameName") or (info.name if info else None) or "Unknown App"
    unlocked, listed = summarize_progress(user_info)
    total = len(info.achievements) if info and info.achievements else listed

    embed = discord.Embed(title=f"{title} ({steamid})", color=STEAM_BLUE)
    if info:
        embed.url = info.store_url
        if info.header_image:
            embed.set_thumbnail(url=info.header_image)
    embed.add_field(name="Unlocked", value=f"{unlocked} / {total}", inline=True)
    if total:
        embed.add_field(name="Completion", value=f"{unlocked * 100 // total}%", inline=True)
    return embed
