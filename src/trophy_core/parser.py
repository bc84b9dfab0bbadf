import re

STEAM_APP_REGEX = re.compile(r"store\.steampowered\.com/app/(\d+)")
STEAM_PROFILE_REGEX = re.compile(r"steamcommunity\.com/profiles/(\d{17})")
STEAM_VANITY_REGEX = re.compile(r"steamcommunity\.com/id/([A-Za-z0-9_-]+)")
STEAMID64_REGEX = re.compile(r"^\d{17}$")
VANITY_NAME_REGEX = re.compile(r"^[A-Za-z0-9_-]{2,32}$")


def extract_app_id(text: str) -> str | None:
    """Accepts a bare appid or a store URL and returns the appid as a string."""
    text = text.strip()
    if text.isascii() and text.isdigit():
        return text
    match = STEAM_APP_REGEX.search(text)
    return match.group(1) if match else None


def is_steam_id64(text: str) -> bool:
    return bool(STEAMID64_REGEX.match(text))


def parse_steam_user(text: str) -> tuple[str, str] | None:
    """
    Classifies a user argument.

    Returns ``("steamid", id64)`` for SteamID64s and profile URLs,
    ``("vanity", name)`` for custom profile URLs and bare names, or None.
    """
    text = text.strip()
    if is_steam_id64(text):
        return ("steamid", text)

    match = STEAM_PROFILE_REGEX.search(text)
    if match:
        return ("steamid", match.group(1))

    match = STEAM_VANITY_REGEX.search(text)
    if match:
        return ("vanity", match.group(1))

    if VANITY_NAME_REGEX.match(text):
        return ("vanity", text)
    return None
