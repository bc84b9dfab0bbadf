import aiohttp

HEADERS = {
    "User-Agent": "TrophyHunter/1.0 (Steam achievement lookup; +https://github.com/yourusername/TrophyHunter)",
    "Accept": "application/json",
}

DEFAULT_TIMEOUT_SECONDS = 10.0


def make_timeout(seconds: float = DEFAULT_TIMEOUT_SECONDS) -> aiohttp.ClientTimeout:
    """Total timeout applied to every upstream request."""
    return aiohttp.ClientTimeout(total=seconds)
