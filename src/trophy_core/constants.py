# Cache windows, in minutes
DEFAULT_CACHE_MINUTES = 60
APP_INFO_CACHE_MINUTES = 60
SEARCH_CACHE_MINUTES = 60
USER_INFO_CACHE_MINUTES = 10
VALIDITY_CACHE_MINUTES = 24 * 60
VANITY_CACHE_MINUTES = 60

# Search bounds
MAX_SEARCH_LENGTH = 1024
SEARCH_RESULT_LIMIT = 30

# appid column is a signed 64-bit integer
MAX_APP_ID = 2**63 - 1

# Catalog kinds
GAME_TYPE = "game"
INVALID_TYPE = "invalid"

# Steam endpoints
STORE_APP_DETAILS_URL = "https://store.steampowered.com/api/appdetails"
SCHEMA_FOR_GAME_URL = "https://api.steampowered.com/ISteamUserStats/GetSchemaForGame/v2/"
USER_STATS_FOR_GAME_URL = "https://api.steampowered.com/ISteamUserStats/GetUserStatsForGame/v2/"
RESOLVE_VANITY_URL = "https://api.steampowered.com/ISteamUser/ResolveVanityURL/v0001/"
STORE_APP_URL = "https://store.steampowered.com/app/{appid}/"

# Store API allows roughly 200 requests per 5 minutes
STORE_CALLS_PER_SECOND = 0.66
WEB_API_CALLS_PER_SECOND = 4.0
