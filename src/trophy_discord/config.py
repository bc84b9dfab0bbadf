import os

from dotenv import load_dotenv

load_dotenv()

BOT_TOKEN = os.getenv("BOT_TOKEN", "")
STEAM_API_KEY = os.getenv("STEAM_API_KEY", "")
DATABASE_URL = os.getenv("DATABASE_URL", "sqlite+aiosqlite:///./data/catalog.db")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")
HTTP_TIMEOUT = float(os.getenv("HTTP_TIMEOUT", "10"))  # seconds
STORE_CALLS_PER_SECOND = float(os.getenv("STORE_CALLS_PER_SECOND", "0.66"))

# Cache windows (minutes)
APP_INFO_CACHE_MINUTES = float(os.getenv("APP_INFO_CACHE_MINUTES", "60"))
USER_INFO_CACHE_MINUTES = float(os.getenv("USER_INFO_CACHE_MINUTES", "10"))
SEARCH_CACHE_MINUTES = float(os.getenv("SEARCH_CACHE_MINUTES", "60"))
VALIDITY_CACHE_MINUTES = float(os.getenv("VALIDITY_CACHE_MINUTES", "1440"))
