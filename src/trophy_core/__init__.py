# core package for TrophyHunter
from . import cache, catalog, catalog_loader, handler, parser, steam, steam_api_manager

__all__ = ["cache", "catalog", "catalog_loader", "handler", "parser", "steam", "steam_api_manager"]
