import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from sqlalchemy import func, select

from .constants import GAME_TYPE, MAX_APP_ID
from .db.engine import Database
from .db.models import CatalogApp

logger = logging.getLogger(__name__)


def parse_app_list(document: Any) -> list[dict[str, Any]]:
    """
    Extracts app entries from a GetAppList dump.

    Accepts ``ISteamApps/GetAppList/v2`` (``{"applist": {"apps": [...]}}``),
    ``IStoreService/GetAppList/v1`` (``{"response": {"apps": [...]}}``) or a bare list.
    Entries without a usable appid or name are skipped.
    """
    if isinstance(document, dict):
        container = document.get("applist") or document.get("response") or {}
        apps = container.get("apps", []) if isinstance(container, dict) else []
    else:
        apps = document

    entries = []
    for app in apps or []:
        if not isinstance(app, dict):
            continue
        appid = app.get("appid")
        name = (app.get("name") or "").strip()
        if not isinstance(appid, int) or not 0 < appid <= MAX_APP_ID or not name:
            continue
        entries.append(app | {"name": name})
    return entries


def read_app_list(path: str | Path) -> list[dict[str, Any]]:
    with open(path, encoding="utf-8") as fh:
        return parse_app_list(json.load(fh))


async def load_catalog(
    db: Database, apps: Iterable[dict[str, Any]], default_type: str = GAME_TYPE, batch_size: int = 1000
) -> int:
    """
    Inserts or updates ``appinfo`` rows. ``type`` comes from the entry when the dump
    carries one, otherwise ``default_type`` (IStoreService lists only games by default).
    Returns the number of rows written.
    """
    written = 0
    async with db.session as session:
        for app in apps:
            await session.merge(
                CatalogApp(
                    appid=app["appid"],
                    name=app["name"],
                    type=app.get("type") or default_type,
                    header_image=app.get("header_image"),
                    background=app.get("background"),
                )
            )
            written += 1
            if written % batch_size == 0:
                await session.commit()
                logger.info(f"Loaded {written} catalog rows...")
        await session.commit()

    logger.info(f"Catalog load finished: {written} rows")
    return written


async def catalog_stats(db: Database) -> dict[str | None, int]:
    """Row count per app kind."""
    stmt = select(CatalogApp.type, func.count()).group_by(CatalogApp.type)
    async with db.session as session:
        return {kind: count for kind, count in (await session.execute(stmt)).all()}
