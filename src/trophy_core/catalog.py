import logging

from sqlalchemy import String, cast, func, or_, select

from .constants import GAME_TYPE, INVALID_TYPE, SEARCH_RESULT_LIMIT
from .db.engine import Database
from .db.models import CatalogApp
from .models import AppSummary

logger = logging.getLogger(__name__)


class Catalog:
    """
    Read-only queries against the ``appinfo`` table.

    Errors from the database are not handled here; the handler decides how to degrade.
    """

    def __init__(self, db: Database, limit: int = SEARCH_RESULT_LIMIT):
        self.db = db
        self.limit = limit

    async def search_apps(self, text: str) -> list[AppSummary]:
        """
        Games whose name contains ``text`` or whose appid equals it.

        Names that are mostly the query come first: rows are ordered by how many
        characters are left once every occurrence of the query is cut out of the
        name (an exact match leaves none), then alphabetically.
        """
        remainder = func.length(func.replace(func.lower(CatalogApp.name), func.lower(text), ""))
        stmt = (
            select(CatalogApp)
            .where(
                or_(
                    CatalogApp.name.contains(text, autoescape=True),
                    cast(CatalogApp.appid, String) == text,
                ),
                CatalogApp.type == GAME_TYPE,
            )
            .order_by(remainder.asc(), CatalogApp.name.asc())
            .limit(self.limit)
        )

        async with self.db.session as session:
            rows = (await session.execute(stmt)).scalars().all()

        logger.debug(f"Catalog search for {text!r} returned {len(rows)} rows")
        return [
            AppSummary(
                appid=row.appid,
                name=row.name,
                type=row.type,
                header_image=row.header_image,
                background=row.background,
            )
            for row in rows
        ]

    async def count_valid(self, appid: int) -> int:
        """Number of catalog rows for ``appid`` that are not marked invalid."""
        stmt = (
            select(func.count())
            .select_from(CatalogApp)
            .where(CatalogApp.appid == appid, CatalogApp.type.is_distinct_from(INVALID_TYPE))
        )
        async with self.db.session as session:
            return (await session.execute(stmt)).scalar_one()
