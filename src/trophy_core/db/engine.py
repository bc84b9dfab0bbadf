import os

from sqlalchemy import event
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine

from .models import Base


class Database:
    def __init__(self, db_url: str, pool_size: int = 5, create_tables: bool = True):
        self.db_url = db_url
        self.pool_size = pool_size
        self.create_tables = create_tables
        self.engine: AsyncEngine | None = None
        self.session_factory: async_sessionmaker | None = None

    async def connect(self):
        """Initializes the connection pool and, if requested, creates the catalog table."""
        # Ensure the URL is formatted correctly (e.g. sqlite+aiosqlite:///file.db)
        if self.db_url.startswith("sqlite://"):
            self.db_url = self.db_url.replace("sqlite://", "sqlite+aiosqlite://", 1)

        if "sqlite" in self.db_url:
            db_path = make_url(self.db_url).database
            if db_path and db_path != ":memory:":
                os.makedirs(os.path.dirname(os.path.abspath(db_path)), exist_ok=True)

            self.engine = create_async_engine(self.db_url, echo=False)

            @event.listens_for(self.engine.sync_engine, "connect")
            def set_sqlite_pragma(dbapi_connection, connection_record):
                cursor = dbapi_connection.cursor()
                cursor.execute("PRAGMA journal_mode=WAL")
                cursor.execute("PRAGMA synchronous=NORMAL")
                cursor.close()

        else:
            # The pool bounds concurrent queries; extra callers wait for a free connection
            self.engine = create_async_engine(
                self.db_url, echo=False, pool_size=self.pool_size, pool_pre_ping=True
            )

        if self.create_tables:
            async with self.engine.begin() as conn:
                await conn.run_sync(Base.metadata.create_all)

        self.session_factory = async_sessionmaker(self.engine, expire_on_commit=False)

    async def close(self):
        if self.engine:
            await self.engine.dispose()

    @property
    def session(self):
        """Returns a new session context manager."""
        if not self.session_factory:
            raise RuntimeError("Database not connected. Call connect() first.")
        return self.session_factory()
