"""Async SQLAlchemy engine and session creation."""

from typing import Any

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from pkgtrack.config import settings


def _enable_sqlite_foreign_keys(dbapi_connection: Any, connection_record: Any) -> None:
    """SQLite ships with foreign key enforcement off; turn it on per connection."""
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


def create_db_engine(url: str | None = None) -> AsyncEngine:
    """Create an async SQLAlchemy engine."""
    url = url or settings.database_url
    engine_kwargs: dict = {"echo": False}

    # SQLite does not support pool_size / max_overflow
    if not url.startswith("sqlite"):
        engine_kwargs.update(pool_size=10, max_overflow=20)

    engine = create_async_engine(url, **engine_kwargs)
    if url.startswith("sqlite"):
        event.listen(engine.sync_engine, "connect", _enable_sqlite_foreign_keys)
    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create an async session factory."""
    return async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def create_schema(engine: AsyncEngine) -> None:
    """Create all registry tables (idempotent)."""
    from pkgtrack.db.base import Base
    import pkgtrack.db.models  # noqa: F401 — register all ORM models

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
