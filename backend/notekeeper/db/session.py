"""Database session and engine management."""
from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy import event
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from notekeeper.core.config import get_settings


def enable_sqlite_savepoints(async_engine: AsyncEngine) -> None:
    """Let SQLAlchemy emit BEGIN itself so SAVEPOINT works on (aio)sqlite.

    The sqlite3 driver defers BEGIN on its own, which breaks nested transactions.
    """

    @event.listens_for(async_engine.sync_engine, "connect")
    def _disable_driver_begin(dbapi_connection, connection_record):
        dbapi_connection.isolation_level = None

    @event.listens_for(async_engine.sync_engine, "begin")
    def _emit_begin(conn):
        conn.exec_driver_sql("BEGIN")


_settings = get_settings()
engine = create_async_engine(_settings.database_url, future=True, echo=False)
if engine.dialect.name == "sqlite":
    enable_sqlite_savepoints(engine)
async_session_factory = async_sessionmaker(engine, expire_on_commit=False, class_=AsyncSession)


@asynccontextmanager
async def get_session() -> AsyncIterator[AsyncSession]:
    """Provide a transactional scope around a series of operations.

    Anything not committed by the caller is rolled back when an error escapes.
    """

    async with async_session_factory() as session:
        try:
            yield session
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


async def dispose_engine() -> None:
    await engine.dispose()
