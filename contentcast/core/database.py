"""
Async engine lifecycle and session scope for the SQL storage backend.

The app only ever talks to the database through `SqlStorage`; this module
owns the engine that backs it and the schema helpers used by the CLI.
"""

from typing import AsyncGenerator, Callable, Optional
from contextlib import asynccontextmanager

from sqlalchemy import MetaData
from sqlalchemy.engine import Connection
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
    AsyncEngine
)

from contentcast.models import Base
from contentcast.storage.sql import SqlStorage
from .config import settings, DatabaseConfig
from .logging import get_logger

logger = get_logger(__name__)

async_engine: Optional[AsyncEngine] = None
async_session_maker: Optional[async_sessionmaker[AsyncSession]] = None


def build_engine() -> AsyncEngine:
    """Create an engine from the configured URL and pool options."""
    return create_async_engine(
        DatabaseConfig.get_database_url(async_driver=True),
        **DatabaseConfig.get_engine_config(),
        echo=settings.debug
    )


async def init_database() -> None:
    """Create the process-wide engine and session factory."""
    global async_engine, async_session_maker

    if async_engine is not None:
        return

    async_engine = build_engine()
    async_session_maker = async_sessionmaker(async_engine, expire_on_commit=False)
    logger.info("Database engine ready", pool_size=settings.database_pool_size)


async def close_database() -> None:
    global async_engine, async_session_maker

    if async_engine is not None:
        await async_engine.dispose()
        logger.info("Database engine disposed")

    async_engine = None
    async_session_maker = None


@asynccontextmanager
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """
    Session scope: commits on success, rolls back and re-raises on error.

    Services commit step by step themselves, so the final commit here only
    flushes whatever a request left pending.
    """
    if async_session_maker is None:
        raise RuntimeError("Database not initialized. Call init_database() first.")

    async with async_session_maker() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise


@asynccontextmanager
async def sql_storage() -> AsyncGenerator[SqlStorage, None]:
    """`SqlStorage` bound to a fresh session scope."""
    async with get_async_session() as session:
        yield SqlStorage(session)


async def check_database() -> bool:
    """Ping the database through the storage backend."""
    if async_session_maker is None:
        logger.error("Database check requested before init")
        return False

    async with sql_storage() as storage:
        return await storage.ping()


async def _run_on_metadata(action: Callable[[MetaData, Connection], None], label: str) -> None:
    if async_engine is None:
        raise RuntimeError("Database not initialized")

    async with async_engine.begin() as conn:
        await conn.run_sync(lambda sync_conn: action(Base.metadata, sync_conn))
    logger.info("Schema updated", action=label, tables=sorted(Base.metadata.tables))


async def create_tables() -> None:
    await _run_on_metadata(lambda metadata, conn: metadata.create_all(conn), "create")


async def drop_tables() -> None:
    logger.warning("Dropping all ContentCast tables")
    await _run_on_metadata(lambda metadata, conn: metadata.drop_all(conn), "drop")
