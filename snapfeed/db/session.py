"""Async database engine, session manager and the get_db dependency."""
import logging
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from uuid import UUID

from fastapi import Request
from sqlalchemy import text
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from snapfeed.core.observability import mask_database_url

logger = logging.getLogger(__name__)


class Base(DeclarativeBase):
    pass


class DatabaseSessionManager:
    """Owns the engine and session factory; one instance per app, kept on app.state."""

    def __init__(self, database_url: str, pool_size: int = 10, max_overflow: int = 20, echo: bool = False):
        engine_kwargs: dict = {"echo": echo, "pool_pre_ping": True}
        # SQLite (tests, local dev) uses a static/null pool without sizing options
        if not database_url.startswith("sqlite"):
            engine_kwargs.update(pool_size=pool_size, max_overflow=max_overflow)
        logger.info("Database URL: %s", mask_database_url(database_url))
        self.engine = create_async_engine(database_url, **engine_kwargs)
        self.session_factory = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,
            autoflush=False,
        )

    @asynccontextmanager
    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        async with self.session_factory() as session:
            try:
                yield session
            except Exception:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def health_check(self) -> bool:
        try:
            async with self.engine.connect() as conn:
                await conn.execute(text("SELECT 1"))
            return True
        except Exception as e:
            logger.warning("Database health check failed: %s", e)
            return False

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncGenerator[AsyncSession, None]:
    manager: DatabaseSessionManager = request.app.state.db_manager
    async with manager.session() as session:
        yield session


def parse_uuid(value: str | UUID | None) -> UUID | None:
    """Path ids arrive as raw strings; malformed ones resolve to None and are treated as absent."""
    if isinstance(value, UUID):
        return value
    if not value:
        return None
    try:
        return UUID(value.strip())
    except ValueError:
        return None
