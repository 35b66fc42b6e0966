"""Async SQLAlchemy engine and session management."""

from __future__ import annotations

import logging
from collections.abc import AsyncGenerator
from typing import Any

from sqlalchemy import text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from asset_server.core.config import Settings
from asset_server.infrastructure.database.base import Base

logger = logging.getLogger(__name__)


class Database:
    """Owns the engine and session factory for one application instance.

    Handlers only ever receive sessions; whether the engine was just opened or has been
    serving requests for hours makes no difference to them.
    """

    def __init__(self, url: str, *, echo: bool = False, pool_size: int | None = None, max_overflow: int | None = None) -> None:
        self._url = url
        self._echo = echo
        self._pool_size = pool_size
        self._max_overflow = max_overflow
        self._engine: AsyncEngine | None = None
        self._session_factory: async_sessionmaker[AsyncSession] | None = None

    @classmethod
    def from_settings(cls, settings: Settings, url: str | None = None) -> "Database":
        return cls(
            url or settings.database_url,
            echo=settings.database.echo or settings.debug,
            pool_size=settings.database.pool_size,
            max_overflow=settings.database.max_overflow,
        )

    @property
    def is_open(self) -> bool:
        return self._engine is not None

    @property
    def engine(self) -> AsyncEngine:
        if self._engine is None:
            raise RuntimeError("Database is not open")
        return self._engine

    def open(self) -> AsyncEngine:
        if self._engine is not None:
            return self._engine

        engine_kwargs: dict[str, Any] = {"echo": self._echo, "future": True}
        if self._pool_size is not None:
            engine_kwargs["pool_size"] = self._pool_size
        if self._max_overflow is not None:
            engine_kwargs["max_overflow"] = self._max_overflow

        self._engine = create_async_engine(self._url, **engine_kwargs)
        self._session_factory = async_sessionmaker(
            bind=self._engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )
        logger.info("Database engine created for %s", self._engine.url.render_as_string(hide_password=True))
        return self._engine

    async def close(self) -> None:
        if self._engine is None:
            return
        await self._engine.dispose()
        self._engine = None
        self._session_factory = None
        logger.info("Database engine disposed")

    async def session(self) -> AsyncGenerator[AsyncSession, None]:
        if self._session_factory is None:
            self.open()

        assert self._session_factory is not None  # for mypy
        async with self._session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    async def ping(self) -> None:
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))


async def init_db(database: Database) -> None:
    """Create database tables in development mode (migrations preferred)."""
    # Imported here to avoid a circular import with the models module.
    from asset_server.db import models  # noqa: F401

    engine = database.open()
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
