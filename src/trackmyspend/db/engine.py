"""Async SQLAlchemy engine and session factory.

Learn: SQLAlchemy 2.0 async mode — create_async_engine for connection pooling,
AsyncSession for per-request database access, dependency injection via FastAPI.

The Database object is built once per app from Settings and stored on
app.state, so there is no module-level engine bound to import-time config.
"""

from typing import AsyncIterator

from fastapi import Request
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import StaticPool

from trackmyspend.config import Settings
from trackmyspend.db.models import Base


class Database:
    """Owns the engine and the session factory for one application."""

    def __init__(self, engine: AsyncEngine):
        self.engine = engine
        # Session factory — each request gets its own session.
        self.session_factory = async_sessionmaker(
            engine,
            class_=AsyncSession,
            expire_on_commit=False,
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        url = settings.database_url
        if url.startswith("sqlite"):
            # In-memory SQLite lives inside one connection; share it.
            engine = create_async_engine(
                url,
                echo=settings.debug,
                poolclass=StaticPool,
                connect_args={"check_same_thread": False},
            )
        else:
            # Connection pool: min 5, max 20 connections.
            engine = create_async_engine(
                url,
                echo=settings.debug,
                pool_size=5,
                max_overflow=15,
            )
        return cls(engine)

    async def create_all(self) -> None:
        """Create all tables. Used by tests; deployments run Alembic."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def dispose(self) -> None:
        await self.engine.dispose()


async def get_db(request: Request) -> AsyncIterator[AsyncSession]:
    """FastAPI dependency — yields a session per request, auto-closes."""
    database: Database = request.app.state.db
    async with database.session_factory() as session:
        try:
            yield session
        finally:
            await session.close()
