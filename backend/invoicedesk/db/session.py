"""Database handle: async engine, bounded pool and scoped sessions.

One ``Database`` is built at startup and handed to whatever needs the store;
nothing in the query layer reaches for a module-level engine.
"""
from contextlib import asynccontextmanager
from typing import AsyncIterator

from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from invoicedesk.core.config import Settings
from invoicedesk.db.base import Base


class Database:
    def __init__(self, url: str, pool_size: int = 10, echo: bool = False):
        self.url = url
        if url.startswith("sqlite"):
            # SQLite: no pooling, each session opens its own connection
            self.engine: AsyncEngine = create_async_engine(url, echo=echo, poolclass=NullPool)
        else:
            # PostgreSQL: bounded pool, callers wait rather than overflow
            self.engine = create_async_engine(
                url,
                echo=echo,
                pool_size=pool_size,
                max_overflow=0,
                pool_timeout=30,
                pool_recycle=3600,
                pool_pre_ping=True,
            )
        self.sessionmaker = async_sessionmaker(
            self.engine, expire_on_commit=False, autoflush=False
        )

    @classmethod
    def from_settings(cls, settings: Settings) -> "Database":
        return cls(settings.DATABASE_URL, pool_size=settings.POSTGRES_MAX_POOL, echo=settings.SQL_ECHO)

    @asynccontextmanager
    async def session(self) -> AsyncIterator[AsyncSession]:
        """Hold one connection for the duration of the block.

        Uncommitted work is rolled back and the connection returned to the
        pool on every exit path.
        """
        async with self.sessionmaker() as session:
            try:
                yield session
            except BaseException:
                await session.rollback()
                raise

    async def create_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)

    async def drop_all(self) -> None:
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.drop_all)

    async def dispose(self) -> None:
        await self.engine.dispose()
