"""
Database Configuration

Async SQLAlchemy engine, session factory and the declarative base shared
by the identity and document tables.
"""

import logging
from collections.abc import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.orm import DeclarativeBase

from teacher_panel.core.config import settings

logger = logging.getLogger(__name__)

# pool_pre_ping: check the connection is alive before use
engine = create_async_engine(
    settings.database_url,
    echo=False,
    pool_pre_ping=True,
)

async_session_maker = async_sessionmaker(
    bind=engine,
    class_=AsyncSession,
    expire_on_commit=False,
)


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    FastAPI dependency yielding one session per request.

    Usage:
        @router.get("/items")
        async def list_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with async_session_maker() as session:
        yield session


async def init_db() -> None:
    """
    Create tables that do not exist yet.

    Call this on application startup.
    """
    # Model modules must be imported so their tables are registered
    from teacher_panel.modules.documents import models as _documents  # noqa: F401
    from teacher_panel.modules.identity import models as _identity  # noqa: F401

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Database tables ensured")


async def close_db() -> None:
    """Dispose of the engine connection pool."""
    await engine.dispose()
