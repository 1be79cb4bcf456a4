from __future__ import annotations

from typing import AsyncGenerator, Optional

from sqlalchemy import event
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from .config import Settings, get_settings

_ENGINE: Optional[AsyncEngine] = None
_SESSION_MAKER: Optional[async_sessionmaker[AsyncSession]] = None


# PUBLIC_INTERFACE
def enable_sqlite_foreign_keys(dbapi_connection, _record) -> None:
    # 8D child tables and item requests rely on ON DELETE CASCADE / SET NULL.
    cursor = dbapi_connection.cursor()
    cursor.execute("PRAGMA foreign_keys=ON")
    cursor.close()


# PUBLIC_INTERFACE
def build_engine(settings: Settings) -> AsyncEngine:
    """
    Create the AsyncEngine for the configured database.

    Postgres gets pre-ping to survive idle connection drops; SQLite gets
    foreign key enforcement on every new connection.
    """
    if settings.is_sqlite:
        engine = create_async_engine(settings.async_database_url, echo=settings.SQL_ECHO)
        event.listen(engine.sync_engine, "connect", enable_sqlite_foreign_keys)
        return engine
    return create_async_engine(
        settings.async_database_url,
        echo=settings.SQL_ECHO,
        pool_pre_ping=True,
    )


# PUBLIC_INTERFACE
def get_engine() -> AsyncEngine:
    """Return the process-wide engine, creating it on first use."""
    global _ENGINE
    if _ENGINE is None:
        _ENGINE = build_engine(get_settings())
    return _ENGINE


# PUBLIC_INTERFACE
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    """Return the process-wide session factory bound to get_engine()."""
    global _SESSION_MAKER
    if _SESSION_MAKER is None:
        _SESSION_MAKER = async_sessionmaker(bind=get_engine(), expire_on_commit=False, autoflush=False)
    return _SESSION_MAKER


# PUBLIC_INTERFACE
async def get_async_session() -> AsyncGenerator[AsyncSession, None]:
    """FastAPI dependency yielding one session per request."""
    async with get_session_maker()() as session:
        yield session
