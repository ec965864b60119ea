"""Engine and session factory for the Postgres comment store."""

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from reel.config import Settings


def create_engine(settings: Settings) -> AsyncEngine:
    """Create the asyncpg engine.

    SQL is echoed when ``settings.debug`` is on. Pool sizing comes from
    ``DATABASE__POOL_SIZE`` and ``DATABASE__MAX_OVERFLOW``.
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
        pool_recycle=settings.database.pool_recycle,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Session factory for request-scoped sessions.

    Objects stay readable after commit, and nothing is flushed until a
    repository asks for it.
    """
    return async_sessionmaker(engine, expire_on_commit=False, autoflush=False)
