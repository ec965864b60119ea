"""Shared plumbing for PostgreSQL repositories."""

from typing import Any

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from reel.domain.error import StoreError


class PostgresRepository:
    """Base for repositories backed by an async SQLAlchemy session.

    Driver and SQL failures surface as ``StoreError`` so callers never see
    SQLAlchemy types.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def _execute(self, stmt: Any) -> Any:
        try:
            return await self.session.execute(stmt)
        except SQLAlchemyError as e:
            logfire.error(
                "Database statement failed",
                repository=type(self).__name__,
                error=str(e),
            )
            raise StoreError(str(e)) from e

    async def _flush(self) -> None:
        try:
            await self.session.flush()
        except SQLAlchemyError as e:
            logfire.error(
                "Database flush failed", repository=type(self).__name__, error=str(e)
            )
            raise StoreError(str(e)) from e
