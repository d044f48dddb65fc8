"""Single commit/rollback unit around multi-row mutations."""

from __future__ import annotations

from contextlib import asynccontextmanager
from typing import AsyncIterator

from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker


@asynccontextmanager
async def transaction(
    session_factory: async_sessionmaker[AsyncSession],
    label: str = "transaction",
) -> AsyncIterator[AsyncSession]:
    """Yield a session inside one store transaction.

    The transaction commits when the block exits normally. Any exception
    rolls it back first and is then re-raised unchanged.
    """
    async with session_factory() as session:
        try:
            async with session.begin():
                yield session
        except BaseException as exc:
            logger.warning(f"{label} rolled back: {exc!r}")
            raise
