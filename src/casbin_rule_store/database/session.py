"""Engine and session management for the rule store."""

from __future__ import annotations

from typing import Any, Dict

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from casbin_rule_store.config import AdapterSettings


def engine_kwargs(settings: AdapterSettings) -> Dict[str, Any]:
    kwargs: Dict[str, Any] = {
        "echo": settings.db_echo,
        "pool_pre_ping": True,
    }
    if settings.is_sqlite:
        kwargs.setdefault("connect_args", {})
        kwargs["connect_args"].setdefault("timeout", settings.sqlite_busy_timeout_seconds)
    return kwargs


def create_adapter_engine(settings: AdapterSettings) -> AsyncEngine:
    """Build the async engine described by ``settings``."""

    engine = create_async_engine(settings.database_dsn, **engine_kwargs(settings))

    if settings.is_sqlite:
        journal_mode = settings.sqlite_journal_mode.upper()
        synchronous = settings.sqlite_synchronous.upper()
        busy_timeout_ms = max(settings.sqlite_busy_timeout_seconds, 1) * 1000

        @event.listens_for(engine.sync_engine, "connect")
        def _set_sqlite_pragma(dbapi_connection, connection_record) -> None:  # pragma: no cover - connection setup
            cursor = dbapi_connection.cursor()
            cursor.execute(f"PRAGMA busy_timeout={busy_timeout_ms}")
            cursor.execute(f"PRAGMA journal_mode={journal_mode}")
            cursor.execute(f"PRAGMA synchronous={synchronous}")
            cursor.close()

    return engine


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(engine, expire_on_commit=False)


async def check_database_connection(engine: AsyncEngine) -> None:
    """Verify the store is reachable. Errors propagate unchanged."""

    async with engine.begin() as connection:
        await connection.execute(text("SELECT 1"))


__all__ = [
    "engine_kwargs",
    "create_adapter_engine",
    "create_session_factory",
    "check_database_connection",
]
