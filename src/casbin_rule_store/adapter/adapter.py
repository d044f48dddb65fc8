"""Async SQLAlchemy storage adapter for Casbin policies."""

from __future__ import annotations

from typing import List, Optional, Sequence, Type, Union

from casbin import persist
from casbin.persist.adapters.asyncio import AsyncAdapter
from loguru import logger
from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from casbin_rule_store.adapter.exceptions import AdapterClosedError
from casbin_rule_store.adapter.filter import FilterLike, filter_criteria
from casbin_rule_store.adapter.mapper import (
    iter_model_rules,
    match_pattern,
    filtered_pattern,
    policy_line,
    row_from_rule,
)
from casbin_rule_store.adapter.coordinator import transaction
from casbin_rule_store.config import AdapterSettings
from casbin_rule_store.database.models import CasbinRuleMixin, select_rule_class
from casbin_rule_store.database.session import (
    check_database_connection,
    create_adapter_engine,
    create_session_factory,
)

ConnectionConfig = Union[AdapterSettings, str, AsyncEngine]


class Adapter(AsyncAdapter):
    """Loads and stores Casbin policy rules in a single ``casbin_rule`` table.

    Build instances with :meth:`new_adapter`, which opens and checks the
    connection. The adapter does not serialize concurrent callers: two
    overlapping ``save_policy`` calls can interleave their clear and insert
    phases.
    """

    def __init__(
        self,
        engine: AsyncEngine,
        rule_class: Type[CasbinRuleMixin],
        *,
        owns_engine: bool = True,
        create_table: bool = True,
    ) -> None:
        self._engine = engine
        self._rule_class = rule_class
        self._owns_engine = owns_engine
        self._create_table = create_table
        self._session_factory: async_sessionmaker[AsyncSession] = create_session_factory(engine)
        self._filtered = False
        self._closed = False

    @classmethod
    async def new_adapter(
        cls,
        config: Optional[ConnectionConfig] = None,
        *,
        rule_class: Optional[Type[CasbinRuleMixin]] = None,
    ) -> "Adapter":
        """Create an adapter and open its connection.

        ``config`` is an :class:`AdapterSettings`, a DSN string, or an
        existing ``AsyncEngine``. An existing engine stays owned by the
        caller and is not disposed by :meth:`close`.
        """
        if isinstance(config, AsyncEngine):
            settings = AdapterSettings()
            engine = config
            owns_engine = False
        else:
            if config is None:
                settings = AdapterSettings()
            elif isinstance(config, str):
                settings = AdapterSettings(database_url=config)
            else:
                settings = config
            engine = create_adapter_engine(settings)
            owns_engine = True

        adapter = cls(
            engine,
            rule_class or select_rule_class(settings.rule_key),
            owns_engine=owns_engine,
            create_table=settings.create_table,
        )
        try:
            await adapter._open()
        except Exception:
            if owns_engine:
                await engine.dispose()
            raise
        return adapter

    async def _open(self) -> None:
        await check_database_connection(self._engine)
        if self._create_table:
            async with self._engine.begin() as connection:
                await connection.run_sync(self._rule_class.metadata.create_all)
        logger.info(
            f"Casbin adapter opened on {self._engine.url.render_as_string(hide_password=True)} "
            f"(table {self._rule_class.__tablename__})"
        )

    async def close(self) -> None:
        """Release the connection. Calling it again is a no-op."""
        if self._closed:
            return
        self._closed = True
        if self._owns_engine:
            await self._engine.dispose()
        logger.info("Casbin adapter closed")

    @property
    def rule_class(self) -> Type[CasbinRuleMixin]:
        return self._rule_class

    @property
    def session_factory(self) -> async_sessionmaker[AsyncSession]:
        return self._session_factory

    @property
    def closed(self) -> bool:
        return self._closed

    def is_filtered(self) -> bool:
        """True after a filtered load; such a model must not be saved back."""
        return self._filtered

    def _transaction(self, label: str):
        if self._closed:
            raise AdapterClosedError(f"{label} called on a closed adapter")
        return transaction(self._session_factory, label)

    def _delete_matching(self, pattern: dict):
        rule_class = self._rule_class
        return delete(rule_class).where(
            *(getattr(rule_class, column) == value for column, value in pattern.items())
        )

    async def _load_rows(self, model, statement) -> int:
        async with self._transaction("load_policy") as session:
            rows = (await session.execute(statement)).scalars().all()
        for row in rows:
            persist.load_policy_line(policy_line(row), model)
        return len(rows)

    async def load_policy(self, model) -> None:
        """Load every stored rule into ``model``."""
        count = await self._load_rows(model, select(self._rule_class))
        self._filtered = False
        logger.debug(f"Loaded {count} policy rules")

    async def load_filtered_policy(self, model, filter: Optional[FilterLike]) -> None:
        """Load only rules matching ``filter`` and mark the adapter filtered."""
        if filter is None:
            await self.load_policy(model)
            return

        criteria = filter_criteria(filter)
        statement = select(self._rule_class).filter_by(**criteria)
        count = await self._load_rows(model, statement)
        self._filtered = True
        logger.debug(f"Loaded {count} policy rules matching {criteria}")

    async def save_policy(self, model) -> bool:
        """Replace the stored rules with the rules held by ``model``."""
        async with self._transaction("save_policy") as session:
            await session.execute(delete(self._rule_class))
            rows = [
                row_from_rule(self._rule_class, ptype, rule)
                for ptype, rule in iter_model_rules(model)
            ]
            session.add_all(rows)
            await session.flush()
        logger.debug(f"Saved {len(rows)} policy rules")
        return True

    async def add_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> None:
        """Store a single rule."""
        row = row_from_rule(self._rule_class, ptype, rule)
        async with self._transaction("add_policy") as session:
            session.add(row)

    async def add_policies(self, sec: str, ptype: str, rules: Sequence[Sequence[str]]) -> None:
        """Store several rules; either all of them are written or none."""
        async with self._transaction("add_policies") as session:
            for rule in rules:
                session.add(row_from_rule(self._rule_class, ptype, rule))
            await session.flush()
        logger.debug(f"Added {len(rules)} {ptype} rules")

    async def remove_policy(self, sec: str, ptype: str, rule: Sequence[str]) -> None:
        """Delete rows matching ``rule`` on its populated fields."""
        pattern = match_pattern(row_from_rule(self._rule_class, ptype, rule))
        async with self._transaction("remove_policy") as session:
            await session.execute(self._delete_matching(pattern))

    async def remove_policies(self, sec: str, ptype: str, rules: Sequence[Sequence[str]]) -> None:
        """Delete rows for several rules in one transaction."""
        async with self._transaction("remove_policies") as session:
            for rule in rules:
                pattern = match_pattern(row_from_rule(self._rule_class, ptype, rule))
                await session.execute(self._delete_matching(pattern))
        logger.debug(f"Removed {len(rules)} {ptype} rules")

    async def remove_filtered_policy(
        self, sec: str, ptype: str, field_index: int, *field_values: str
    ) -> None:
        """Delete rules of ``ptype`` whose fields from ``field_index`` on equal ``field_values``."""
        pattern = filtered_pattern(ptype, field_index, field_values)
        async with self._transaction("remove_filtered_policy") as session:
            result = await session.execute(self._delete_matching(pattern))
        logger.debug(f"Removed {result.rowcount} {ptype} rules matching {pattern}")

    async def stored_rules(self) -> List[CasbinRuleMixin]:
        """Every stored row, for inspection outside a casbin model."""
        async with self._transaction("stored_rules") as session:
            return list((await session.execute(select(self._rule_class))).scalars().all())
