"""Casbin rule row definitions.

One row stores one policy rule: ``ptype`` plus up to seven positional
fields ``v0``..``v6``. Field ``vN`` is set only when the rule has more
than ``N`` elements.
"""

from __future__ import annotations

import uuid
from typing import Optional, Type

from sqlalchemy import Integer, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from casbin_rule_store.database.base import Base, UUIDKeyBase

RULE_TABLE_NAME = "casbin_rule"
RULE_FIELDS = ("v0", "v1", "v2", "v3", "v4", "v5", "v6")
MAX_RULE_FIELDS = len(RULE_FIELDS)
FIELD_LENGTH = 255


class CasbinRuleMixin:
    """Columns shared by every rule row variant."""

    ptype: Mapped[str] = mapped_column(String(FIELD_LENGTH), nullable=False)
    v0: Mapped[Optional[str]] = mapped_column(String(FIELD_LENGTH), nullable=True)
    v1: Mapped[Optional[str]] = mapped_column(String(FIELD_LENGTH), nullable=True)
    v2: Mapped[Optional[str]] = mapped_column(String(FIELD_LENGTH), nullable=True)
    v3: Mapped[Optional[str]] = mapped_column(String(FIELD_LENGTH), nullable=True)
    v4: Mapped[Optional[str]] = mapped_column(String(FIELD_LENGTH), nullable=True)
    v5: Mapped[Optional[str]] = mapped_column(String(FIELD_LENGTH), nullable=True)
    v6: Mapped[Optional[str]] = mapped_column(String(FIELD_LENGTH), nullable=True)

    def fields(self) -> list[Optional[str]]:
        return [getattr(self, name) for name in RULE_FIELDS]

    def __str__(self) -> str:
        values = self.fields()
        while values and values[-1] is None:
            values.pop()
        return ", ".join([self.ptype, *("" if v is None else v for v in values)])

    def __repr__(self) -> str:
        return f'<{type(self).__name__} {getattr(self, "id", None)}: "{self}">'


class CasbinRule(CasbinRuleMixin, Base):
    """Rule row keyed by an integer autoincrement id."""

    __tablename__ = RULE_TABLE_NAME

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)


class CasbinUUIDRule(CasbinRuleMixin, UUIDKeyBase):
    """Rule row keyed by a client generated UUID."""

    __tablename__ = RULE_TABLE_NAME

    id: Mapped[uuid.UUID] = mapped_column(Uuid(as_uuid=True), primary_key=True, default=uuid.uuid4)


RULE_CLASSES: dict[str, Type[CasbinRuleMixin]] = {
    "integer": CasbinRule,
    "uuid": CasbinUUIDRule,
}


def select_rule_class(kind: str) -> Type[CasbinRuleMixin]:
    """Return the rule row class for a store's surrogate key kind."""
    try:
        return RULE_CLASSES[kind]
    except KeyError:
        raise ValueError(
            f"Unknown rule key kind {kind!r}, expected one of {sorted(RULE_CLASSES)}"
        ) from None


__all__ = [
    "RULE_TABLE_NAME",
    "RULE_FIELDS",
    "MAX_RULE_FIELDS",
    "CasbinRuleMixin",
    "CasbinRule",
    "CasbinUUIDRule",
    "select_rule_class",
]
