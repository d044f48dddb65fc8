"""SQLAlchemy declarative bases and shared mixins for rule rows."""

from __future__ import annotations

import datetime as dt
from typing import Any, Dict

from sqlalchemy import DateTime, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


class _SerializableBase:
    def to_dict(self) -> Dict[str, Any]:
        """简易序列化工具，方便调试与测试。"""
        return {
            column.key: getattr(self, column.key)
            for column in self.__table__.columns  # type: ignore[attr-defined]
        }


class Base(_SerializableBase, DeclarativeBase):
    """Declarative base for stores with integer autoincrement keys."""


class UUIDKeyBase(_SerializableBase, DeclarativeBase):
    """Declarative base for stores without a numeric autoincrement key.

    Kept on its own metadata so both row variants can use the same table
    name without clashing.
    """


class TimestampMixin:
    """提供常见的创建/更新时间戳字段。"""

    created_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[dt.datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        onupdate=func.now(),
        nullable=False,
    )


__all__ = ["Base", "UUIDKeyBase", "TimestampMixin"]
