"""Rule row models and engine helpers."""

from .base import Base, TimestampMixin, UUIDKeyBase
from .models import (
    MAX_RULE_FIELDS,
    RULE_FIELDS,
    RULE_TABLE_NAME,
    CasbinRule,
    CasbinRuleMixin,
    CasbinUUIDRule,
    select_rule_class,
)
from .session import check_database_connection, create_adapter_engine, create_session_factory

__all__ = [
    "Base",
    "UUIDKeyBase",
    "TimestampMixin",
    "MAX_RULE_FIELDS",
    "RULE_FIELDS",
    "RULE_TABLE_NAME",
    "CasbinRule",
    "CasbinRuleMixin",
    "CasbinUUIDRule",
    "select_rule_class",
    "check_database_connection",
    "create_adapter_engine",
    "create_session_factory",
]
