"""Casbin adapter, rule mapping and transaction helpers."""

from .adapter import Adapter, ConnectionConfig
from .exceptions import AdapterClosedError, AdapterError, PolicyRuleError
from .filter import Filter
from .mapper import filtered_pattern, match_pattern, policy_line, row_from_rule, rule_from_row
from .coordinator import transaction

__all__ = [
    "Adapter",
    "ConnectionConfig",
    "AdapterError",
    "AdapterClosedError",
    "PolicyRuleError",
    "Filter",
    "filtered_pattern",
    "match_pattern",
    "policy_line",
    "row_from_rule",
    "rule_from_row",
    "transaction",
]
