"""
Casbin rule store - async SQLAlchemy policy storage for Casbin.

Maps policy rules to rows of a ``casbin_rule`` table and back, with
filtered loads and all-or-nothing batch mutations.
"""

from casbin_rule_store.__version__ import __version__, __version_info__, get_version, get_version_info
from casbin_rule_store.adapter import (
    Adapter,
    AdapterClosedError,
    AdapterError,
    Filter,
    PolicyRuleError,
)
from casbin_rule_store.config import AdapterSettings
from casbin_rule_store.database import CasbinRule, CasbinRuleMixin, CasbinUUIDRule

__all__ = [
    "__version__",
    "__version_info__",
    "get_version",
    "get_version_info",
    "Adapter",
    "AdapterSettings",
    "AdapterError",
    "AdapterClosedError",
    "PolicyRuleError",
    "Filter",
    "CasbinRule",
    "CasbinRuleMixin",
    "CasbinUUIDRule",
]
