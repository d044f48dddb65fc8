"""
Configuration module for the Casbin rule store.
"""

from casbin_rule_store.config.settings import AdapterSettings

__all__ = ["AdapterSettings"]
