"""Adapter exception hierarchy."""


class AdapterError(Exception):
    """Base class for errors raised by the adapter itself."""
    pass


class PolicyRuleError(AdapterError, ValueError):
    """A policy rule cannot be stored as a single row."""
    pass


class AdapterClosedError(AdapterError):
    """The adapter was used after close()."""
    pass
