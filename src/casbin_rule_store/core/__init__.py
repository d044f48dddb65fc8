"""Ambient helpers shared by the adapter."""

from .logging import setup_logging

__all__ = ["setup_logging"]
