"""Field equality filter for partial policy loads."""

from __future__ import annotations

from dataclasses import dataclass, fields
from typing import Any, Dict, Mapping, Optional, Union


@dataclass
class Filter:
    ptype: Optional[str] = None
    v0: Optional[str] = None
    v1: Optional[str] = None
    v2: Optional[str] = None
    v3: Optional[str] = None
    v4: Optional[str] = None
    v5: Optional[str] = None
    v6: Optional[str] = None

    def criteria(self) -> Dict[str, str]:
        return {
            item.name: getattr(self, item.name)
            for item in fields(self)
            if getattr(self, item.name) is not None
        }


FilterLike = Union[Filter, Mapping[str, Any]]


def filter_criteria(policy_filter: FilterLike) -> Dict[str, Any]:
    """Normalize a ``Filter`` or plain mapping into column criteria.

    Mapping keys are passed through untouched; the store rejects columns it
    does not know.
    """
    if isinstance(policy_filter, Filter):
        return policy_filter.criteria()
    return {key: value for key, value in policy_filter.items() if value is not None}
