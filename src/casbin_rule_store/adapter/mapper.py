"""Conversion between policy rules and rule rows.

A policy rule is an ordered list of strings tagged with a ``ptype``. Rule
``["alice", "data1", "read"]`` under ``p`` becomes a row with ``v0..v2``
set and ``v3..v6`` left as NULL.
"""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Tuple, Type, TypeVar

from casbin_rule_store.adapter.exceptions import PolicyRuleError
from casbin_rule_store.database.models import MAX_RULE_FIELDS, RULE_FIELDS, CasbinRuleMixin

RuleT = TypeVar("RuleT", bound=CasbinRuleMixin)

POLICY_SECTIONS = ("p", "g")


def row_from_rule(rule_class: Type[RuleT], ptype: str, rule: Sequence[str]) -> RuleT:
    """Build an unsaved row holding ``rule`` in its positional fields."""
    if len(rule) > MAX_RULE_FIELDS:
        raise PolicyRuleError(
            f"Rule for ptype {ptype!r} has {len(rule)} fields, at most {MAX_RULE_FIELDS} can be stored"
        )

    row = rule_class(ptype=ptype)
    for name, value in zip(RULE_FIELDS, rule):
        setattr(row, name, value)
    return row


def rule_from_row(row: CasbinRuleMixin) -> Tuple[str, List[str]]:
    """Rebuild ``(ptype, rule)`` from a stored row.

    Trailing NULL fields are dropped. An interior NULL becomes ``""`` so the
    remaining elements keep their positions.
    """
    values = row.fields()
    while values and values[-1] is None:
        values.pop()
    return row.ptype, ["" if value is None else value for value in values]


def policy_line(row: CasbinRuleMixin) -> str:
    """Render a row the way ``casbin.persist.load_policy_line`` reads it."""
    ptype, rule = rule_from_row(row)
    return ", ".join([ptype, *rule])


def match_pattern(row: CasbinRuleMixin) -> Dict[str, str]:
    """Populated columns of ``row``; unset fields act as wildcards."""
    pattern = {"ptype": row.ptype}
    for name, value in zip(RULE_FIELDS, row.fields()):
        if value is not None:
            pattern[name] = value
    return pattern


def filtered_pattern(ptype: str, field_index: int, field_values: Sequence[Optional[str]]) -> Dict[str, str]:
    """Pattern for deleting rules whose fields from ``field_index`` on equal ``field_values``.

    Positions outside ``0..6`` are ignored, so a negative or too large
    ``field_index`` only constrains whatever part of the run still lands
    inside the row. An empty ``field_values`` matches every rule of ``ptype``.
    A ``None`` value leaves its position unconstrained.
    """
    pattern = {"ptype": ptype}
    for position, name in enumerate(RULE_FIELDS):
        if field_index <= position < field_index + len(field_values):
            value = field_values[position - field_index]
            if value is not None:
                pattern[name] = value
    return pattern


def iter_model_rules(model, sections: Iterable[str] = POLICY_SECTIONS) -> Iterator[Tuple[str, List[str]]]:
    """Yield ``(ptype, rule)`` for every rule held by a casbin model."""
    for sec in sections:
        if sec not in model.model:
            continue
        for ptype, assertion in model.model[sec].items():
            for rule in assertion.policy:
                yield ptype, rule
