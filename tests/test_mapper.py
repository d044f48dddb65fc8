"""
Tests for rule <-> row mapping and delete patterns.

Pure functions, no database required.
"""

import pytest

from casbin_rule_store.adapter import (
    PolicyRuleError,
    filtered_pattern,
    match_pattern,
    policy_line,
    row_from_rule,
    rule_from_row,
)
from casbin_rule_store.database import CasbinRule, CasbinUUIDRule


# ============================================================================
# row_from_rule / rule_from_row
# ============================================================================

@pytest.mark.unit
def test_row_from_rule_fills_leading_fields():
    row = row_from_rule(CasbinRule, "p", ["alice", "data1", "read"])

    assert row.ptype == "p"
    assert (row.v0, row.v1, row.v2) == ("alice", "data1", "read")
    assert (row.v3, row.v4, row.v5, row.v6) == (None, None, None, None)


@pytest.mark.unit
def test_row_from_rule_accepts_seven_fields():
    rule = [f"f{i}" for i in range(7)]
    row = row_from_rule(CasbinUUIDRule, "p", rule)

    assert row.fields() == rule


@pytest.mark.unit
def test_row_from_rule_rejects_more_than_seven_fields():
    with pytest.raises(PolicyRuleError):
        row_from_rule(CasbinRule, "p", [str(i) for i in range(8)])


@pytest.mark.unit
def test_policy_rule_error_is_value_error():
    with pytest.raises(ValueError):
        row_from_rule(CasbinRule, "p", ["x"] * 9)


@pytest.mark.unit
def test_rule_from_row_drops_trailing_nulls():
    row = CasbinRule(ptype="g", v0="alice", v1="admin")

    assert rule_from_row(row) == ("g", ["alice", "admin"])


@pytest.mark.unit
def test_rule_from_row_keeps_interior_null_as_empty_string():
    row = CasbinRule(ptype="p", v0="alice", v2="read")

    assert rule_from_row(row) == ("p", ["alice", "", "read"])


@pytest.mark.unit
def test_rule_from_row_without_fields():
    assert rule_from_row(CasbinRule(ptype="p")) == ("p", [])


@pytest.mark.unit
def test_rule_survives_mapping_both_ways():
    rule = ["alice", "domain1", "data1", "read", "allow"]
    ptype, restored = rule_from_row(row_from_rule(CasbinRule, "p2", rule))

    assert ptype == "p2"
    assert restored == rule


@pytest.mark.unit
def test_policy_line_matches_casbin_line_format():
    row = row_from_rule(CasbinRule, "p", ["bob", "data2", "write"])

    assert policy_line(row) == "p, bob, data2, write"
    assert str(row) == "p, bob, data2, write"


# ============================================================================
# Delete patterns
# ============================================================================

@pytest.mark.unit
def test_match_pattern_uses_only_populated_fields():
    row = row_from_rule(CasbinRule, "p", ["alice", "data1"])

    assert match_pattern(row) == {"ptype": "p", "v0": "alice", "v1": "data1"}


@pytest.mark.unit
def test_match_pattern_keeps_empty_string():
    row = row_from_rule(CasbinRule, "p", ["alice", ""])

    assert match_pattern(row) == {"ptype": "p", "v0": "alice", "v1": ""}


@pytest.mark.unit
@pytest.mark.parametrize(
    "field_index, values, expected",
    [
        (0, ["alice"], {"v0": "alice"}),
        (1, ["data2"], {"v1": "data2"}),
        (1, ["data2", "write"], {"v1": "data2", "v2": "write"}),
        (5, ["a", "b", "c"], {"v5": "a", "v6": "b"}),
        (-1, ["ignored", "alice"], {"v0": "alice"}),
        (7, ["x"], {}),
        (-3, ["a", "b"], {}),
        (2, [], {}),
    ],
)
def test_filtered_pattern(field_index, values, expected):
    assert filtered_pattern("p", field_index, values) == {"ptype": "p", **expected}


@pytest.mark.unit
def test_filtered_pattern_skips_none_values():
    assert filtered_pattern("p", 0, ["alice", None, "read"]) == {
        "ptype": "p",
        "v0": "alice",
        "v2": "read",
    }


@pytest.mark.unit
def test_filtered_pattern_does_not_mutate_input():
    values = ("alice", "data1")
    filtered_pattern("p", 0, values)

    assert values == ("alice", "data1")
