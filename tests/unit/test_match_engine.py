"""Unit tests for the rule-ordered match engine."""

import re

from policy_extractor.extraction.match_engine import (
    MatchEngine,
    find_next,
    flatten_field_map,
    order_rules,
)
from policy_test_helpers import make_rule


class TestOrdering:
    """Priority ordering."""

    def test_descending_priority(self):
        rules = [make_rule("low", "X", {}, 1), make_rule("high", "X", {}, 9)]
        assert [r.id for r in order_rules(rules)] == ["high", "low"]

    def test_stable_for_equal_priority(self):
        rules = [make_rule(name, "X", {}, 5) for name in ("a", "b", "c")]
        assert [r.id for r in order_rules(rules)] == ["a", "b", "c"]


class TestFindNext:

    def test_returns_none_when_exhausted(self):
        pattern = re.compile("AB")
        first = find_next(pattern, "AB AB", 0)
        second = find_next(pattern, "AB AB", first.end())
        assert (first.start(), second.start()) == (0, 3)
        assert find_next(pattern, "AB AB", second.end()) is None

    def test_past_end(self):
        assert find_next(re.compile("A"), "A", 5) is None


class TestFirstMatchWins:
    """Merge semantics across rules."""

    def test_higher_priority_value_kept(self):
        rules = [
            make_rule("low", r"(?P<n>\d+) NIGHTS", {"fee.nights": "$n"}, priority=1),
            make_rule("high", r"PENALTY OF (?P<n>\d+)", {"fee.nights": "$n"}, priority=10),
        ]
        result = MatchEngine().apply(rules, "PENALTY OF 2 NIGHTS, OR 3 NIGHTS")
        assert result.record.get("fee.nights") == 2

    def test_within_rule_first_occurrence_wins(self):
        rules = [make_rule("pct", r"(?P<p>\d+)%", {"fee.percent": "$p"})]
        result = MatchEngine().apply(rules, "10% THEN 20%")
        assert result.record.get("fee.percent") == 10
        assert len(result.hits) == 2

    def test_lower_priority_fills_empty_paths(self):
        rules = [
            make_rule("a", "FEE", {"fee.type": "fixed_amount"}, priority=5),
            make_rule("b", r"(?P<cur>USD)", {"fee.type": "other", "fee.currency": "$cur"}, priority=1),
        ]
        result = MatchEngine().apply(rules, "FEE 10 USD")
        assert result.record.to_dict() == {"fee": {"type": "fixed_amount", "currency": "USD"}}


class TestSpansAndHits:
    """Spans and diagnostics."""

    def test_spans_recorded_even_without_writes(self):
        rules = [
            make_rule("a", r"(?P<d>\d+) DAYS", {"window.cutoff_days": "$d"}, priority=2),
            make_rule("b", r"(?P<d>\d+) DAYS", {"window.cutoff_days": "$d"}, priority=1),
        ]
        result = MatchEngine().apply(rules, "3 DAYS")
        assert [s.as_tuple() for s in result.spans] == [(0, 6), (0, 6)]
        assert [h.rule_id for h in result.hits] == ["a", "b"]

    def test_spans_recorded_when_expression_unresolved(self):
        rules = [make_rule("a", r"FEE(?: OF (?P<amt>\d+))?", {"fee.amount": "$amt"})]
        result = MatchEngine().apply(rules, "FEE APPLIES")
        assert len(result.record) == 0
        assert [s.as_tuple() for s in result.spans] == [(0, 3)]

    def test_non_overlapping_occurrences(self):
        rules = [make_rule("aa", "AA", {"x": "1"})]
        result = MatchEngine().apply(rules, "AAAAA")
        assert [s.as_tuple() for s in result.spans] == [(0, 2), (2, 4)]

    def test_hit_carries_captures_and_text(self):
        rules = [make_rule("pct", r"(?P<p>\d+)%(?P<extra>!)?", {"fee.percent": "$p"})]
        hit = MatchEngine().apply(rules, "FEE 50%").hits[0]
        assert hit.rule_id == "pct"
        assert hit.captures == {"p": "50", "extra": None}
        assert hit.text == "50%"
        assert hit.span.as_tuple() == (4, 7)

    def test_empty_matches_terminate(self):
        rules = [make_rule("empty", r"X*", {"flag": "seen"})]
        result = MatchEngine().apply(rules, "ABC")
        assert len(result.hits) == 4
        assert result.record.get("flag") == "seen"


class TestDisabledRules:
    """Rules without a usable field map."""

    def test_missing_map_disables_rule(self):
        rules = [make_rule("broken", "FEE", None), make_rule("ok", "FEE", {"fee.type": "x"})]
        result = MatchEngine().apply(rules, "FEE")
        assert [h.rule_id for h in result.hits] == ["ok"]
        assert result.record.get("fee.type") == "x"

    def test_non_mapping_map_disables_rule(self):
        rules = [make_rule("broken", "FEE", ["fee.type"])]
        result = MatchEngine().apply(rules, "FEE")
        assert result.hits == []
        assert result.spans == []

    def test_unsupported_leaf_is_ignored(self):
        rules = [make_rule("r", "FEE", {"fee.type": ["x"], "fee.kind": "y"})]
        result = MatchEngine().apply(rules, "FEE")
        assert result.record.to_dict() == {"fee": {"kind": "y"}}


class TestEmptyInput:

    def test_empty_text(self):
        rules = [make_rule("a", "X*", {"a": "1"})]
        result = MatchEngine().apply(rules, "")
        assert len(result.record) == 0
        assert result.spans == []
        assert result.hits == []

    def test_no_match(self):
        rules = [make_rule("a", "FEE", {"a": "1"})]
        result = MatchEngine().apply(rules, "PLEASE CONTACT THE FRONT DESK.")
        assert result.structured == {}


class TestLongCaptures:

    def test_ceil_over_long_capture(self):
        rules = [make_rule("h", r"(?P<h>\d+) HOURS", {"window.cutoff_days": "ceil($h/24)"})]
        hours = "9" * 400
        result = MatchEngine().apply(rules, f"{hours} HOURS")
        assert result.record.get("window.cutoff_days") == -(-int(hours) // 24)
        assert len(result.hits) == 1

    def test_overflowing_fraction_kept_as_text(self):
        rules = [make_rule("n", r"(?P<n>[\d.]+) NIGHTS", {"fee.nights": "$n"})]
        nights = "9" * 400 + ".5"
        result = MatchEngine().apply(rules, f"{nights} NIGHTS")
        assert result.record.get("fee.nights") == nights
        assert result.record.malformed_paths == {"fee.nights"}


class TestFlattenFieldMap:

    def test_nested_map(self):
        assert flatten_field_map({"fee": {"amount": "$a", "currency": "$c"}, "x": "1"}) == {
            "fee.amount": "$a",
            "fee.currency": "$c",
            "x": "1",
        }

    def test_invalid_map(self):
        assert flatten_field_map(None) is None
        assert flatten_field_map("fee.amount") is None
