"""Unit tests for StructuredRecord."""

from policy_extractor.extraction.record import (
    NUMERIC_SUFFIXES,
    StructuredRecord,
    normalize_path,
)


class TestWrites:
    """set_if_absent() semantics."""

    def test_first_write_wins(self):
        record = StructuredRecord()
        assert record.set_if_absent("fee.amount", 100) is True
        assert record.set_if_absent("fee.amount", 200) is False
        assert record.get("fee.amount") == 100

    def test_empty_values_not_written(self):
        record = StructuredRecord()
        assert record.set_if_absent("fee.amount", "") is False
        assert record.set_if_absent("fee.amount", None) is False
        assert len(record) == 0

    def test_zero_is_a_value(self):
        record = StructuredRecord()
        assert record.set_if_absent("fee.amount", 0) is True
        assert record.has("fee.amount")

    def test_leaf_under_scalar_rejected(self):
        record = StructuredRecord()
        record.set_if_absent("fee", "none")
        assert record.set_if_absent("fee.amount", 10) is False

    def test_scalar_over_subtree_rejected(self):
        record = StructuredRecord()
        record.set_if_absent("fee.amount", 10)
        assert record.set_if_absent("fee", "none") is False

    def test_path_is_normalized(self):
        record = StructuredRecord()
        record.set_if_absent(" fee . amount ", 5)
        assert record.get("fee.amount") == 5
        assert normalize_path("a..b") == "a.b"


class TestNumericCoercion:
    """Count-like fields are re-parsed as numbers on write."""

    def test_suffix_set(self):
        assert {"nights", "percent", "cutoff_days", "cutoff_hours"} <= NUMERIC_SUFFIXES

    def test_string_count_becomes_number(self):
        record = StructuredRecord()
        record.set_if_absent("fee.nights", "2")
        assert record.get("fee.nights") == 2

    def test_unparseable_count_kept_and_flagged(self):
        record = StructuredRecord()
        record.set_if_absent("fee.percent", "FIFTY")
        assert record.get("fee.percent") == "FIFTY"
        assert record.malformed_paths == {"fee.percent"}

    def test_non_count_field_untouched(self):
        record = StructuredRecord()
        record.set_if_absent("fee.currency", "USD")
        record.set_if_absent("fee.amount", "12,3,4")
        assert record.get("fee.amount") == "12,3,4"
        assert record.malformed_paths == set()


class TestConversion:
    """to_dict() / from_dict()."""

    def test_to_dict_nests(self):
        record = StructuredRecord()
        record.set_if_absent("fee.amount", 10)
        record.set_if_absent("fee.currency", "EUR")
        record.set_if_absent("window.cutoff_days", 3)
        assert record.to_dict() == {
            "fee": {"amount": 10, "currency": "EUR"},
            "window": {"cutoff_days": 3},
        }

    def test_from_dict_round_trip(self):
        data = {"fee": {"amount": 10, "type": "fixed_amount"}, "remainder": "X"}
        assert StructuredRecord.from_dict(data).to_dict() == data

    def test_from_dict_applies_coercion(self):
        record = StructuredRecord.from_dict({"window": {"cutoff_days": "3"}})
        assert record.get("window.cutoff_days") == 3

    def test_from_dict_accepts_dotted_keys(self):
        record = StructuredRecord.from_dict({"fee.amount": "12,3,4"})
        assert record.get("fee.amount") == "12,3,4"

    def test_from_dict_none(self):
        assert len(StructuredRecord.from_dict(None)) == 0

    def test_coerce_passes_records_through(self):
        record = StructuredRecord()
        assert StructuredRecord.coerce(record) is record

    def test_contains(self):
        record = StructuredRecord.from_dict({"fee": {"nights": 1}})
        assert "fee.nights" in record
        assert "fee.amount" not in record
