"""Tests for the scoring configuration loader."""

import pytest
from pydantic import ValidationError

from policy_extractor.config.scoring import (
    DEFAULT_CRITICAL_FIELDS,
    DEFAULT_FIELD_WEIGHTS,
    ConfidenceConfig,
    ScoringConfig,
    ScoringConfigError,
    load_scoring_config,
    parse_scoring_config,
)


class TestDefaults:

    def test_confidence_defaults(self):
        cfg = ConfidenceConfig()
        assert cfg.alpha == pytest.approx(0.75)
        assert cfg.field_weights == DEFAULT_FIELD_WEIGHTS
        assert cfg.critical_fields == DEFAULT_CRITICAL_FIELDS
        assert [b.min for b in cfg.coverage_to_score] == [0.40, 0.20, 0.00]
        assert cfg.min_critical_signals == 2
        assert cfg.low_critical_cap == pytest.approx(0.6)
        assert cfg.penalties.bad_amount == pytest.approx(0.1)

    def test_decision_defaults(self):
        cfg = ScoringConfig().decision
        assert set(cfg.signal_families) == {"deadline", "fee", "non_refundable"}
        assert cfg.min_critical_signals == 2

    def test_frozen(self):
        cfg = ScoringConfig()
        with pytest.raises(ValidationError):
            cfg.confidence = ConfidenceConfig(alpha=0.1)


class TestLoad:

    def test_none_path_gives_defaults(self):
        assert load_scoring_config(None) == ScoringConfig()

    def test_missing_file_gives_defaults(self, tmp_path):
        assert load_scoring_config(tmp_path / "absent.yaml") == ScoringConfig()

    def test_partial_override(self, tmp_path):
        path = tmp_path / "scoring.yaml"
        path.write_text(
            "confidence:\n"
            "  alpha: 0.5\n"
            "  penalties:\n"
            "    badFeeAmount: 0.25\n"
            "decision:\n"
            "  min_coverage: 0.7\n"
            "  signal_families:\n"
            "    fee:\n"
            "      - path: fee.amount\n",
            encoding="utf-8",
        )
        cfg = load_scoring_config(path)
        assert cfg.confidence.alpha == pytest.approx(0.5)
        assert cfg.confidence.penalties.bad_amount == pytest.approx(0.25)
        assert cfg.confidence.min_critical_signals == 2
        assert cfg.decision.min_coverage == pytest.approx(0.7)
        assert list(cfg.decision.signal_families) == ["fee"]

    def test_invalid_yaml(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text("confidence: [", encoding="utf-8")
        with pytest.raises(ScoringConfigError, match="Invalid YAML"):
            load_scoring_config(path)

    def test_invalid_values(self):
        with pytest.raises(ScoringConfigError):
            parse_scoring_config({"confidence": {"alpha": 1.5}})

    def test_negative_weight(self):
        with pytest.raises(ScoringConfigError):
            parse_scoring_config({"confidence": {"field_weights": {"fee.amount": -1}}})

    def test_non_mapping(self):
        with pytest.raises(ScoringConfigError):
            parse_scoring_config(["alpha"])

    def test_empty_document(self):
        assert parse_scoring_config(None) == ScoringConfig()
