"""Scoring configuration schema and loader.

Both scoring paths are configured from one YAML document::

    confidence:
      alpha: 0.75
      field_weights: {deadline.iso: 0.45, ...}
      critical_fields: [deadline.iso, ...]
      coverage_to_score: [{min: 0.40, score: 1.0}, ...]
    decision:
      min_coverage: 0.5
      min_critical_signals: 2
      signal_families: {fee: [{path: fee.amount}, ...]}

Missing keys fall back to the built-in defaults below.  The configuration
is loaded once at startup and passed by reference into the scorer and the
decision policy; models are frozen so it cannot drift afterwards.
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

logger = logging.getLogger(__name__)


class ScoringConfigError(Exception):
    """Raised when the scoring configuration cannot be loaded or is invalid."""
    pass


# ── Confidence scorer ────────────────────────────────────────────────

DEFAULT_FIELD_WEIGHTS: Dict[str, float] = {
    "deadline.iso": 0.45,
    "window.cutoff_days": 0.25,
    "fee.amount": 0.15,
    "fee.nights": 0.15,
    "deadline.local_hour": 0.05,
    "deadline.date_ddmmmyy": 0.05,
    "fee.currency": 0.05,
    "fee.percent": 0.10,
}

DEFAULT_CRITICAL_FIELDS: List[str] = [
    "deadline.iso",
    "window.cutoff_days",
    "fee.amount",
    "fee.nights",
    "fee.percent",
]


class CoverageBucket(BaseModel):
    """Coverage at or above ``min`` maps to ``score``."""

    model_config = ConfigDict(frozen=True)

    min: float = Field(ge=0.0, le=1.0, description="Minimum coverage for this bucket")
    score: float = Field(ge=0.0, le=1.0, description="Coverage score assigned")


class PenaltyConfig(BaseModel):
    """Penalty magnitudes subtracted from the blended confidence."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    bad_amount: float = Field(
        default=0.10,
        ge=0.0,
        alias="badFeeAmount",
        description="Amount field holding a string that is not a plain decimal",
    )
    malformed_numeric: float = Field(
        default=0.05,
        ge=0.0,
        description="A count-like field kept a non-numeric string",
    )


class ConfidenceConfig(BaseModel):
    """Configuration for ``ConfidenceScorer``."""

    model_config = ConfigDict(frozen=True)

    alpha: float = Field(default=0.75, ge=0.0, le=1.0, description="Field score blend weight")
    field_weights: Dict[str, float] = Field(default_factory=lambda: dict(DEFAULT_FIELD_WEIGHTS))
    critical_fields: List[str] = Field(default_factory=lambda: list(DEFAULT_CRITICAL_FIELDS))
    present_strength: float = Field(
        default=0.6,
        ge=0.0,
        le=1.0,
        description="Strength of a present non-critical field (critical fields count 1.0)",
    )
    coverage_to_score: List[CoverageBucket] = Field(
        default_factory=lambda: [
            CoverageBucket(min=0.40, score=1.0),
            CoverageBucket(min=0.20, score=0.6),
            CoverageBucket(min=0.00, score=0.3),
        ]
    )
    min_critical_signals: int = Field(default=2, ge=0)
    low_critical_cap: float = Field(default=0.6, ge=0.0, le=1.0)
    penalties: PenaltyConfig = Field(default_factory=PenaltyConfig)
    amount_fields: List[str] = Field(
        default_factory=lambda: ["fee.amount"],
        description="Monetary fields checked for decimal well-formedness",
    )

    @field_validator("field_weights")
    @classmethod
    def validate_weights(cls, v: Dict[str, float]) -> Dict[str, float]:
        for path, weight in v.items():
            if weight < 0:
                raise ValueError(f"Field weight for '{path}' must be non-negative")
        return v


# ── Decision policy ──────────────────────────────────────────────────


class SignalCheck(BaseModel):
    """One alternative of a signal family: a path, optionally with a required value."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(min_length=1)
    equals: Optional[Any] = Field(default=None, description="Required value (compared case-insensitively)")


DEFAULT_SIGNAL_FAMILIES: Dict[str, List[Dict[str, Any]]] = {
    "deadline": [
        {"path": "deadline.iso"},
        {"path": "deadline.date_ddmmmyy"},
        {"path": "window.cutoff_days"},
        {"path": "window.cutoff_hours"},
        {"path": "special_window.cutoff_days"},
    ],
    "fee": [
        {"path": "fee.amount"},
        {"path": "fee.nights"},
        {"path": "fee.percent"},
        {"path": "fee.type", "equals": "full_stay"},
    ],
    "non_refundable": [
        {"path": "policy.cancellable", "equals": "false"},
    ],
}


class DecisionConfig(BaseModel):
    """Configuration for ``DecisionPolicy``."""

    model_config = ConfigDict(frozen=True)

    min_coverage: float = Field(default=0.5, ge=0.0, le=1.0)
    min_critical_signals: int = Field(default=2, ge=0)
    signal_families: Dict[str, List[SignalCheck]] = Field(
        default_factory=lambda: {
            name: [SignalCheck(**c) for c in checks]
            for name, checks in DEFAULT_SIGNAL_FAMILIES.items()
        }
    )
    ignorable_chars: str = Field(
        default=".,;:!?()[]\"'",
        description="Characters removed from the text before measuring the denominator",
    )
    boilerplate_tokens: List[str] = Field(
        default_factory=lambda: ["PLEASE NOTE", "THANK YOU", "IMPORTANT"],
        description="Phrases removed (whole words) before measuring the denominator",
    )


class ScoringConfig(BaseModel):
    """Complete scoring configuration."""

    model_config = ConfigDict(frozen=True)

    confidence: ConfidenceConfig = Field(default_factory=ConfidenceConfig)
    decision: DecisionConfig = Field(default_factory=DecisionConfig)


def parse_scoring_config(data: Optional[Dict[str, Any]]) -> ScoringConfig:
    """Validate a parsed configuration mapping."""
    if data is None:
        return ScoringConfig()
    if not isinstance(data, dict):
        raise ScoringConfigError("Scoring configuration must be a mapping")
    try:
        return ScoringConfig.model_validate(data)
    except ValidationError as e:
        raise ScoringConfigError(f"Invalid scoring configuration: {e}")


def load_scoring_config(path: Optional[str | Path] = None) -> ScoringConfig:
    """Load scoring configuration from YAML.

    A missing *path* (None, or a file that does not exist) yields the
    defaults.  Unparseable or invalid files raise ``ScoringConfigError``.
    """
    if path is None:
        return ScoringConfig()

    config_path = Path(path)
    if not config_path.exists():
        logger.info(f"No scoring config at {config_path}; using defaults")
        return ScoringConfig()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ScoringConfigError(f"Invalid YAML in {config_path}: {e}")

    config = parse_scoring_config(data)
    logger.info(f"Loaded scoring config from {config_path}")
    return config
