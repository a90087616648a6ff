"""Scoring configuration."""

from policy_extractor.config.scoring import (
    ConfidenceConfig,
    DecisionConfig,
    ScoringConfig,
    ScoringConfigError,
    load_scoring_config,
)

__all__ = [
    "ConfidenceConfig",
    "DecisionConfig",
    "ScoringConfig",
    "ScoringConfigError",
    "load_scoring_config",
]
