"""End-to-end policy analysis.

    text -> normalize -> MatchEngine -> {record, spans, hits}
         -> ConfidenceScorer + DecisionPolicy -> render -> PolicyAnalysis

A ``PolicyExtractor`` holds the rule set and scoring configuration, both
loaded once and only read afterwards, so one instance can serve
concurrent callers.  Every ``analyze`` call builds its own record, spans
and results.
"""

import logging
from pathlib import Path
from typing import Optional

from policy_extractor.confidence.routing import DecisionPolicy
from policy_extractor.confidence.scorer import ConfidenceScorer
from policy_extractor.config.scoring import ScoringConfig, load_scoring_config
from policy_extractor.extraction.match_engine import MatchEngine
from policy_extractor.extraction.normalizers import normalize
from policy_extractor.extraction.rule_loader import RuleSet, load_rules
from policy_extractor.rendering.renderer import render_policy
from policy_extractor.schemas.analysis import AnalysisMeta, PolicyAnalysis
from policy_extractor.schemas.extraction import ExtractionResult

logger = logging.getLogger(__name__)


class PolicyExtractor:
    """Extracts, scores and renders cancellation policies."""

    def __init__(
        self,
        rules: RuleSet,
        scoring_config: Optional[ScoringConfig] = None,
    ) -> None:
        self.rules = rules
        self.scoring_config = scoring_config or ScoringConfig()
        self.engine = MatchEngine()
        self.scorer = ConfidenceScorer(self.scoring_config.confidence)
        self.policy = DecisionPolicy(self.scoring_config.decision)

    @classmethod
    def from_paths(
        cls,
        rules_path: Optional[str | Path] = None,
        config_path: Optional[str | Path] = None,
    ) -> "PolicyExtractor":
        """Load rules and scoring config from disk (packaged defaults if None)."""
        return cls(load_rules(rules_path), load_scoring_config(config_path))

    def extract(self, normalized_text: str) -> ExtractionResult:
        """Run the rules over already-normalized text."""
        return self.engine.apply(self.rules.rules, normalized_text)

    def analyze(self, text: Optional[str]) -> PolicyAnalysis:
        """Run the full pipeline on raw policy text.

        Empty or unrecognized text is not an error: it yields an empty
        record, zero coverage, zero confidence and a fallback decision.
        """
        original = text or ""
        normalized = normalize(original)
        extraction = self.extract(normalized)

        confidence = self.scorer.score(extraction.record, extraction.spans, normalized)
        decision = self.policy.decide(extraction.record, extraction.spans, normalized)
        rendered = render_policy(extraction.record)

        logger.info(
            f"Analyzed policy: {len(extraction.hits)} matches, "
            f"{len(extraction.record)} fields, confidence={confidence.confidence:.2f}, "
            f"accept={decision.accept}"
        )

        return PolicyAnalysis(
            original=original,
            normalized=normalized,
            structured=extraction.structured,
            spans=extraction.spans,
            hits=extraction.hits,
            confidence=confidence,
            decision=decision,
            rendered=rendered,
            meta=AnalysisMeta(
                rules_version=self.rules.version,
                matches=len(extraction.spans),
            ),
        )
