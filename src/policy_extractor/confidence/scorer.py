"""Confidence scorer for rule-based extraction.

Blends two signals into a 0-1 confidence:

- field presence: weighted average over the configured field table, where a
  present critical field counts 1.0 and any other present field counts
  ``present_strength``;
- coverage: the merged span coverage of the full text, bucketed through the
  ``coverage_to_score`` table.

Penalties are subtracted after blending, and the result is capped at
``low_critical_cap`` when fewer than ``min_critical_signals`` critical
fields are present.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Tuple, Union

from policy_extractor.confidence.coverage import SpanLike, span_coverage
from policy_extractor.config.scoring import ConfidenceConfig, CoverageBucket
from policy_extractor.extraction.normalizers import is_plain_decimal
from policy_extractor.extraction.record import StructuredRecord, is_present
from policy_extractor.schemas.confidence import ConfidenceBand, ConfidenceResult

logger = logging.getLogger(__name__)


def clamp01(value: float) -> float:
    return max(0.0, min(1.0, value))


def score_to_band(score: float) -> ConfidenceBand:
    """Map a 0-1 confidence to a qualitative band."""
    if score >= 0.80:
        return ConfidenceBand.HIGH
    elif score >= 0.55:
        return ConfidenceBand.MODERATE
    else:
        return ConfidenceBand.LOW


def coverage_to_score(coverage: float, table: Iterable[CoverageBucket]) -> float:
    """Pick the score of the highest-threshold bucket *coverage* reaches.

    Zero coverage always scores 0.0, whatever the table says.
    """
    if coverage <= 0:
        return 0.0
    for bucket in sorted(table, key=lambda b: b.min, reverse=True):
        if coverage >= bucket.min:
            return bucket.score
    return 0.0


class ConfidenceScorer:
    """Computes the rules confidence from a record, its spans and the text."""

    def __init__(self, config: Optional[ConfidenceConfig] = None) -> None:
        self.config = config or ConfidenceConfig()

    def score(
        self,
        record: Union[StructuredRecord, Mapping[str, Any], None],
        spans: Iterable[SpanLike],
        text: str,
    ) -> ConfidenceResult:
        """Score an extraction.

        Args:
            record: Structured record (or its nested dict form).
            spans: Match spans over *text*.
            text: The normalized text the spans refer to.

        Returns:
            ConfidenceResult with the final confidence and its components.
        """
        cfg = self.config
        record = StructuredRecord.coerce(record)

        # 1) Field presence
        field_score, critical_present = self._field_score(record)

        # 2) Coverage
        coverage = span_coverage(spans, len(text or ""))
        coverage_score = coverage_to_score(coverage, cfg.coverage_to_score)

        # 3) Penalties
        penalties, reasons = self._penalties(record)

        # 4) Blend
        confidence = clamp01(
            cfg.alpha * field_score + (1 - cfg.alpha) * coverage_score - penalties
        )

        # 5) Low-signal cap
        capped = False
        if critical_present < cfg.min_critical_signals and confidence > cfg.low_critical_cap:
            confidence = cfg.low_critical_cap
            capped = True

        logger.debug(
            f"confidence={confidence:.3f} field={field_score:.3f} "
            f"coverage={coverage:.3f} critical={critical_present} penalties={penalties:.2f}"
        )

        return ConfidenceResult(
            confidence=round(confidence, 4),
            band=score_to_band(confidence),
            field_score=round(field_score, 4),
            coverage=round(coverage, 4),
            coverage_score=coverage_score,
            critical_present=critical_present,
            penalties=round(penalties, 4),
            penalty_reasons=reasons,
            capped=capped,
        )

    def _field_score(self, record: StructuredRecord) -> Tuple[float, int]:
        cfg = self.config
        critical = set(cfg.critical_fields)
        critical_present = 0
        weighted = 0.0
        total_weight = 0.0

        for path, weight in cfg.field_weights.items():
            total_weight += weight
            if not record.has(path):
                continue
            if path in critical:
                strength = 1.0
                critical_present += 1
            else:
                strength = cfg.present_strength
            weighted += strength * weight

        field_score = weighted / total_weight if total_weight > 0 else 0.0
        return field_score, critical_present

    def _penalties(self, record: StructuredRecord) -> Tuple[float, List[str]]:
        cfg = self.config
        total = 0.0
        reasons: List[str] = []

        for path in cfg.amount_fields:
            value = record.get(path)
            if isinstance(value, str) and is_present(value) and not is_plain_decimal(value):
                total += cfg.penalties.bad_amount
                reasons.append(f"bad_amount:{path}")

        if record.malformed_paths:
            total += cfg.penalties.malformed_numeric
            reasons.append("malformed_numeric:" + ",".join(sorted(record.malformed_paths)))

        return total, reasons
