"""Rules-only acceptance gate.

Decides whether the rule-derived structure can be used on its own or a
fallback should take over.  Two checks, both required for acceptance:

    coverage            merged span coverage over the filtered text  >= min_coverage
    critical signals    signal families present                      >= min_critical_signals

A signal family (``deadline``, ``fee``, ...) is present when any one of its
alternative paths is set, optionally to a specific value.  This gate is
evaluated independently of ``ConfidenceScorer``.
"""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Union

from policy_extractor.confidence.coverage import SpanLike, filtered_length, span_coverage
from policy_extractor.config.scoring import DecisionConfig, SignalCheck
from policy_extractor.extraction.record import StructuredRecord
from policy_extractor.schemas.decision import DecisionResult

logger = logging.getLogger(__name__)


def _check_passes(record: StructuredRecord, check: SignalCheck) -> bool:
    if not record.has(check.path):
        return False
    if check.equals is None:
        return True
    return str(record.get(check.path)).strip().lower() == str(check.equals).strip().lower()


class DecisionPolicy:
    """Accept / fallback gate for rule-based extraction."""

    def __init__(self, config: Optional[DecisionConfig] = None) -> None:
        self.config = config or DecisionConfig()

    def present_signals(self, record: StructuredRecord) -> List[str]:
        """Names of the signal families with at least one alternative set."""
        return [
            name
            for name, checks in self.config.signal_families.items()
            if any(_check_passes(record, c) for c in checks)
        ]

    def decide(
        self,
        record: Union[StructuredRecord, Mapping[str, Any], None],
        spans: Iterable[SpanLike],
        text: str,
    ) -> DecisionResult:
        """Evaluate the gate.

        Args:
            record: Structured record (or its nested dict form).
            spans: Match spans over *text*.
            text: The normalized text the spans refer to.

        Returns:
            DecisionResult with the accept flag and the values behind it.
        """
        cfg = self.config
        record = StructuredRecord.coerce(record)

        denominator = filtered_length(text or "", cfg.ignorable_chars, cfg.boilerplate_tokens)
        coverage = span_coverage(spans, denominator)
        signals = self.present_signals(record)

        coverage_ok = coverage >= cfg.min_coverage
        signals_ok = len(signals) >= cfg.min_critical_signals
        accept = coverage_ok and signals_ok

        if accept:
            reason = (
                f"Coverage {coverage:.2f} >= {cfg.min_coverage} and "
                f"{len(signals)} signal(s) >= {cfg.min_critical_signals}"
            )
        else:
            failures = []
            if not coverage_ok:
                failures.append(f"coverage {coverage:.2f} < {cfg.min_coverage}")
            if not signals_ok:
                failures.append(f"{len(signals)} signal(s) < {cfg.min_critical_signals}")
            reason = "Fallback: " + "; ".join(failures)

        logger.debug(f"decision accept={accept} ({reason})")

        return DecisionResult(
            accept=accept,
            coverage=round(coverage, 4),
            critical_signals=len(signals),
            signals_present=signals,
            min_coverage=cfg.min_coverage,
            min_critical_signals=cfg.min_critical_signals,
            reason=reason,
        )
