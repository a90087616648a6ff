"""Scoring of rule-based extraction results.

Two independent paths consume the same record and spans:

- ``ConfidenceScorer``: soft 0-1 confidence blending field presence and
  coverage;
- ``DecisionPolicy``: hard accept / fallback gate on coverage and signal
  count.
"""

from policy_extractor.confidence.coverage import merge_spans, span_coverage
from policy_extractor.confidence.routing import DecisionPolicy
from policy_extractor.confidence.scorer import ConfidenceScorer

__all__ = [
    "ConfidenceScorer",
    "DecisionPolicy",
    "merge_spans",
    "span_coverage",
]
