"""Text normalization, expression resolution and rule matching."""

from policy_extractor.extraction.normalizers import normalize, parse_decimal
from policy_extractor.extraction.record import StructuredRecord
from policy_extractor.extraction.expressions import ExpressionResolver, resolve_expression
from policy_extractor.extraction.match_engine import MatchEngine

__all__ = [
    "ExpressionResolver",
    "MatchEngine",
    "StructuredRecord",
    "normalize",
    "parse_decimal",
    "resolve_expression",
]
