"""Span coverage: how much of the text the matched rules recognized."""

import re
from dataclasses import dataclass, field
from typing import Iterable, List, Sequence, Tuple, Union

from policy_extractor.schemas.extraction import Span

SpanLike = Union[Span, Tuple[int, int], Sequence[int]]

_WHITESPACE = re.compile(r"\s+")


def _bounds(span: SpanLike) -> Tuple[int, int]:
    if isinstance(span, Span):
        return span.start, span.end
    start, end = span
    return int(start), int(end)


def merge_spans(spans: Iterable[SpanLike]) -> List[Tuple[int, int]]:
    """Merge overlapping or touching spans into disjoint intervals.

    Spans with ``start > end`` are ignored.
    """
    ordered = sorted(
        (b for b in (_bounds(s) for s in spans) if b[0] <= b[1]),
        key=lambda b: b[0],
    )
    if not ordered:
        return []

    merged: List[Tuple[int, int]] = []
    cur_start, cur_end = ordered[0]
    for start, end in ordered[1:]:
        if start <= cur_end:
            cur_end = max(cur_end, end)
        else:
            merged.append((cur_start, cur_end))
            cur_start, cur_end = start, end
    merged.append((cur_start, cur_end))
    return merged


def span_coverage(spans: Iterable[SpanLike], denominator_length: int) -> float:
    """Fraction of *denominator_length* covered by the merged spans.

    Returns 0.0 without spans or with a non-positive denominator.  The ratio
    is capped at 1.0 for denominators measured on a filtered variant of the
    text the spans were taken from.
    """
    if denominator_length <= 0:
        return 0.0
    covered = sum(end - start for start, end in merge_spans(spans))
    if covered <= 0:
        return 0.0
    return min(1.0, covered / denominator_length)


def filtered_length(
    text: str,
    ignorable_chars: str = "",
    boilerplate_tokens: Iterable[str] = (),
) -> int:
    """Length of *text* after removing ignorable characters and boilerplate.

    Boilerplate tokens are removed as whole words (case-insensitive) and
    whitespace is re-collapsed before measuring.
    """
    if not text:
        return 0
    filtered = text
    for token in boilerplate_tokens:
        token = token.strip()
        if token:
            filtered = re.sub(rf"\b{re.escape(token)}\b", " ", filtered, flags=re.IGNORECASE)
    if ignorable_chars:
        filtered = filtered.translate({ord(c): None for c in ignorable_chars})
    return len(_WHITESPACE.sub(" ", filtered).strip())


@dataclass
class CoverageResult:
    """Coverage ratio plus the numbers it was computed from."""

    ratio: float = 0.0
    covered_length: int = 0
    denominator: int = 0
    merged: List[Tuple[int, int]] = field(default_factory=list)


def compute_coverage(spans: Iterable[SpanLike], denominator_length: int) -> CoverageResult:
    merged = merge_spans(spans)
    covered = sum(end - start for start, end in merged)
    return CoverageResult(
        ratio=span_coverage(merged, denominator_length),
        covered_length=covered,
        denominator=max(0, denominator_length),
        merged=merged,
    )
