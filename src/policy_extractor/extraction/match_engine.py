"""Rule-ordered pattern matching.

Rules are applied highest priority first.  Every non-overlapping occurrence
of a rule's pattern produces a ``MatchHit`` and a ``Span``; its field map is
resolved against the occurrence's captures and written into the record.
The first value written to a path wins for the whole pass, so a
lower-priority rule can only fill paths that are still empty.
"""

import logging
import re
from typing import Any, Dict, Iterable, List, Mapping, Optional

from policy_extractor.extraction.expressions import ExpressionResolver
from policy_extractor.extraction.record import StructuredRecord
from policy_extractor.schemas.extraction import ExtractionResult, MatchHit, Rule, Span

logger = logging.getLogger(__name__)


def order_rules(rules: Iterable[Rule]) -> List[Rule]:
    """Sort by descending priority; equal priorities keep list order."""
    return sorted(rules, key=lambda r: -r.priority)


def find_next(pattern: re.Pattern, text: str, pos: int) -> Optional[re.Match]:
    """Locate the next occurrence of *pattern* at or after *pos*."""
    if pos > len(text):
        return None
    return pattern.search(text, pos)


def flatten_field_map(field_map: Any) -> Optional[Dict[str, Any]]:
    """Flatten a (possibly nested) field map into ``dot.path -> expression``.

    Returns None when the map is missing or not a mapping.
    """
    if not isinstance(field_map, Mapping):
        return None

    flat: Dict[str, Any] = {}

    def walk(node: Mapping[str, Any], base: str) -> None:
        for key, value in node.items():
            path = f"{base}.{key}" if base else str(key)
            if isinstance(value, Mapping):
                walk(value, path)
            else:
                flat[path] = value

    walk(field_map, "")
    return flat


class MatchEngine:
    """Applies an ordered rule list to normalized text."""

    def __init__(self, resolver: Optional[ExpressionResolver] = None) -> None:
        self.resolver = resolver or ExpressionResolver()

    def apply(self, rules: Iterable[Rule], text: str) -> ExtractionResult:
        """Run every rule over *text* and build the structured record.

        Args:
            rules: Rule definitions (any order; sorted here by priority).
            text: Normalized policy text.

        Returns:
            ExtractionResult with the record, all occurrence spans and hits.
        """
        result = ExtractionResult()
        if not text:
            return result

        for rule in order_rules(rules):
            field_map = flatten_field_map(rule.field_map)
            if field_map is None:
                logger.warning(f"Rule '{rule.id}' has no usable field map; skipping")
                continue
            self._apply_rule(rule, field_map, text, result)

        logger.debug(
            f"Matched {len(result.hits)} occurrences, "
            f"{len(result.record)} fields written"
        )
        return result

    def _apply_rule(
        self,
        rule: Rule,
        field_map: Dict[str, Any],
        text: str,
        result: ExtractionResult,
    ) -> None:
        pos = 0
        while True:
            match = find_next(rule.pattern, text, pos)
            if match is None:
                break

            start, end = match.span()
            captures = match.groupdict()
            span = Span(start=start, end=end)
            result.spans.append(span)
            result.hits.append(
                MatchHit(rule_id=rule.id, span=span, captures=captures, text=match.group(0))
            )
            logger.debug(f"[match] {rule.id} {captures}")

            for path, value in self.resolver.resolve_map(field_map, captures).items():
                result.record.set_if_absent(path, value)

            # Empty matches would otherwise loop forever at the same offset
            pos = end if end > start else end + 1
