"""Field-map expression resolver.

Each entry of a rule's field map is a small expression evaluated against
the named captures of one match occurrence::

    "$days"                   capture value ("3" -> 3)
    "$days or ceil($hours/24)" first term that resolves wins
    "percentage"              literal string
    "ceil($hours/24)"         integer ceiling of a division

Resolution never raises: a term that references a missing capture, divides
by zero, overflows or ends up empty is abandoned and the next ``or`` term
is tried.
"""

import logging
import re
from decimal import ROUND_CEILING, Decimal, localcontext
from typing import Any, Mapping, Optional, Union

from policy_extractor.extraction.normalizers import is_plain_decimal, parse_decimal, strip_thousands

logger = logging.getLogger(__name__)

Resolved = Union[int, float, str]

_OR_SEPARATOR = re.compile(r"\s+or\s+", re.IGNORECASE)
_VARIABLE = re.compile(r"\$([A-Za-z_]\w*)")
_CEIL = re.compile(r"^ceil\(\s*([^()]+?)\s*\)$", re.IGNORECASE)


class _MissingCapture(Exception):
    """Internal signal: a referenced capture is absent or empty."""


def _substitute(term: str, captures: Mapping[str, Optional[str]]) -> str:
    def replace(match: re.Match) -> str:
        value = captures.get(match.group(1))
        if value is None or value == "":
            raise _MissingCapture(match.group(1))
        return str(value)

    return _VARIABLE.sub(replace, term)


def _to_decimal(text: str) -> Optional[Decimal]:
    if not is_plain_decimal(text):
        return None
    return Decimal(strip_thousands(text))


def _evaluate_ceil(inner: str) -> Optional[int]:
    """Evaluate the argument of ``ceil(...)``: ``X`` or ``X/Y``.

    Arithmetic is done in ``Decimal`` with enough precision for the
    operands, so arbitrarily long captures stay exact instead of
    overflowing a float.
    """
    parts = inner.split("/")
    if len(parts) not in (1, 2):
        return None
    operands = [_to_decimal(part.strip()) for part in parts]
    if any(operand is None for operand in operands):
        return None
    if len(operands) == 2 and operands[1] == 0:
        return None

    try:
        with localcontext() as ctx:
            ctx.prec = max(28, 2 * len(inner) + 10)
            value = operands[0] if len(operands) == 1 else operands[0] / operands[1]
            ceiling = value.to_integral_value(rounding=ROUND_CEILING)
    except ArithmeticError:
        logger.debug(f"ceil({inner}) abandoned: out of range")
        return None
    return parse_decimal(format(ceiling, "f"))


def evaluate_term(term: str, captures: Mapping[str, Optional[str]]) -> Optional[Resolved]:
    """Evaluate a single ``or``-free term, or None when it does not resolve."""
    try:
        substituted = _substitute(term, captures).strip()
    except _MissingCapture as missing:
        logger.debug(f"Term {term!r} abandoned: capture '{missing}' missing")
        return None

    if not substituted:
        return None

    ceil_match = _CEIL.match(substituted)
    if ceil_match:
        return _evaluate_ceil(ceil_match.group(1))

    number = parse_decimal(substituted)
    if number is not None:
        return number
    return substituted


def resolve_expression(
    expression: Any,
    captures: Mapping[str, Optional[str]],
) -> Optional[Resolved]:
    """Resolve a field-map expression against one occurrence's captures.

    Args:
        expression: Expression template from the rule's field map.  Plain
            numbers are returned as-is; anything that is not a string or a
            number is treated as unresolvable.
        captures: Named capture groups of the occurrence (values may be None
            for groups that did not participate in the match).

    Returns:
        The first non-empty term value (int, float or str), or None.
    """
    if isinstance(expression, bool) or expression is None:
        return None
    if isinstance(expression, (int, float)):
        return expression
    if not isinstance(expression, str):
        return None

    for term in _OR_SEPARATOR.split(expression.strip()):
        value = evaluate_term(term.strip(), captures)
        if value is not None and value != "":
            return value
    return None


class ExpressionResolver:
    """Resolves every entry of a field map for one match occurrence."""

    def resolve(
        self,
        expression: Any,
        captures: Mapping[str, Optional[str]],
    ) -> Optional[Resolved]:
        return resolve_expression(expression, captures)

    def resolve_map(
        self,
        field_map: Mapping[str, Any],
        captures: Mapping[str, Optional[str]],
    ) -> dict:
        """Resolve a flat ``path -> expression`` map, dropping unresolved paths."""
        resolved = {}
        for path, expression in field_map.items():
            value = resolve_expression(expression, captures)
            if value is not None:
                resolved[path] = value
        return resolved
