"""Text normalization and numeric well-formedness helpers.

All rule patterns are authored against the output of ``normalize``: a
single line of upper-case text with collapsed whitespace.  The decimal
helpers are shared by the expression resolver, the structured record's
numeric coercion and the confidence penalties so that all three agree on
what a "plain number" is.
"""

import math
import re
from typing import Any, Optional, Union

Number = Union[int, float]

_LINE_BREAKS = re.compile(r"\r\n?")
_WHITESPACE = re.compile(r"\s+")

# Optional sign, digits, optional fraction.  Thousands separators are only
# accepted when they actually group by three ("1,234", "12,345.50").
_PLAIN_DECIMAL = re.compile(r"^[+-]?\d+(?:\.\d+)?$")
_GROUPED_DECIMAL = re.compile(r"^[+-]?\d{1,3}(?:,\d{3})+(?:\.\d+)?$")


def normalize(text: Optional[str]) -> str:
    """Canonicalize policy text for pattern matching.

    Line endings are unified, whitespace runs (line breaks included)
    collapse to one space, the result is trimmed and upper-cased.

    >>> normalize("Free cancellation\\r\\n until  3 days ")
    'FREE CANCELLATION UNTIL 3 DAYS'
    """
    if not text:
        return ""
    text = _LINE_BREAKS.sub("\n", text)
    text = _WHITESPACE.sub(" ", text).strip()
    # Upper-casing can expand characters (e.g. "ß" -> "SS"); collapse again
    # so that normalize() stays idempotent.
    return _WHITESPACE.sub(" ", text.upper()).strip()


def strip_thousands(value: str) -> Optional[str]:
    """Remove well-grouped thousands separators, or None if malformed.

    Commas are not simply dropped: "12,3,4" is malformed and stays a
    string wherever it is captured, so a garbled fee amount keeps its
    original text and is penalized by the confidence scorer.
    """
    candidate = value.strip()
    if "," not in candidate:
        return candidate
    if _GROUPED_DECIMAL.match(candidate):
        return candidate.replace(",", "")
    return None


def is_plain_decimal(value: Any) -> bool:
    """Check that *value* is a string holding a well-formed decimal number."""
    if not isinstance(value, str):
        return False
    cleaned = strip_thousands(value)
    return cleaned is not None and bool(_PLAIN_DECIMAL.match(cleaned))


def parse_decimal(value: Any) -> Optional[Number]:
    """Parse a plain decimal string.

    Returns an ``int`` for integral values ("50", "1,200") and a ``float``
    when a fractional part is present ("12.50").  Numbers pass through
    unchanged; anything else returns None.  So do values that cannot be
    represented: floats that overflow to infinity and integers past the
    interpreter's int/str conversion limit.
    """
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return value
    if not is_plain_decimal(value):
        return None
    cleaned = strip_thousands(value)
    try:
        number = float(cleaned) if "." in cleaned else int(cleaned)
    except ValueError:
        return None
    if isinstance(number, float) and not math.isfinite(number):
        return None
    return number
