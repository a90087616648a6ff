"""Structured record built from rule matches.

Values are stored in a flat mapping keyed by dot path (``fee.amount``) and
exposed as a nested dict via ``to_dict()``.  All writes go through
``set_if_absent`` which enforces first-match-wins and the numeric coercion
of count-like fields.
"""

import logging
from typing import Any, Dict, Iterator, List, Mapping, Optional, Set, Union

from policy_extractor.extraction.normalizers import parse_decimal

logger = logging.getLogger(__name__)

Scalar = Union[int, float, str]

# Final path segments whose values are counts: string values are re-parsed
# as numbers when written.
NUMERIC_SUFFIXES = frozenset({
    "nights",
    "percent",
    "cutoff_days",
    "cutoff_hours",
    "relative_days",
    "relative_hours",
})


def normalize_path(path: str) -> str:
    """Trim segments and drop empty ones: ``" fee..amount "`` -> ``fee.amount``."""
    return ".".join(seg.strip() for seg in str(path).split(".") if seg.strip())


def is_present(value: Any) -> bool:
    """A value counts as present when it is neither None nor an empty string."""
    return value is not None and value != ""


class StructuredRecord:
    """Flat dot-path store with nested export and write-once leaves."""

    def __init__(self) -> None:
        self._values: Dict[str, Scalar] = {}
        self._malformed: Set[str] = set()

    # ── Reads ────────────────────────────────────────────────────────

    def get(self, path: str, default: Any = None) -> Any:
        return self._values.get(normalize_path(path), default)

    def has(self, path: str) -> bool:
        return is_present(self._values.get(normalize_path(path)))

    def paths(self) -> List[str]:
        return list(self._values)

    @property
    def malformed_paths(self) -> Set[str]:
        """Numeric-suffix paths that kept a non-numeric string value."""
        return set(self._malformed)

    def __len__(self) -> int:
        return len(self._values)

    def __iter__(self) -> Iterator[str]:
        return iter(self._values)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and self.has(path)

    def __repr__(self) -> str:
        return f"StructuredRecord({self._values!r})"

    # ── Writes ───────────────────────────────────────────────────────

    def _collides(self, path: str) -> bool:
        """True when *path* or any prefix/descendant of it already holds a value."""
        if is_present(self._values.get(path)):
            return True
        segments = path.split(".")
        for i in range(1, len(segments)):
            if ".".join(segments[:i]) in self._values:
                return True
        prefix = path + "."
        return any(existing.startswith(prefix) for existing in self._values)

    def set_if_absent(self, path: str, value: Any) -> bool:
        """Write *value* unless the leaf is already occupied.

        Returns True when the value was written.  Empty values are never
        written.  String values for numeric-suffix fields are converted to
        numbers; unparseable ones are kept as strings and flagged as
        malformed.
        """
        path = normalize_path(path)
        if not path or not is_present(value):
            return False
        if self._collides(path):
            logger.debug(f"Skipping write to '{path}': already occupied")
            return False

        if path.rsplit(".", 1)[-1] in NUMERIC_SUFFIXES and isinstance(value, str):
            number = parse_decimal(value)
            if number is None:
                logger.debug(f"Non-numeric value {value!r} kept for '{path}'")
                self._malformed.add(path)
            else:
                value = number

        self._values[path] = value
        return True

    # ── Conversion ───────────────────────────────────────────────────

    def to_dict(self) -> Dict[str, Any]:
        """Export as a nested mapping (``{"fee": {"amount": 12}}``)."""
        nested: Dict[str, Any] = {}
        for path, value in self._values.items():
            segments = path.split(".")
            node = nested
            for seg in segments[:-1]:
                node = node.setdefault(seg, {})
            node[segments[-1]] = value
        return nested

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "StructuredRecord":
        """Rebuild a record from a nested (or dot-keyed) mapping."""
        record = cls()

        def walk(node: Mapping[str, Any], base: str) -> None:
            for key, value in node.items():
                path = f"{base}.{key}" if base else str(key)
                if isinstance(value, Mapping):
                    walk(value, path)
                elif isinstance(value, (str, int, float)) and not isinstance(value, bool):
                    record.set_if_absent(path, value)

        if data:
            walk(data, "")
        return record

    @classmethod
    def coerce(cls, record: Union["StructuredRecord", Mapping[str, Any], None]) -> "StructuredRecord":
        """Accept either a record or a plain mapping."""
        if isinstance(record, StructuredRecord):
            return record
        return cls.from_dict(record)
