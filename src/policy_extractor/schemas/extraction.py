"""Models for rule-based extraction.

``Rule`` is loaded once per process and never mutated.  ``Span`` and
``MatchHit`` are created per match occurrence and returned to callers as
diagnostics.
"""

import re
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, model_validator

from policy_extractor.extraction.record import StructuredRecord


@dataclass(frozen=True)
class Rule:
    """A prioritized pattern-to-field-map definition.

    Attributes:
        id: Stable rule identifier (unique within a rule set).
        priority: Higher priorities are evaluated first.
        pattern: Compiled regex with named capture groups.
        field_map: ``path -> expression`` mapping (flat or nested).  Left
            untyped because a missing or malformed map disables the rule
            rather than failing the load.
    """

    id: str
    priority: int
    pattern: re.Pattern
    field_map: Any = None

    @property
    def regex(self) -> str:
        return self.pattern.pattern


class Span(BaseModel):
    """Half-open interval ``[start, end)`` over the normalized text."""

    model_config = ConfigDict(frozen=True)

    start: int = Field(ge=0, description="Inclusive start offset")
    end: int = Field(ge=0, description="Exclusive end offset")

    @model_validator(mode="after")
    def _check_order(self) -> "Span":
        if self.start > self.end:
            raise ValueError(f"Span start {self.start} is after end {self.end}")
        return self

    @property
    def length(self) -> int:
        return self.end - self.start

    def as_tuple(self) -> Tuple[int, int]:
        return (self.start, self.end)


class MatchHit(BaseModel):
    """One located occurrence of a rule's pattern."""

    model_config = ConfigDict(frozen=True)

    rule_id: str = Field(description="Identifier of the rule that matched")
    span: Span = Field(description="Where the occurrence sits in the normalized text")
    captures: Dict[str, Optional[str]] = Field(
        default_factory=dict,
        description="Named capture groups (None for groups that did not participate)",
    )
    text: str = Field(default="", description="The matched substring")


@dataclass
class ExtractionResult:
    """Output of ``MatchEngine.apply``."""

    record: StructuredRecord = field(default_factory=StructuredRecord)
    spans: List[Span] = field(default_factory=list)
    hits: List[MatchHit] = field(default_factory=list)

    @property
    def structured(self) -> Dict[str, Any]:
        return self.record.to_dict()
