"""Pydantic models for the rules confidence score."""

from enum import Enum
from typing import List

from pydantic import BaseModel, Field


class ConfidenceBand(str, Enum):
    """Qualitative band derived from the confidence score."""

    HIGH = "high"          # >= 0.80
    MODERATE = "moderate"  # >= 0.55
    LOW = "low"            # < 0.55


class ConfidenceResult(BaseModel):
    """Confidence in the rule-derived structure, with its components."""

    confidence: float = Field(ge=0.0, le=1.0, description="Final confidence 0-1")
    band: ConfidenceBand = Field(description="Qualitative band: high / moderate / low")
    field_score: float = Field(description="Weighted field-presence score 0-1")
    coverage: float = Field(description="Merged span coverage over the full text")
    coverage_score: float = Field(description="Coverage bucketed through the score table")
    critical_present: int = Field(description="Number of critical fields present")
    penalties: float = Field(default=0.0, description="Total penalty subtracted")
    penalty_reasons: List[str] = Field(
        default_factory=list,
        description="Why penalties were applied (e.g. 'bad_amount:fee.amount')",
    )
    capped: bool = Field(
        default=False,
        description="True when the low-signal cap lowered the confidence",
    )
