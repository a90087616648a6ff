"""Pydantic model for the rules-only accept / fallback decision."""

from typing import List

from pydantic import BaseModel, Field


class DecisionResult(BaseModel):
    """Whether the rule-derived structure can be used without a fallback."""

    accept: bool = Field(description="True when rules alone are trustworthy enough")
    coverage: float = Field(description="Coverage over the filtered denominator")
    critical_signals: int = Field(description="Number of signal families present")
    signals_present: List[str] = Field(
        default_factory=list,
        description="Names of the signal families that were present",
    )
    min_coverage: float = Field(description="Coverage threshold applied")
    min_critical_signals: int = Field(description="Signal count threshold applied")
    reason: str = Field(default="", description="Human-readable explanation")
