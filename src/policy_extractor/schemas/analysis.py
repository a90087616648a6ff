"""Response models for a full policy analysis (API and CLI output)."""

from typing import Any, Dict, List

from pydantic import BaseModel, Field

from policy_extractor.schemas.confidence import ConfidenceResult
from policy_extractor.schemas.decision import DecisionResult
from policy_extractor.schemas.extraction import MatchHit, Span


class RenderedPolicy(BaseModel):
    """Human-readable policy summary."""

    en: str = Field(default="", description="English rendering")
    cn: str = Field(default="", description="Simplified Chinese rendering")


class AnalysisMeta(BaseModel):
    rules_version: str = Field(description="Version of the rule set used")
    matches: int = Field(description="Number of match occurrences")


class PolicyAnalysis(BaseModel):
    """Everything produced for one input text."""

    schema_version: str = Field(default="policy_analysis_v1")
    original: str = Field(description="Input text as received")
    normalized: str = Field(description="Normalized text the rules ran against")
    structured: Dict[str, Any] = Field(
        default_factory=dict,
        description="Nested structured record",
    )
    spans: List[Span] = Field(default_factory=list)
    hits: List[MatchHit] = Field(default_factory=list)
    confidence: ConfidenceResult
    decision: DecisionResult
    rendered: RenderedPolicy = Field(default_factory=RenderedPolicy)
    meta: AnalysisMeta
