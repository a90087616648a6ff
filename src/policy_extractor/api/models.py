"""Request/response models for the policy API."""

from typing import Optional

from pydantic import BaseModel, Field


class TranslateRequest(BaseModel):
    """Request body for ``POST /i18n/policy/translate``."""

    text: Optional[str] = Field(default="", description="Cancellation policy text")


class HealthResponse(BaseModel):
    status: str = "ok"
    rules_version: str
    rule_count: int
