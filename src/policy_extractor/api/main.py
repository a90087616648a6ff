"""
FastAPI wrapper around the policy extractor.

Endpoints:
- POST /i18n/policy/translate  analyze one policy text
- GET  /health                 rule set status
"""

import logging

from fastapi import Depends, FastAPI

from policy_extractor import __version__
from policy_extractor.api.dependencies import get_extractor
from policy_extractor.api.models import HealthResponse, TranslateRequest
from policy_extractor.pipeline import PolicyExtractor
from policy_extractor.schemas.analysis import PolicyAnalysis

logger = logging.getLogger(__name__)

app = FastAPI(
    title="Policy Extractor",
    description="Rule-based extraction of hotel cancellation policies",
    version=__version__,
)


@app.post("/i18n/policy/translate", response_model=PolicyAnalysis)
def translate_policy(
    request: TranslateRequest,
    extractor: PolicyExtractor = Depends(get_extractor),
) -> PolicyAnalysis:
    """Extract, score and render one cancellation policy."""
    return extractor.analyze(request.text)


@app.get("/health", response_model=HealthResponse)
def health(extractor: PolicyExtractor = Depends(get_extractor)) -> HealthResponse:
    return HealthResponse(
        rules_version=extractor.rules.version,
        rule_count=len(extractor.rules),
    )
