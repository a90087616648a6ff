"""
Policy Extractor - rule-based extraction of hotel cancellation policies.

Turns free-form cancellation text into a structured record (deadlines,
fees, windows) using an ordered set of regex rules, then scores how far
the rule-derived structure can be trusted.
"""

__version__ = "0.1.0"

from policy_extractor.extraction.normalizers import normalize
from policy_extractor.pipeline import PolicyExtractor

__all__ = [
    "PolicyExtractor",
    "normalize",
]
