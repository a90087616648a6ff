"""FastAPI dependencies for the policy API.

The extractor (rules + scoring config) is built once per process on first
use and shared read-only by all requests.
"""

import logging
import threading
from typing import Optional

from policy_extractor.pipeline import PolicyExtractor
from policy_extractor.startup import ensure_initialized, get_config_path, get_rules_path

logger = logging.getLogger(__name__)

_extractor: Optional[PolicyExtractor] = None
_lock = threading.Lock()


def get_extractor() -> PolicyExtractor:
    """Get the process-wide PolicyExtractor, loading it on first call."""
    global _extractor
    if _extractor is None:
        with _lock:
            if _extractor is None:
                ensure_initialized()
                _extractor = PolicyExtractor.from_paths(get_rules_path(), get_config_path())
                logger.info(f"Policy extractor ready ({len(_extractor.rules)} rules)")
    return _extractor


def set_extractor(extractor: Optional[PolicyExtractor]) -> None:
    """Replace (or reset with None) the shared extractor."""
    global _extractor
    with _lock:
        _extractor = extractor
