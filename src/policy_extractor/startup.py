"""Centralized initialization for the API and CLI entry points.

Loads ``.env`` from the project root (if present) and resolves where the
rule set and scoring configuration live:

    POLICY_EXTRACTOR_RULES    path to a rules YAML (default: packaged rules)
    POLICY_EXTRACTOR_CONFIG   path to a scoring config YAML (default: built-in)
"""

import logging
import os
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

RULES_ENV = "POLICY_EXTRACTOR_RULES"
CONFIG_ENV = "POLICY_EXTRACTOR_CONFIG"

_initialized: bool = False


def _find_project_root(start_path: Optional[Path] = None) -> Path:
    """Walk up from *start_path* to the directory holding pyproject.toml."""
    if start_path is None:
        start_path = Path(__file__).resolve().parent.parent.parent

    for parent in [start_path] + list(start_path.parents):
        if (parent / "pyproject.toml").exists():
            return parent
    return start_path


def ensure_initialized(force: bool = False) -> None:
    """Load ``.env`` once per process."""
    global _initialized
    if _initialized and not force:
        return

    env_path = _find_project_root() / ".env"
    if env_path.exists():
        load_dotenv(env_path)
        logger.debug(f"Loaded .env from {env_path}")
    _initialized = True


def get_rules_path() -> Optional[Path]:
    value = os.getenv(RULES_ENV, "").strip()
    return Path(value) if value else None


def get_config_path() -> Optional[Path]:
    value = os.getenv(CONFIG_ENV, "").strip()
    return Path(value) if value else None
