"""
Pytest fixtures and configuration for policy extractor tests.
Provides common test utilities and shared fixtures.
"""

import pytest

from policy_extractor.config.scoring import ScoringConfig
from policy_extractor.extraction.rule_loader import load_rules
from policy_extractor.pipeline import PolicyExtractor


@pytest.fixture(scope="session")
def default_rules():
    """The packaged default rule set."""
    return load_rules()


@pytest.fixture
def extractor(default_rules):
    """A PolicyExtractor with packaged rules and default scoring."""
    return PolicyExtractor(default_rules, ScoringConfig())


@pytest.fixture
def rules_yaml(tmp_path):
    """Write a small rules file and return its path."""
    path = tmp_path / "rules.yaml"
    path.write_text(
        "version: test-1\n"
        "rules:\n"
        "  - id: cutoff\n"
        "    priority: 10\n"
        "    regex: 'UNTIL (?<days>\\d+) DAYS'\n"
        "    map:\n"
        "      window.cutoff_days: '$days'\n"
        "  - id: percent\n"
        "    priority: 5\n"
        "    regex: '(?P<pct>\\d+)%'\n"
        "    map:\n"
        "      fee:\n"
        "        percent: '$pct'\n",
        encoding="utf-8",
    )
    return path
