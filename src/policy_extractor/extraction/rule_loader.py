"""Load cancellation-policy rules from YAML.

Rule document format::

    version: v1
    rules:
      - id: cutoff_days
        priority: 80
        regex: "FREE CANCELLATION UNTIL (?<days>\\d+) DAYS? BEFORE ARRIVAL"
        map:
          window.type: relative_to_arrival
          window.cutoff_days: "$days"

Named groups may use either the Python ``(?P<name>...)`` or the
JavaScript ``(?<name>...)`` spelling.  Field maps are not validated here:
a rule with a missing or malformed map loads fine and is disabled by the
match engine.
"""

import logging
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

import yaml

from policy_extractor.extraction.match_engine import order_rules
from policy_extractor.schemas.extraction import Rule

logger = logging.getLogger(__name__)

# Packaged default rule set
RULES_DIR = Path(__file__).parent / "rules"
DEFAULT_RULES_PATH = RULES_DIR / "patterns.yaml"

# "(?<name>" but not the lookbehinds "(?<=" / "(?<!"
_JS_NAMED_GROUP = re.compile(r"\(\?<(?![=!])")


class RuleLoadError(Exception):
    """Raised when a rule document cannot be loaded or is invalid."""
    pass


@dataclass(frozen=True)
class RuleSet:
    """An immutable, priority-ordered collection of rules."""

    version: str
    rules: List[Rule] = field(default_factory=list)

    def __len__(self) -> int:
        return len(self.rules)

    def __iter__(self):
        return iter(self.rules)

    def get(self, rule_id: str) -> Optional[Rule]:
        for rule in self.rules:
            if rule.id == rule_id:
                return rule
        return None


def compile_pattern(regex: str, rule_id: str = "") -> re.Pattern:
    """Compile a rule regex (case-insensitive), accepting JS-style named groups."""
    source = _JS_NAMED_GROUP.sub("(?P<", regex)
    try:
        return re.compile(source, re.IGNORECASE)
    except re.error as e:
        raise RuleLoadError(f"Invalid regex in rule '{rule_id}': {e}")


def build_rule(entry: Dict[str, Any], index: int = 0) -> Rule:
    """Build a single Rule from its YAML mapping."""
    if not isinstance(entry, dict):
        raise RuleLoadError(f"Rule #{index} must be a mapping, got {type(entry).__name__}")

    rule_id = entry.get("id")
    if not isinstance(rule_id, str) or not rule_id.strip():
        raise RuleLoadError(f"Rule #{index} is missing a string 'id'")

    priority = entry.get("priority", 0)
    if isinstance(priority, bool) or not isinstance(priority, int):
        raise RuleLoadError(f"Rule '{rule_id}' priority must be an integer, got {priority!r}")

    regex = entry.get("regex", entry.get("pattern"))
    if not isinstance(regex, str) or not regex:
        raise RuleLoadError(f"Rule '{rule_id}' is missing a 'regex'")

    pattern = compile_pattern(regex, rule_id)
    field_map = entry.get("map", entry.get("field_map"))
    if not isinstance(field_map, dict):
        logger.warning(f"Rule '{rule_id}' has no field map; it will be disabled")

    return Rule(id=rule_id.strip(), priority=priority, pattern=pattern, field_map=field_map)


def parse_rules(document: Any) -> RuleSet:
    """Validate a parsed rule document and build a priority-ordered RuleSet."""
    if not isinstance(document, dict):
        raise RuleLoadError("Rule document must be a mapping with a 'rules' key")

    entries = document.get("rules")
    if not isinstance(entries, list):
        raise RuleLoadError("Rule document 'rules' must be a list")

    rules: List[Rule] = []
    seen = set()
    for i, entry in enumerate(entries):
        rule = build_rule(entry, i)
        if rule.id in seen:
            raise RuleLoadError(f"Duplicate rule id '{rule.id}'")
        seen.add(rule.id)
        rules.append(rule)

    version = str(document.get("version", "v1"))
    return RuleSet(version=version, rules=order_rules(rules))


def load_rules(path: Optional[str | Path] = None) -> RuleSet:
    """Load rules from a YAML file (defaults to the packaged rule set).

    Raises:
        RuleLoadError: If the file is missing, unparseable or invalid.
    """
    rules_path = Path(path) if path else DEFAULT_RULES_PATH
    try:
        with open(rules_path, "r", encoding="utf-8") as f:
            document = yaml.safe_load(f)
    except FileNotFoundError:
        raise RuleLoadError(f"Rules file not found: {rules_path}")
    except yaml.YAMLError as e:
        raise RuleLoadError(f"Invalid YAML in rules file {rules_path}: {e}")

    rule_set = parse_rules(document)
    logger.info(f"Loaded {len(rule_set)} rules ({rule_set.version}) from {rules_path}")
    return rule_set
