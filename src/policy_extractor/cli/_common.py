"""Shared CLI helpers: logging setup and extractor loading."""

import logging

import typer
from rich.logging import RichHandler

from policy_extractor.cli._console import console, print_err
from policy_extractor.config.scoring import ScoringConfigError
from policy_extractor.extraction.rule_loader import RuleLoadError
from policy_extractor.pipeline import PolicyExtractor
from policy_extractor.startup import ensure_initialized, get_config_path, get_rules_path

logger = logging.getLogger(__name__)


def setup_logging(*, verbose: bool = False, quiet: bool = False) -> None:
    """Configure logging with Rich handler."""
    if verbose:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = RichHandler(
        console=console,
        show_time=True,
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )

    root = logging.getLogger()
    root.handlers.clear()
    root.addHandler(handler)
    root.setLevel(level)

    for name in ("uvicorn.access", "httpx", "httpcore"):
        logging.getLogger(name).setLevel(logging.WARNING)


def load_extractor(ctx: typer.Context) -> PolicyExtractor:
    """Build the extractor from --rules/--config, falling back to the environment."""
    ensure_initialized()
    rules_path = ctx.obj.get("rules") or get_rules_path()
    config_path = ctx.obj.get("config") or get_config_path()
    try:
        return PolicyExtractor.from_paths(rules_path, config_path)
    except (RuleLoadError, ScoringConfigError) as e:
        print_err(str(e))
        raise SystemExit(1)
