"""CLI package: Typer-based command-line interface.

Usage:
    python -m policy_extractor.cli --help
    python -m policy_extractor.cli extract "Free cancellation until 3 days before arrival."
"""

from policy_extractor.cli._app import app

# Register command modules (side-effect imports)
import policy_extractor.cli.cmd_extract  # noqa: F401
import policy_extractor.cli.cmd_rules  # noqa: F401
import policy_extractor.cli.cmd_serve  # noqa: F401

__all__ = ["app"]
