"""Rich console singleton and output helpers."""

import typer
from rich.console import Console
from rich.markup import escape

# Status/progress to stderr so it doesn't pollute piped JSON output
console = Console(stderr=True)

# Data output to stdout (pipeable to jq)
stdout_console = Console()


def print_ok(msg: str) -> None:
    """Print a success message to stderr."""
    console.print(f"[green]✓[/green] {escape(msg)}")


def print_err(msg: str) -> None:
    """Print an error message to stderr."""
    console.print(f"[red]✗[/red] {escape(msg)}")


def print_warn(msg: str) -> None:
    """Print a warning message to stderr."""
    console.print(f"[yellow]![/yellow] {escape(msg)}")


def output_json(data: dict, *, ctx: typer.Context) -> bool:
    """Print *data* as JSON to stdout when --json is active.

    Returns True when the data was printed.
    """
    if ctx.obj.get("json"):
        stdout_console.print_json(data=data)
        return True
    return False
