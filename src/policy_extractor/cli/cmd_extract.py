"""Extract command: analyze one policy text."""

from pathlib import Path
from typing import Optional

import typer
from rich.markup import escape
from rich.table import Table

from policy_extractor.cli._app import app
from policy_extractor.cli._common import load_extractor, setup_logging
from policy_extractor.cli._console import console, output_json, print_err, print_ok, print_warn


@app.command("extract", help="Extract a structured policy from text or a file.")
def extract_cmd(
    ctx: typer.Context,
    text: Optional[str] = typer.Argument(None, help="Policy text (use --file for a file)"),
    file: Optional[Path] = typer.Option(None, "--file", "-f", help="Read policy text from a file"),
):
    """Run extraction, scoring and rendering on one policy."""
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    if text is None and file is None:
        print_err("Either TEXT or --file is required")
        raise SystemExit(1)
    if text is not None and file is not None:
        print_err("Cannot use both TEXT and --file")
        raise SystemExit(1)
    if file is not None:
        try:
            text = file.read_text(encoding="utf-8")
        except OSError as e:
            print_err(f"Cannot read {file}: {e}")
            raise SystemExit(1)

    extractor = load_extractor(ctx)
    analysis = extractor.analyze(text)

    if output_json(analysis.model_dump(mode="json"), ctx=ctx):
        return
    if ctx.obj["quiet"]:
        return

    console.print(f"\n[bold]Normalized:[/bold] {escape(analysis.normalized)}")

    table = Table(title="Structured policy", show_header=True)
    table.add_column("Field")
    table.add_column("Value")
    _add_rows(table, analysis.structured)
    console.print(table)

    conf = analysis.confidence
    console.print(
        f"  Confidence: {conf.confidence:.2f} ({conf.band.value}) "
        f"field={conf.field_score:.2f} coverage={conf.coverage:.2f} "
        f"critical={conf.critical_present}"
    )
    if conf.penalty_reasons:
        console.print(f"  Penalties: {escape(', '.join(conf.penalty_reasons))}")

    decision = analysis.decision
    if decision.accept:
        print_ok(f"Rules accepted: {decision.reason}")
    else:
        print_warn(decision.reason)

    if analysis.rendered.en:
        console.print(f"  EN: {escape(analysis.rendered.en)}")
        console.print(f"  CN: {escape(analysis.rendered.cn)}")


def _add_rows(table: Table, node: dict, base: str = "") -> None:
    for key, value in node.items():
        path = f"{base}.{key}" if base else key
        if isinstance(value, dict):
            _add_rows(table, value, path)
        else:
            table.add_row(path, escape(str(value)))
