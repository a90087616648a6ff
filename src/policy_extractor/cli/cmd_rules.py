"""Rules command: list the loaded rule set."""

import typer
from rich.markup import escape
from rich.table import Table

from policy_extractor.cli._app import app
from policy_extractor.cli._common import load_extractor, setup_logging
from policy_extractor.cli._console import console, output_json
from policy_extractor.extraction.match_engine import flatten_field_map


@app.command("rules", help="List the loaded rules in evaluation order.")
def rules_cmd(ctx: typer.Context):
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])
    extractor = load_extractor(ctx)
    rule_set = extractor.rules

    rows = []
    for rule in rule_set:
        field_map = flatten_field_map(rule.field_map)
        rows.append({
            "id": rule.id,
            "priority": rule.priority,
            "regex": rule.regex,
            "fields": sorted(field_map) if field_map is not None else None,
        })

    if output_json({"version": rule_set.version, "rules": rows}, ctx=ctx):
        return

    table = Table(title=f"Rules ({rule_set.version})", show_header=True)
    table.add_column("Priority", justify="right")
    table.add_column("Id")
    table.add_column("Fields")
    for row in rows:
        fields = ", ".join(row["fields"]) if row["fields"] is not None else "[red]disabled[/red]"
        table.add_row(str(row["priority"]), escape(row["id"]), fields)
    console.print(table)
