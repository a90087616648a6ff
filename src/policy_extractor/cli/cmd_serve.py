"""Serve command: run the HTTP API with uvicorn."""

import typer

from policy_extractor.cli._app import app
from policy_extractor.cli._common import setup_logging


@app.command("serve", help="Serve the policy API over HTTP.")
def serve_cmd(
    ctx: typer.Context,
    host: str = typer.Option("127.0.0.1", "--host", help="Bind address"),
    port: int = typer.Option(3000, "--port", help="Bind port"),
):
    setup_logging(verbose=ctx.obj["verbose"], quiet=ctx.obj["quiet"])

    import os

    import uvicorn

    from policy_extractor.startup import CONFIG_ENV, RULES_ENV

    # The API loads its extractor from the environment
    if ctx.obj.get("rules"):
        os.environ[RULES_ENV] = str(ctx.obj["rules"])
    if ctx.obj.get("config"):
        os.environ[CONFIG_ENV] = str(ctx.obj["config"])

    uvicorn.run("policy_extractor.api.main:app", host=host, port=port, log_config=None)
