"""HTTP server command."""

import logging

import click
import uvicorn

from spendlog.api.app import create_app

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR"]


@click.command("serve")
@click.option("--host", help="Interface to bind (overrides SPENDLOG_HOST)")
@click.option("--port", type=int, help="Port to listen on (overrides SPENDLOG_PORT)")
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="INFO",
    show_default=True,
    help="Logging level",
)
@click.pass_context
def serve(ctx, host: str | None, port: int | None, log_level: str):
    """Serve the records API over HTTP."""
    settings = ctx.obj["settings"].with_overrides(host=host, port=port)

    logging.basicConfig(
        level=log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    app = create_app(ctx.obj["db"], rate_service=ctx.obj["rate_service"])
    click.echo(f"API server running at http://{settings.host}:{settings.port} ({settings.store} store)")
    uvicorn.run(app, host=settings.host, port=settings.port, log_level=log_level.lower())


def register_commands(cli):
    """Register serve command with main CLI."""
    cli.add_command(serve)
