"""Main CLI entry point."""

import click

from spendlog.config import STORES, Settings
from spendlog.database.factories import create_database
from spendlog.domain.rates import RateService

# Import and register all commands at module level
from spendlog.cli.commands import add, delete, edit, list_cmd, migrate, serve

# Commands that manage the schema themselves
SCHEMA_COMMANDS = {"migrate"}


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help="Path to database file (overrides SPENDLOG_DB_PATH environment variable)",
    envvar="SPENDLOG_DB_PATH",
)
@click.option(
    "--store",
    type=click.Choice(STORES),
    help="Record store implementation (overrides SPENDLOG_STORE environment variable)",
    envvar="SPENDLOG_STORE",
)
@click.pass_context
def cli(ctx, db_path: str | None, store: str | None):
    """Spendlog - personal expense tracking.

    Record expenses and income, list them by date range, category and type,
    or serve the same records over HTTP.
    """
    ctx.ensure_object(dict)

    # Initialize database connection only when actually running a command
    # (not when showing help)
    if ctx.invoked_subcommand is None:
        return

    try:
        settings = Settings.from_env().with_overrides(database_path=db_path, store=store)
    except ValueError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    db = create_database(settings)
    db.connect()
    if ctx.invoked_subcommand not in SCHEMA_COMMANDS:
        db.initialize_schema()
    ctx.call_on_close(db.disconnect)

    ctx.obj["settings"] = settings
    ctx.obj["db"] = db
    # A rate service already placed in ctx.obj by the caller is kept
    ctx.obj.setdefault(
        "rate_service", RateService(url=settings.rates_url, timeout=settings.rates_timeout)
    )


# Register all commands
add.register_commands(cli)
edit.register_commands(cli)
list_cmd.register_commands(cli)
delete.register_commands(cli)
migrate.register_commands(cli)
serve.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
