"""Schema migration command."""

import click

from spendlog.database.migrations import pending_migrations
from spendlog.database.sqlalchemy_db import SQLAlchemyDatabase


@click.command("migrate")
@click.option("--status", is_flag=True, help="Show the schema version and pending migrations only")
@click.pass_context
def migrate_schema(ctx, status: bool):
    """Apply pending schema migrations.

    Migrations only add tables or nullable columns and are safe to run
    repeatedly.
    """
    db = ctx.obj["db"]
    if not isinstance(db, SQLAlchemyDatabase):
        click.echo("In-memory store has no schema to migrate.")
        return

    if status:
        pending = pending_migrations(db.engine)
        click.echo(f"Schema version: {db.schema_version()}")
        if not pending:
            click.echo("No pending migrations.")
        for migration in pending:
            click.echo(f"  pending {migration.version}: {migration.description}")
        return

    before = db.schema_version()
    db.initialize_schema()
    after = db.schema_version()
    if after == before:
        click.echo(f"Schema already up to date (version {after})")
    else:
        click.echo(f"Migrated schema from version {before} to {after}")


def register_commands(cli):
    """Register migrate command with main CLI."""
    cli.add_command(migrate_schema)
