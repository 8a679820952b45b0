"""CLI error handling helpers."""

import click

from spendlog.domain.errors import DomainError, ValidationError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure.

    Validation errors print one line per violated field.
    """
    if isinstance(error, ValidationError):
        for message in error.errors:
            click.echo(f"Error: {message}", err=True)
    else:
        click.echo(f"Error: {error}", err=True)
    ctx.exit(1)
