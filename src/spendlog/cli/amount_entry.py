"""CLI helpers for amount entry."""

from decimal import Decimal

import click

from spendlog.cli.error_handling import handle_domain_error
from spendlog.domain.errors import DomainError
from spendlog.utils.amount_input import AmountInput


def commit_amount(ctx, text: str) -> Decimal:
    """Type amount text into a fresh guard and commit it.

    Exits with status 1 on the first refused keystroke or a rejected commit.
    """
    amount_input = AmountInput()
    if not amount_input.type_text(text):
        click.echo(f"Error: {amount_input.error} (got '{text}')", err=True)
        ctx.exit(1)

    try:
        return amount_input.commit()
    except DomainError as e:
        handle_domain_error(ctx, e)


def echo_record(verb: str, record) -> None:
    """Print a record summary after it was written."""
    click.echo(f"{verb} {record.type.value} {record.id}")
    click.echo(f"  Date: {record.date.isoformat()}")
    click.echo(f"  Amount: {record.amount_text or record.amount} {record.currency or ''}".rstrip())
    if record.category:
        click.echo(f"  Category: {record.category}")
    if record.notes:
        click.echo(f"  Notes: {record.notes}")
