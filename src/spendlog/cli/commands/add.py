"""Add record command."""

import click

from spendlog.cli.amount_entry import commit_amount, echo_record
from spendlog.cli.error_handling import handle_domain_error
from spendlog.domain.errors import DomainError
from spendlog.domain.expense import ExpenseService
from spendlog.utils.date_parser import parse_date


@click.command("add")
@click.option(
    "--amount", required=True, help="Amount, e.g. 12.50, .5 or 12. (must be greater than zero)"
)
@click.option(
    "--date",
    "date_str",
    default="today",
    show_default=True,
    help="Record date (YYYY-MM-DD or relative like 'today', 'yesterday')",
)
@click.option("--category", help="Category label")
@click.option("--notes", help="Notes")
@click.option("--currency", help="Three-letter currency code (default: SPENDLOG_CURRENCY, else CNY)")
@click.option(
    "--type",
    "record_type",
    type=click.Choice(["expense", "income"]),
    default="expense",
    show_default=True,
    help="Record type",
)
@click.pass_context
def add_expense(
    ctx,
    amount: str,
    date_str: str,
    category: str | None,
    notes: str | None,
    currency: str | None,
    record_type: str,
):
    """Add a record.

    The amount is checked the way it is typed into a form: partial decimals
    are fine while typing, but the submitted value must be above zero.

    Examples:
        spendlog add --amount 12.50 --category food
        spendlog add --amount 3000 --type income --date 2024-05-01 --currency USD
    """
    service = ExpenseService(ctx.obj["db"])

    value = commit_amount(ctx, amount)

    try:
        record_date = parse_date(date_str)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)

    payload = {
        "amount": value,
        "amountText": amount,
        "date": record_date.isoformat(),
        "category": category,
        "notes": notes,
        "currency": currency or ctx.obj["settings"].currency,
        "type": record_type,
    }

    try:
        record = service.create(payload)
    except DomainError as e:
        handle_domain_error(ctx, e)

    echo_record("Created", record)


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_expense)
