"""Edit record command."""

import click

from spendlog.cli.amount_entry import commit_amount, echo_record
from spendlog.cli.error_handling import handle_domain_error
from spendlog.domain.errors import DomainError
from spendlog.domain.expense import ExpenseService
from spendlog.utils.date_parser import parse_date


@click.command("edit")
@click.argument("expense_id", type=int, metavar="ID")
@click.option("--amount", help="New amount (must be greater than zero)")
@click.option("--date", "date_str", help="New date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--category", help="New category label")
@click.option("--notes", help="New notes")
@click.option("--type", "record_type", type=click.Choice(["expense", "income"]), help="New record type")
@click.pass_context
def edit_expense(
    ctx,
    expense_id: int,
    amount: str | None,
    date_str: str | None,
    category: str | None,
    notes: str | None,
    record_type: str | None,
):
    """Edit a record.

    Options that are left out keep their stored values. The record keeps its
    currency. A new amount is checked the same way as in ``add``.

    Examples:
        spendlog edit 3 --amount 14.20
        spendlog edit 3 --category groceries --notes "weekly shop"
    """
    service = ExpenseService(ctx.obj["db"])

    try:
        record = service.get(expense_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    payload = {
        "amount": record.amount,
        "amountText": record.amount_text,
        "date": record.date.isoformat(),
        "category": record.category,
        "notes": record.notes,
        "currency": record.currency,
        "type": record.type.value,
    }

    if amount is not None:
        payload["amount"] = commit_amount(ctx, amount)
        payload["amountText"] = amount

    if date_str is not None:
        try:
            payload["date"] = parse_date(date_str).isoformat()
        except ValueError as e:
            click.echo(f"Error: Invalid date format: {e}", err=True)
            ctx.exit(1)

    if category is not None:
        payload["category"] = category
    if notes is not None:
        payload["notes"] = notes
    if record_type is not None:
        payload["type"] = record_type

    try:
        updated = service.update(expense_id, payload)
    except DomainError as e:
        handle_domain_error(ctx, e)

    echo_record("Updated", updated)


def register_commands(cli):
    """Register edit command with main CLI."""
    cli.add_command(edit_expense)
