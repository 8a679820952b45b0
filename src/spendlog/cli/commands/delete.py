"""Delete record command."""

import click

from spendlog.cli.error_handling import handle_domain_error
from spendlog.domain.errors import NotFoundError
from spendlog.domain.expense import ExpenseService


@click.command("delete")
@click.argument("expense_id", type=int, metavar="ID")
@click.pass_context
def delete_expense(ctx, expense_id: int):
    """Delete a record by ID."""
    service = ExpenseService(ctx.obj["db"])
    try:
        service.delete(expense_id)
    except NotFoundError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted record {expense_id}")


def register_commands(cli):
    """Register delete command with main CLI."""
    cli.add_command(delete_expense)
