"""Record listing command."""

import click

from spendlog.cli.date_filters import resolve_cli_date_range
from spendlog.domain.expense import ExpenseService
from spendlog.domain.query import DEFAULT_PAGE_SIZE, build_expense_query
from spendlog.domain.rates import DEFAULT_BASE, convert_amount


@click.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'yesterday')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@click.option("--category", help="Exact category label")
@click.option("--type", "record_type", type=click.Choice(["expense", "income"]), help="Record type")
@click.option("--page", type=int, default=1, show_default=True, help="Page number")
@click.option(
    "--page-size", type=int, default=DEFAULT_PAGE_SIZE, show_default=True, help="Records per page (max 200)"
)
@click.option("--this-month", is_flag=True, help="Only records from this month")
@click.option("--last-month", is_flag=True, help="Only records from last month")
@click.option("--this-year", is_flag=True, help="Only records from this year")
@click.option(
    "--display-currency",
    help="Also show each amount converted into this currency (e.g. USD)",
)
@click.pass_context
def list_expenses(
    ctx,
    start_date: str | None,
    end_date: str | None,
    category: str | None,
    record_type: str | None,
    page: int,
    page_size: int,
    this_month: bool,
    last_month: bool,
    this_year: bool,
    display_currency: str | None,
):
    """List records, newest first."""
    service = ExpenseService(ctx.obj["db"])

    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "last-month": last_month,
            "this-year": this_year,
        },
    )

    query = build_expense_query(
        start=start,
        end=end,
        category=category,
        type=record_type,
        page=page,
        page_size=page_size,
    )
    result = service.list_page(query)

    if not result.records:
        click.echo("No records found.")
        return

    rates = None
    if display_currency:
        display_currency = display_currency.strip().upper()
        rates = ctx.obj["rate_service"].get_rates(DEFAULT_BASE)

    converted_header = f" | {display_currency:>12}" if rates is not None else ""
    click.echo(
        f"{'ID':>5} | {'Date':10} | {'Type':7} | {'Amount':>12} | {'Cur':3}{converted_header} | Category"
    )
    click.echo("-" * (70 + len(converted_header)))
    for record in result.records:
        amount = record.amount_text or f"{record.amount:,.2f}"
        converted = ""
        if rates is not None:
            value = convert_amount(record.amount, display_currency, rates, source=record.currency)
            shown = "-" if value is None else f"{value:,.2f}"
            converted = f" | {shown:>12}"
        click.echo(
            f"{record.id:5d} | {record.date.isoformat():10} | {record.type.value:7} | "
            f"{amount:>12} | {record.currency or '':3}{converted} | {record.category or ''}"
        )
        if record.notes:
            click.echo(f"{'':5}   {record.notes}")

    if result.total is not None:
        click.echo(
            f"\nPage {query.page}: showing {len(result.records)} of {result.total} record(s)"
        )


def register_commands(cli):
    """Register list command with main CLI."""
    cli.add_command(list_expenses)
