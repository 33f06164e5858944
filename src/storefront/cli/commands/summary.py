"""Summary command."""

import click
from storefront.cli.date_filters import period_options, resolve_cli_date_range
from storefront.cli.resolution import resolve_account_or_exit
from storefront.domain.account import AccountService
from storefront.domain.summary import SummaryService
from storefront.utils.amount_parser import format_currency


def _echo_section(title: str, lines, total: int) -> None:
    click.echo(f"\n{title}")
    for line in lines:
        click.echo(f"    {line.category:<46} {format_currency(line.amount):>20}")
    click.echo(f"{'Total ' + title.lower():<50} {format_currency(total):>20}")


@click.command("summary")
@click.option("--account", help="Only money booked to this account")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today')")
@period_options
@click.pass_context
def summary(
    ctx,
    account: str | None,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
):
    """Show income, expenses and net profit by category."""
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(
        ctx,
        start_date=start_date,
        end_date=end_date,
        period_flags={
            "this-month": this_month,
            "this-year": this_year,
            "last-month": last_month,
            "last-year": last_year,
        },
    )
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None

    report = SummaryService(db).build_summary(start_date=start, end_date=end, account_id=account_id)
    if not report.income and not report.expenses:
        click.echo("No income or expenses found.")
        return

    _echo_section("Income", report.income, report.total_income)
    _echo_section("Expenses", report.expenses, report.total_expenses)

    click.echo("-" * 71)
    click.echo(f"{'Net profit':<50} {format_currency(report.net_profit):>20}")
    click.echo(f"{'Profit margin':<50} {str(report.profit_margin) + '%':>20}")


def register_commands(cli):
    """Register summary command with main CLI."""
    cli.add_command(summary)
