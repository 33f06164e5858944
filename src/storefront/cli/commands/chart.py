"""Chart of accounts commands."""

from pathlib import Path

import click
from storefront.domain.chart import ChartOfAccountsService, ChartSection
from storefront.domain.printing import render_chart_html
from storefront.utils.amount_parser import format_currency


def _echo_chart(sections: list[ChartSection], expand: bool) -> None:
    for section in sections:
        click.echo(f"\n{section.account_type.label}")
        click.echo("=" * 60)
        for line in section.categories:
            click.echo(f"  {line.code}  {line.category.name:36s} {format_currency(line.total):>14s}")
            if not expand:
                continue
            for acc_line in line.accounts:
                inactive = " (inactive)" if not acc_line.account.is_active else ""
                click.echo(
                    f"      {acc_line.code}  {acc_line.account.name:32s} "
                    f"{format_currency(acc_line.balance):>14s}{inactive}"
                )
        click.echo("-" * 60)
        click.echo(f"  Total {section.account_type.label:38s} {format_currency(section.total):>14s}")


@click.group()
def chart_group():
    """View the chart of accounts."""
    pass


@chart_group.command("show")
@click.option("--expand", is_flag=True, help="Show the accounts under each category")
@click.option("--active-only", is_flag=True, help="Hide inactive accounts")
@click.option("--html", "html_path", type=click.Path(dir_okay=False), help="Write a printable HTML page")
@click.pass_context
def show_chart(ctx, expand: bool, active_only: bool, html_path: str | None):
    """Show categories and accounts grouped by account type."""
    sections = ChartOfAccountsService(ctx.obj["db"]).build_chart(include_inactive=not active_only)
    if not sections:
        click.echo("Chart of accounts is empty. Run 'init-chart' to create the default chart.")
        return

    _echo_chart(sections, expand)

    if html_path:
        Path(html_path).write_text(render_chart_html(sections), encoding="utf-8")
        click.echo(f"\nWrote {html_path}")


@click.command("init-chart")
@click.pass_context
def init_chart(ctx):
    """Create the default chart of accounts.

    Existing categories and accounts with the same names are kept.
    """
    created_categories, created_accounts = ChartOfAccountsService(ctx.obj["db"]).seed_default_chart()

    if created_categories == 0 and created_accounts == 0:
        click.echo("Default chart of accounts already exists.")
        return
    click.echo(f"Created {created_categories} categories and {created_accounts} accounts.")


def register_commands(cli):
    """Register chart commands with main CLI."""
    cli.add_command(chart_group, name="chart")
    cli.add_command(init_chart)
