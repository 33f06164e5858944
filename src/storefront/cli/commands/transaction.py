"""Income, expense and transfer commands."""

import click
from storefront.cli.date_filters import period_options, resolve_cli_date_range
from storefront.cli.error_handling import handle_domain_error
from storefront.cli.resolution import resolve_account_or_exit
from storefront.domain.account import AccountService
from storefront.domain.entities import TransactionType
from storefront.domain.transaction import TransactionService
from storefront.utils.amount_parser import format_currency
from storefront.utils.date_parser import parse_date

TYPE_CHOICES = [t.value for t in TransactionType]


def _parse_date_or_exit(ctx: click.Context, value: str | None):
    if not value:
        return None
    try:
        return parse_date(value)
    except ValueError as e:
        click.echo(f"Error: Invalid date format: {e}", err=True)
        ctx.exit(1)


def _account_names(db) -> dict[int, str]:
    return {a.id: a.name for a in AccountService(db).list_accounts()}


@click.group()
def transaction_group():
    """Record income and expenses outside of invoices and bills."""
    pass


@transaction_group.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--type", "txn_type", type=click.Choice(TYPE_CHOICES), required=True, help="income or expense")
@click.option("--amount", required=True, help="Amount (e.g., 49.90)")
@click.option("--category", required=True, help="Category, e.g. 'Rent' or 'Shipping'")
@click.option("--date", "txn_date", help="Date (YYYY-MM-DD or 'today', defaults to today)")
@click.option("--description", help="Description")
@click.option("--reference", help="Reference number")
@click.option("--notes", help="Notes")
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    txn_type: str,
    amount: str,
    category: str,
    txn_date: str | None,
    description: str | None,
    reference: str | None,
    notes: str | None,
):
    """Record a single income or expense."""
    db = ctx.obj["db"]
    account_id = resolve_account_or_exit(ctx, AccountService(db), account)
    parsed_date = _parse_date_or_exit(ctx, txn_date)

    try:
        transaction_id = TransactionService(db).create_transaction(
            account_id=account_id,
            transaction_type=txn_type,
            amount=amount,
            category=category,
            txn_date=parsed_date,
            description=description,
            reference=reference,
            notes=notes,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    txn = TransactionService(db).get_transaction(transaction_id)
    click.echo(f"Added {txn.type.value} of {format_currency(txn.amount)} (ID: {transaction_id})")


@transaction_group.command("list")
@click.option("--account", help="Only transactions on this account")
@click.option("--type", "txn_type", type=click.Choice(TYPE_CHOICES), help="Only income or only expenses")
@click.option("--category", help="Only this category")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@period_options
@click.pass_context
def list_transactions(
    ctx,
    account: str | None,
    txn_type: str | None,
    category: str | None,
    start_date: str | None,
    end_date: str | None,
    this_month: bool,
    this_year: bool,
    last_month: bool,
    last_year: bool,
):
    """List transactions, newest first."""
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

    transactions = TransactionService(db).list_transactions(
        start_date=start,
        end_date=end,
        account_id=account_id,
        transaction_type=txn_type,
        category=category,
    )
    if not transactions:
        click.echo("No transactions found.")
        return

    names = _account_names(db)
    click.echo("\nTransactions:")
    click.echo("-" * 90)
    for txn in transactions:
        amount = txn.amount if txn.type == TransactionType.INCOME else -txn.amount
        click.echo(
            f"ID: {txn.id:3d} | {txn.date} | {names.get(txn.account_id, '?'):15.15s} | "
            f"{txn.category:15.15s} | {format_currency(amount):>12s} | {txn.description or ''}"
        )


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool):
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])
    if service.get_transaction(transaction_id) is None:
        click.echo(f"Error: Transaction {transaction_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transaction {transaction_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transaction(transaction_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transaction {transaction_id}")


@click.group()
def transfer_group():
    """Move money between accounts."""
    pass


@transfer_group.command("add")
@click.option("--from", "from_account", required=True, help="Account the money leaves")
@click.option("--to", "to_account", required=True, help="Account the money goes to")
@click.option("--amount", required=True, help="Amount (e.g., 250.00)")
@click.option("--date", "transfer_date", help="Date (YYYY-MM-DD or 'today', defaults to today)")
@click.option("--description", help="Description")
@click.option("--reference", help="Reference number")
@click.pass_context
def add_transfer(
    ctx,
    from_account: str,
    to_account: str,
    amount: str,
    transfer_date: str | None,
    description: str | None,
    reference: str | None,
):
    """Transfer money from one account to another."""
    db = ctx.obj["db"]
    account_service = AccountService(db)
    from_id = resolve_account_or_exit(ctx, account_service, from_account)
    to_id = resolve_account_or_exit(ctx, account_service, to_account)
    parsed_date = _parse_date_or_exit(ctx, transfer_date)

    service = TransactionService(db)
    try:
        transfer_id = service.create_transfer(
            from_account_id=from_id,
            to_account_id=to_id,
            amount=amount,
            transfer_date=parsed_date,
            description=description,
            reference=reference,
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    transfer = service.get_transfer(transfer_id)
    click.echo(
        f"Transferred {format_currency(transfer.amount)} from {from_account} to {to_account} "
        f"(ID: {transfer_id})"
    )


@transfer_group.command("list")
@click.option("--account", help="Only transfers into or out of this account")
@click.option("--start-date", help="Start date (YYYY-MM-DD)")
@click.option("--end-date", help="End date (YYYY-MM-DD)")
@click.pass_context
def list_transfers(ctx, account: str | None, start_date: str | None, end_date: str | None):
    """List transfers, newest first."""
    db = ctx.obj["db"]
    start, end = resolve_cli_date_range(ctx, start_date=start_date, end_date=end_date, period_flags={})
    account_id = resolve_account_or_exit(ctx, AccountService(db), account) if account else None

    transfers = TransactionService(db).list_transfers(account_id=account_id, start_date=start, end_date=end)
    if not transfers:
        click.echo("No transfers found.")
        return

    names = _account_names(db)
    click.echo("\nTransfers:")
    click.echo("-" * 80)
    for t in transfers:
        click.echo(
            f"ID: {t.id:3d} | {t.date} | {names.get(t.from_account_id, '?'):15.15s} -> "
            f"{names.get(t.to_account_id, '?'):15.15s} | {format_currency(t.amount):>12s}"
        )


@transfer_group.command("delete")
@click.argument("transfer_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transfer(ctx, transfer_id: int, yes: bool):
    """Delete a transfer."""
    service = TransactionService(ctx.obj["db"])
    if service.get_transfer(transfer_id) is None:
        click.echo(f"Error: Transfer {transfer_id} not found", err=True)
        ctx.exit(1)

    if not yes and not click.confirm(f"Are you sure you want to delete transfer {transfer_id}?"):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_transfer(transfer_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted transfer {transfer_id}")


def register_commands(cli):
    """Register transaction and transfer commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
    cli.add_command(transfer_group, name="transfer")
