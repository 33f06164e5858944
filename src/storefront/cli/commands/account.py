"""Account management commands."""

import click
from storefront.cli.error_handling import handle_domain_error
from storefront.cli.resolution import resolve_account_or_exit, resolve_category_or_exit
from storefront.domain.account import AccountService
from storefront.domain.account_codes import generate_code
from storefront.domain.category import AccountCategoryService
from storefront.utils.amount_parser import format_currency


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME")
@click.option("--category", required=True, help="Account category name or ID")
@click.option("--balance", default="0", help="Opening balance (e.g., 1,250.00)")
@click.option("--description", help="Description")
@click.pass_context
def create_account(ctx, name: str, category: str, balance: str, description: str | None):
    """Create a new account.

    Examples:
        storefront account create "Petty Cash" --category Assets --balance 200
        storefront account create "Stripe" --category 1 --description "Card payouts"
    """
    db = ctx.obj["db"]
    service = AccountService(db)
    category_id = resolve_category_or_exit(ctx, AccountCategoryService(db), category)

    try:
        account_id = service.create_account(
            name=name, category_id=category_id, initial_balance=balance, description=description
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    account = service.get_account(account_id)
    click.echo(f"Created account '{name}' (ID: {account_id})")
    click.echo(f"Opening balance: {format_currency(account.initial_balance)}")


@account_group.command("list")
@click.option("--active-only", is_flag=True, help="Hide inactive accounts")
@click.pass_context
def list_accounts(ctx, active_only: bool):
    """List all accounts with codes and balances."""
    db = ctx.obj["db"]
    service = AccountService(db)
    categories = {cat.id: cat for cat in AccountCategoryService(db).list_categories()}

    accounts = service.list_accounts(active_only=active_only)
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 70)
    for acc in accounts:
        category = categories.get(acc.category_id)
        code = generate_code(category.type if category else "other", acc.id)
        inactive = " (inactive)" if not acc.is_active else ""
        click.echo(
            f"{code} | {acc.name:25s} | {format_currency(service.get_balance(acc.id)):>14s}{inactive}"
        )


@account_group.command("rename")
@click.argument("account", metavar="ACCOUNT")
@click.argument("new_name", metavar="NEW_NAME")
@click.option("--description", help="New description (optional)")
@click.pass_context
def rename_account(ctx, account: str, new_name: str, description: str | None) -> None:
    """Rename an account.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        service.rename_account(account_id=account_id, name=new_name, description=description)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Renamed account to '{new_name}'")


@account_group.command("deactivate")
@click.argument("account", metavar="ACCOUNT")
@click.option("--undo", is_flag=True, help="Reactivate the account instead")
@click.pass_context
def deactivate_account(ctx, account: str, undo: bool) -> None:
    """Deactivate (or reactivate) an account."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    service.set_active(account_id, is_active=undo)
    click.echo(f"Account {account_id} {'reactivated' if undo else 'deactivated'}")


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_balance(ctx, account: str) -> None:
    """Show the current balance of an account."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)
    click.echo(f"{account_obj.name}: {format_currency(service.get_balance(account_id))}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID. Accounts with invoices, bills,
    transactions or transfers cannot be deleted; deactivate them instead.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.get_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted account '{account_obj.name}'")


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
