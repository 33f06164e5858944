"""Turn account and category references typed on the command line into IDs."""

import click
from storefront.cli.error_handling import handle_domain_error
from storefront.domain.account import AccountService
from storefront.domain.category import AccountCategoryService
from storefront.utils.account_resolver import resolve_account


def resolve_account_or_exit(ctx: click.Context, account_service: AccountService, account: str | int) -> int:
    """Resolve account name or ID, or exit with a CLI error."""
    try:
        return resolve_account(account_service, account)
    except ValueError as exc:
        handle_domain_error(ctx, exc)


def resolve_category_or_exit(ctx: click.Context, category_service: AccountCategoryService, category: str) -> int:
    """Resolve category name or ID, or exit with a CLI error.

    A numeric reference is tried as an ID first, then as a name.
    """
    found = None
    if category.isdigit():
        found = category_service.get_category(int(category))
    if found is None:
        found = category_service.get_category_by_name(category)
    if found is None:
        click.echo(f"Error: Category '{category}' not found", err=True)
        ctx.exit(1)
    return found.id
