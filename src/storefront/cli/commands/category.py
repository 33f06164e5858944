"""Account category commands."""

import click
from storefront.cli.error_handling import handle_domain_error
from storefront.cli.resolution import resolve_category_or_exit
from storefront.domain.account_codes import generate_code
from storefront.domain.category import AccountCategoryService
from storefront.domain.entities import AccountType

TYPE_CHOICES = [t.value for t in AccountType]


@click.group()
def category_group():
    """Manage account categories."""
    pass


@category_group.command("list")
@click.option("--type", "category_type", type=click.Choice(TYPE_CHOICES), help="Only this account type")
@click.pass_context
def list_categories(ctx, category_type: str | None):
    """List account categories with their codes."""
    service = AccountCategoryService(ctx.obj["db"])

    categories = service.list_categories(category_type)
    if not categories:
        click.echo("No categories found. Run 'init-chart' to create the default chart of accounts.")
        return

    click.echo("\nCategories:")
    for cat in categories:
        system = " [system]" if cat.is_system else ""
        click.echo(f"{generate_code(cat.type, cat.id)} | {cat.name:25s} | {cat.type.value}{system}")


@category_group.command("create")
@click.argument("name")
@click.option("--type", "category_type", type=click.Choice(TYPE_CHOICES), required=True, help="Account type")
@click.option("--description", help="Description")
@click.pass_context
def create_category(ctx, name: str, category_type: str, description: str | None):
    """Create a new account category."""
    service = AccountCategoryService(ctx.obj["db"])

    try:
        category_id = service.create_category(
            name=name, category_type=category_type, description=description
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    code = generate_code(category_type, category_id)
    click.echo(f"Created category '{name}' ({code}, ID: {category_id})")


@category_group.command("delete")
@click.argument("category", metavar="CATEGORY")
@click.pass_context
def delete_category(ctx, category: str):
    """Delete an account category.

    CATEGORY can be a category name or ID. System categories and categories
    that still hold accounts cannot be deleted.
    """
    service = AccountCategoryService(ctx.obj["db"])
    category_id = resolve_category_or_exit(ctx, service, category)
    try:
        service.delete_category(category_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted category {category_id}")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
