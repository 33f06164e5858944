"""Product catalog commands."""

import click
from storefront.cli.error_handling import handle_domain_error
from storefront.domain.product import ProductService
from storefront.utils.amount_parser import format_currency


@click.group()
def product_group():
    """Manage catalog products."""
    pass


@product_group.command("add")
@click.argument("name")
@click.option("--price", required=True, help="Unit price (e.g., 19.99)")
@click.option("--sku", help="Stock keeping unit")
@click.option("--inventory", type=int, default=0, help="Units in stock")
@click.option("--description", help="Description")
@click.pass_context
def add_product(ctx, name: str, price: str, sku: str | None, inventory: int, description: str | None):
    """Add a product to the catalog."""
    service = ProductService(ctx.obj["db"])
    try:
        product_id = service.create_product(
            name=name, price=price, description=description, sku=sku, inventory=inventory
        )
    except ValueError as e:
        handle_domain_error(ctx, e)

    product = service.get_product(product_id)
    click.echo(f"Added product '{name}' (ID: {product_id}) at {format_currency(product.price)}")


@product_group.command("list")
@click.pass_context
def list_products(ctx):
    """List catalog products."""
    products = ProductService(ctx.obj["db"]).list_products()
    if not products:
        click.echo("No products found.")
        return

    click.echo("\nProducts:")
    click.echo("-" * 60)
    for p in products:
        stock = f"{p.inventory} in stock" if p.in_stock else "out of stock"
        click.echo(f"ID: {p.id:3d} | {p.name:25s} | {format_currency(p.price):>10s} | {stock}")


@product_group.command("price")
@click.argument("product_id", type=int)
@click.argument("price")
@click.pass_context
def set_price(ctx, product_id: int, price: str):
    """Change the price of a product."""
    try:
        ProductService(ctx.obj["db"]).update_price(product_id, price)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Updated price of product {product_id}")


@product_group.command("delete")
@click.argument("product_id", type=int)
@click.pass_context
def delete_product(ctx, product_id: int):
    """Delete a product."""
    try:
        ProductService(ctx.obj["db"]).delete_product(product_id)
    except ValueError as e:
        handle_domain_error(ctx, e)
    click.echo(f"Deleted product {product_id}")


def register_commands(cli):
    """Register product commands with main CLI."""
    cli.add_command(product_group, name="product")
