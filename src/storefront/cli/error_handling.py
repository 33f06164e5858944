"""CLI error handling helpers."""

import click

from storefront.domain.errors import DomainError


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error and exit with failure."""
    click.echo(f"Error: {error}", err=True)
    ctx.exit(1)


def report_problems(ctx: click.Context, problems: list[str]) -> None:
    """Render every validation problem and exit with failure."""
    click.echo("Error: The document cannot be saved:", err=True)
    for problem in problems:
        click.echo(f"  - {problem}", err=True)
    ctx.exit(1)
