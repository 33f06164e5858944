"""Main CLI entry point."""

import logging
import os

import click
from storefront.database.factories import DB_PATH_ENV_VAR, create_sqlite_database

from storefront.cli.commands import (
    account,
    category,
    chart,
    documents,
    product,
    summary,
    transaction,
)

LOG_LEVEL_ENV_VAR = "STOREFRONT_LOG_LEVEL"
LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(verbose: int) -> None:
    """Send log records to stderr when asked for.

    ``-v`` selects INFO and ``-vv`` DEBUG. Without either flag the level
    comes from STOREFRONT_LOG_LEVEL; when that is unset nothing is configured.
    """
    if verbose:
        level = logging.DEBUG if verbose > 1 else logging.INFO
    else:
        env_level = os.environ.get(LOG_LEVEL_ENV_VAR)
        if not env_level:
            return
        level = logging.getLevelName(env_level.upper())
        if not isinstance(level, int):
            level = logging.WARNING
    logging.basicConfig(level=level, format=LOG_FORMAT)


@click.group()
@click.option(
    "--db-path",
    type=click.Path(),
    help=f"Path to database file (overrides {DB_PATH_ENV_VAR} environment variable)",
    envvar=DB_PATH_ENV_VAR,
)
@click.option("-v", "--verbose", count=True, help="Log progress to stderr (-vv for debug output)")
@click.pass_context
def cli(ctx, db_path: str | None, verbose: int):
    """Storefront - back office for a small online shop.

    Keep a chart of accounts, a product catalog, and the invoices and bills
    that move money between them.
    """
    ctx.ensure_object(dict)
    configure_logging(verbose)

    # Open the database only when a command runs, not for --help
    if ctx.invoked_subcommand is not None:
        db = create_sqlite_database(database_path=db_path)
        db.connect()
        db.initialize_schema()
        ctx.obj["db"] = db


category.register_commands(cli)
account.register_commands(cli)
chart.register_commands(cli)
product.register_commands(cli)
documents.register_commands(cli)
transaction.register_commands(cli)
summary.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
