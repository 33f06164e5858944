"""Shared pytest fixtures for storefront tests."""

import tempfile
import os
import pytest

from storefront.database.factories import create_sqlite_database
from storefront.domain.account import AccountService
from storefront.domain.category import AccountCategoryService
from storefront.domain.chart import ChartOfAccountsService
from storefront.domain.document import DocumentService
from storefront.domain.product import ProductService
from storefront.domain.summary import SummaryService
from storefront.domain.transaction import TransactionService


@pytest.fixture
def temp_db():
    """Create a temporary database for testing."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for CLI tests
    db.database_path = db_path
    db.connect()
    db.initialize_schema()

    yield db

    db.disconnect()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def reopen_db(temp_db):
    """Return a factory for fresh connections to the temporary database.

    CLI commands write through their own connection; a fresh one sees those
    writes without stale cached rows.
    """
    opened = []

    def _open():
        db = create_sqlite_database(database_path=temp_db.database_path)
        db.connect()
        opened.append(db)
        return db

    yield _open

    for db in opened:
        db.disconnect()


@pytest.fixture
def category_service(temp_db):
    """Create an AccountCategoryService with a temporary database."""
    return AccountCategoryService(temp_db)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def product_service(temp_db):
    """Create a ProductService with a temporary database."""
    return ProductService(temp_db)


@pytest.fixture
def document_service(temp_db):
    """Create a DocumentService with a temporary database."""
    return DocumentService(temp_db)


@pytest.fixture
def chart_service(temp_db):
    """Create a ChartOfAccountsService with a temporary database."""
    return ChartOfAccountsService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def sample_category(category_service):
    """Create an asset category for testing."""
    category_id = category_service.create_category(name="Bank Accounts", category_type="asset")
    return category_service.get_category(category_id)


@pytest.fixture
def sample_account(account_service, sample_category):
    """Create a sample account with a 100.00 opening balance."""
    account_id = account_service.create_account(
        name="Checking", category_id=sample_category.id, initial_balance="100.00"
    )
    return account_service.get_account(account_id)


@pytest.fixture
def sample_product(product_service):
    """Create a product priced at 10.00."""
    product_id = product_service.create_product(name="Widget", price="10.00", sku="W-1", inventory=5)
    return product_service.get_product(product_id)


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
