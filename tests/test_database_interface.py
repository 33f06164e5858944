"""Tests for Database interface returning domain models."""

import pytest
from datetime import date, datetime

from storefront.database.factories import DB_PATH_ENV_VAR, create_sqlite_database, resolve_database_path
from storefront.domain import entities
from storefront.domain.errors import NotFoundError


def _create_account(db, name="Checking", balance=0):
    category_id = db.create_account_category(name=f"{name} category", category_type="asset")
    return db.create_account(category_id=category_id, name=name, initial_balance=balance)


def _create_document(db, account_id, number, document_type="invoice", **overrides):
    fields = dict(
        document_type=document_type,
        document_number=number,
        account_id=account_id,
        issue_date=date(2024, 1, 15),
        items=[{"description": "Widget", "quantity": "2", "unit_price": 500, "amount": 1000}],
        subtotal=1000,
        tax_amount=0,
        adjustment=0,
        total_amount=1000,
    )
    fields.update(overrides)
    return db.create_document(**fields)


class TestDatabaseInterface:
    """Tests to verify Database interface returns domain models."""

    def test_get_account_category_returns_domain_model(self, temp_db):
        category_id = temp_db.create_account_category(
            name="Assets", category_type="asset", description="Owned", is_system=True
        )
        category = temp_db.get_account_category(category_id)

        assert isinstance(category, entities.AccountCategory)
        assert category.type == entities.AccountType.ASSET
        assert category.is_system is True
        assert isinstance(category.created_at, datetime)
        assert temp_db.get_account_category_by_name("Assets").id == category_id

    def test_list_account_categories_filters_by_type(self, temp_db):
        temp_db.create_account_category(name="Assets", category_type="asset")
        temp_db.create_account_category(name="Expenses", category_type="expense")

        assert [c.name for c in temp_db.list_account_categories()] == ["Assets", "Expenses"]
        assert [c.name for c in temp_db.list_account_categories("expense")] == ["Expenses"]

    def test_get_account_returns_domain_model(self, temp_db):
        account_id = _create_account(temp_db, balance=12345)
        account = temp_db.get_account(account_id)

        assert isinstance(account, entities.Account)
        assert account.initial_balance == 12345
        assert account.is_active is True

    def test_update_account(self, temp_db):
        account_id = _create_account(temp_db)
        temp_db.update_account(account_id, name="Savings", is_active=False)

        account = temp_db.get_account(account_id)
        assert account.name == "Savings"
        assert account.is_active is False
        assert temp_db.list_accounts(active_only=True) == []

    def test_missing_rows(self, temp_db):
        assert temp_db.get_account(999) is None
        assert temp_db.get_product(999) is None
        assert temp_db.get_document(999) is None
        with pytest.raises(NotFoundError):
            temp_db.delete_account(999)
        with pytest.raises(NotFoundError):
            temp_db.update_document_status(999, "paid")

    def test_product_in_stock_follows_inventory(self, temp_db):
        stocked = temp_db.create_product(name="Widget", price=1000, inventory=3)
        empty = temp_db.create_product(name="Gadget", price=500)

        assert temp_db.get_product(stocked).in_stock is True
        assert temp_db.get_product(empty).in_stock is False
        assert [p.name for p in temp_db.list_products()] == ["Gadget", "Widget"]

    def test_update_product_price(self, temp_db):
        product_id = temp_db.create_product(name="Widget", price=1000)
        temp_db.update_product_price(product_id, 1299)
        assert temp_db.get_product(product_id).price == 1299

    def test_document_round_trip(self, temp_db):
        account_id = _create_account(temp_db)
        document_id = _create_document(
            temp_db, account_id, "INV-1", contact_name="Jane", due_date=date(2024, 2, 14)
        )
        document = temp_db.get_document(document_id)

        assert isinstance(document, entities.FinanceDocument)
        assert document.document_type == entities.DocumentType.INVOICE
        assert document.status == entities.DocumentStatus.DRAFT
        assert document.issue_date == date(2024, 1, 15)
        assert document.due_date == date(2024, 2, 14)
        assert document.total_amount == 1000
        assert len(document.items) == 1
        assert isinstance(document.items[0], entities.LineItem)
        assert document.items[0].amount == 1000
        assert temp_db.get_document_by_number("INV-1").id == document_id

    def test_list_documents_filters(self, temp_db):
        account_id = _create_account(temp_db)
        _create_document(temp_db, account_id, "INV-1", issue_date=date(2024, 1, 1))
        _create_document(temp_db, account_id, "INV-2", issue_date=date(2024, 3, 1), status="paid")
        _create_document(temp_db, account_id, "BILL-1", document_type="bill")

        invoices = temp_db.list_documents(document_type="invoice")
        assert [d.document_number for d in invoices] == ["INV-2", "INV-1"]

        assert [d.document_number for d in temp_db.list_documents(status="paid")] == ["INV-2"]
        in_range = temp_db.list_documents(start_date=date(2024, 1, 10), end_date=date(2024, 2, 1))
        assert [d.document_number for d in in_range] == ["BILL-1"]

    def test_update_document_payment(self, temp_db):
        account_id = _create_account(temp_db)
        document_id = _create_document(temp_db, account_id, "INV-1")
        temp_db.update_document_payment(document_id, payment_received=400, status="sent")

        document = temp_db.get_document(document_id)
        assert document.payment_received == 400
        assert document.status == entities.DocumentStatus.SENT

    def test_account_document_totals_skip_cancelled(self, temp_db):
        account_id = _create_account(temp_db)
        _create_document(temp_db, account_id, "INV-1", total_amount=1000)
        _create_document(temp_db, account_id, "INV-2", total_amount=500, status="cancelled")
        _create_document(temp_db, account_id, "BILL-1", document_type="bill", total_amount=300)

        assert temp_db.get_account_document_totals(account_id) == {"invoice": 1000, "bill": 300}
        assert temp_db.get_account_document_count(account_id) == 3

    def test_delete_document(self, temp_db):
        account_id = _create_account(temp_db)
        document_id = _create_document(temp_db, account_id, "INV-1")
        temp_db.delete_document(document_id)
        assert temp_db.get_document(document_id) is None

    def test_update_document(self, temp_db):
        account_id = _create_account(temp_db)
        document_id = _create_document(temp_db, account_id, "INV-1", contact_name="Jane", notes="Net 30")
        items = [{"description": "Gadget", "quantity": "3", "unit_price": 700, "amount": 2100}]
        temp_db.update_document(
            document_id,
            items=items,
            subtotal=2100,
            tax_amount=0,
            adjustment=200,
            total_amount=2300,
            payment_received=2300,
            status="paid",
            due_date=date(2024, 3, 1),
        )

        document = temp_db.get_document(document_id)
        assert [item.description for item in document.items] == ["Gadget"]
        assert (document.adjustment, document.total_amount, document.payment_received) == (200, 2300, 2300)
        assert document.status == entities.DocumentStatus.PAID
        assert document.due_date == date(2024, 3, 1)
        # None leaves header fields alone
        assert (document.contact_name, document.notes) == ("Jane", "Net 30")

        with pytest.raises(NotFoundError):
            temp_db.update_document(
                999, items=[], subtotal=0, tax_amount=0, adjustment=0,
                total_amount=0, payment_received=0, status="draft",
            )

    def test_transaction_round_trip(self, temp_db):
        account_id = _create_account(temp_db)
        transaction_id = temp_db.create_transaction(
            account_id=account_id,
            transaction_type="expense",
            amount=1250,
            category="Postage",
            date=date(2024, 1, 5),
            reference="R-1",
        )

        txn = temp_db.get_transaction(transaction_id)
        assert isinstance(txn, entities.Transaction)
        assert txn.type == entities.TransactionType.EXPENSE
        assert (txn.amount, txn.category, txn.reference) == (1250, "Postage", "R-1")
        assert isinstance(txn.created_at, datetime)

    def test_list_transactions_filters(self, temp_db):
        account_id = _create_account(temp_db)
        other_id = _create_account(temp_db, name="Savings")
        temp_db.create_transaction(account_id, "income", 1000, "Sales", date(2024, 1, 1))
        temp_db.create_transaction(account_id, "expense", 300, "Rent", date(2024, 2, 1))
        temp_db.create_transaction(other_id, "income", 50, "Interest", date(2024, 2, 1))

        assert [t.category for t in temp_db.list_transactions()] == ["Interest", "Rent", "Sales"]
        assert [t.category for t in temp_db.list_transactions(account_id=other_id)] == ["Interest"]
        assert [t.category for t in temp_db.list_transactions(transaction_type="expense")] == ["Rent"]
        assert [t.category for t in temp_db.list_transactions(category="Sales")] == ["Sales"]
        assert len(temp_db.list_transactions(start_date=date(2024, 1, 15))) == 2
        assert len(temp_db.list_transactions(end_date=date(2024, 1, 15))) == 1

    def test_account_transaction_totals(self, temp_db):
        account_id = _create_account(temp_db)
        temp_db.create_transaction(account_id, "income", 1000, "Sales", date(2024, 1, 1))
        temp_db.create_transaction(account_id, "income", 250, "Sales", date(2024, 1, 2))
        temp_db.create_transaction(account_id, "expense", 300, "Rent", date(2024, 1, 3))

        assert temp_db.get_account_transaction_totals(account_id) == {"income": 1250, "expense": 300}
        assert temp_db.get_account_transaction_count(account_id) == 3

    def test_transfers(self, temp_db):
        checking = _create_account(temp_db)
        savings = _create_account(temp_db, name="Savings")
        transfer_id = temp_db.create_transfer(checking, savings, 500, date(2024, 1, 1), description="Saving")
        temp_db.create_transfer(savings, checking, 200, date(2024, 1, 2))

        transfer = temp_db.get_transfer(transfer_id)
        assert isinstance(transfer, entities.Transfer)
        assert (transfer.from_account_id, transfer.to_account_id, transfer.amount) == (checking, savings, 500)
        assert temp_db.get_account_transfer_totals(checking) == (200, 500)
        assert temp_db.get_account_transfer_totals(savings) == (500, 200)
        assert temp_db.get_account_transaction_count(savings) == 2
        assert len(temp_db.list_transfers(account_id=savings)) == 2

        temp_db.delete_transfer(transfer_id)
        assert temp_db.get_transfer(transfer_id) is None
        with pytest.raises(NotFoundError):
            temp_db.delete_transfer(transfer_id)

    def test_delete_transaction(self, temp_db):
        account_id = _create_account(temp_db)
        transaction_id = temp_db.create_transaction(account_id, "income", 100, "Sales", date(2024, 1, 1))
        temp_db.delete_transaction(transaction_id)

        assert temp_db.get_transaction(transaction_id) is None
        with pytest.raises(NotFoundError):
            temp_db.delete_transaction(transaction_id)


class TestFactories:
    """Tests for database path resolution."""

    def test_explicit_path_creates_parent(self, tmp_path):
        target = tmp_path / "nested" / "shop.db"
        assert resolve_database_path(str(target)) == target
        assert target.parent.is_dir()

    def test_environment_variable(self, tmp_path, monkeypatch):
        monkeypatch.setenv(DB_PATH_ENV_VAR, str(tmp_path / "env.db"))
        assert resolve_database_path() == tmp_path / "env.db"

    def test_explicit_path_wins(self, tmp_path, monkeypatch):
        monkeypatch.setenv(DB_PATH_ENV_VAR, str(tmp_path / "env.db"))
        assert resolve_database_path(str(tmp_path / "cli.db")) == tmp_path / "cli.db"

    def test_create_sqlite_database(self, tmp_path):
        db = create_sqlite_database(str(tmp_path / "shop.db"))
        assert db.list_accounts() == []
        db.disconnect()
