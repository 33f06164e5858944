"""Tests for transactions, transfers and their effect on balances."""

from datetime import date

import pytest

from storefront.cli.main import cli
from storefront.domain.entities import TransactionType
from storefront.domain.errors import DependencyError, NotFoundError, ValidationError
from storefront.domain.transaction import parse_transaction_type


@pytest.fixture
def savings_account(account_service, sample_category):
    account_id = account_service.create_account(name="Savings", category_id=sample_category.id)
    return account_service.get_account(account_id)


@pytest.fixture
def invoke(cli_runner, temp_db):
    def _invoke(*args, **kwargs):
        return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args], **kwargs)

    return _invoke


class TestParseTransactionType:
    """Tests for parse_transaction_type."""

    def test_names(self):
        assert parse_transaction_type("income") == TransactionType.INCOME
        assert parse_transaction_type(" Expense ") == TransactionType.EXPENSE
        assert parse_transaction_type(TransactionType.INCOME) == TransactionType.INCOME

    def test_unknown(self):
        with pytest.raises(ValidationError, match="Unknown transaction type 'refund'"):
            parse_transaction_type("refund")


class TestTransactionService:
    """Tests for TransactionService transactions."""

    def test_create_transaction(self, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(
            account_id=sample_account.id,
            transaction_type="expense",
            amount="49.90",
            category=" Shipping ",
            txn_date=date(2024, 1, 10),
            description="Courier",
        )

        txn = transaction_service.get_transaction(transaction_id)
        assert txn.type == TransactionType.EXPENSE
        assert txn.amount == 4990
        assert txn.category == "Shipping"
        assert txn.date == date(2024, 1, 10)
        assert txn.description == "Courier"

    def test_defaults_to_today(self, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(sample_account.id, "income", "5", "Sales")
        assert transaction_service.get_transaction(transaction_id).date == date.today()

    @pytest.mark.parametrize("amount", ["0", "-5", "abc", "1e30"])
    def test_invalid_amount(self, transaction_service, sample_account, amount):
        with pytest.raises(ValidationError):
            transaction_service.create_transaction(sample_account.id, "income", amount, "Sales")

    def test_category_required(self, transaction_service, sample_account):
        with pytest.raises(ValidationError, match="Category is required"):
            transaction_service.create_transaction(sample_account.id, "income", "5", "  ")

    def test_missing_account(self, transaction_service):
        with pytest.raises(NotFoundError):
            transaction_service.create_transaction(99, "income", "5", "Sales")

    def test_list_filters(self, transaction_service, sample_account, savings_account):
        transaction_service.create_transaction(sample_account.id, "income", "10", "Sales", date(2024, 1, 5))
        transaction_service.create_transaction(sample_account.id, "expense", "3", "Rent", date(2024, 2, 1))
        transaction_service.create_transaction(savings_account.id, "income", "1", "Interest", date(2024, 2, 28))

        assert [t.category for t in transaction_service.list_transactions()] == ["Interest", "Rent", "Sales"]
        assert len(transaction_service.list_transactions(account_id=sample_account.id)) == 2
        assert [t.category for t in transaction_service.list_transactions(transaction_type="income")] == [
            "Interest",
            "Sales",
        ]
        assert [t.category for t in transaction_service.list_transactions(category="Rent")] == ["Rent"]
        feb = transaction_service.list_transactions(start_date=date(2024, 2, 1), end_date=date(2024, 2, 29))
        assert len(feb) == 2

    def test_delete(self, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(sample_account.id, "income", "5", "Sales")
        transaction_service.delete_transaction(transaction_id)

        assert transaction_service.get_transaction(transaction_id) is None
        with pytest.raises(NotFoundError, match=f"Transaction {transaction_id} not found"):
            transaction_service.delete_transaction(transaction_id)


class TestTransfers:
    """Tests for TransactionService transfers."""

    def test_create_transfer(self, transaction_service, sample_account, savings_account):
        transfer_id = transaction_service.create_transfer(
            sample_account.id, savings_account.id, "25.00", date(2024, 3, 1), description="Monthly saving"
        )

        transfer = transaction_service.get_transfer(transfer_id)
        assert (transfer.from_account_id, transfer.to_account_id) == (sample_account.id, savings_account.id)
        assert transfer.amount == 2500
        assert transfer.description == "Monthly saving"

    def test_same_account(self, transaction_service, sample_account):
        with pytest.raises(ValidationError, match="Cannot transfer to the same account"):
            transaction_service.create_transfer(sample_account.id, sample_account.id, "5")

    def test_missing_account(self, transaction_service, sample_account):
        with pytest.raises(NotFoundError):
            transaction_service.create_transfer(sample_account.id, 99, "5")

    def test_list_by_account(self, transaction_service, sample_account, savings_account):
        transaction_service.create_transfer(sample_account.id, savings_account.id, "5")
        transaction_service.create_transfer(savings_account.id, sample_account.id, "2")

        assert len(transaction_service.list_transfers(account_id=savings_account.id)) == 2
        assert transaction_service.list_transfers(account_id=99) == []

    def test_delete(self, transaction_service, sample_account, savings_account):
        transfer_id = transaction_service.create_transfer(sample_account.id, savings_account.id, "5")
        transaction_service.delete_transfer(transfer_id)

        with pytest.raises(NotFoundError, match=f"Transfer {transfer_id} not found"):
            transaction_service.delete_transfer(transfer_id)


class TestBalances:
    """Transactions and transfers move account balances."""

    def test_income_and_expense(self, account_service, transaction_service, sample_account):
        transaction_service.create_transaction(sample_account.id, "income", "20.00", "Sales")
        transaction_service.create_transaction(sample_account.id, "expense", "7.50", "Postage")

        assert account_service.get_balance(sample_account.id) == 11250

    def test_transfer_moves_money(self, account_service, transaction_service, sample_account, savings_account):
        transaction_service.create_transfer(sample_account.id, savings_account.id, "30")

        assert account_service.get_balance(sample_account.id) == 7000
        assert account_service.get_balance(savings_account.id) == 3000

    def test_delete_restores_balance(self, account_service, transaction_service, sample_account):
        transaction_id = transaction_service.create_transaction(sample_account.id, "expense", "40", "Rent")
        transaction_service.delete_transaction(transaction_id)

        assert account_service.get_balance(sample_account.id) == 10000

    def test_account_with_transactions_cannot_be_deleted(
        self, account_service, transaction_service, sample_account, savings_account
    ):
        transaction_service.create_transaction(sample_account.id, "income", "1", "Sales")
        with pytest.raises(DependencyError, match="it has 1 transaction\\."):
            account_service.delete_account(sample_account.id)

        transaction_service.create_transfer(sample_account.id, savings_account.id, "1")
        with pytest.raises(DependencyError, match="it has 1 transaction\\."):
            account_service.delete_account(savings_account.id)


class TestTransactionCommands:
    """Tests for the transaction and transfer commands."""

    def test_add_and_list(self, invoke, sample_account):
        result = invoke(
            "transaction", "add", "--account", "Checking", "--type", "expense",
            "--amount", "12.50", "--category", "Packaging", "--date", "2024-01-20", "--description", "Boxes",
        )
        assert result.exit_code == 0, result.output
        assert "Added expense of $12.50 (ID: 1)" in result.output

        result = invoke("transaction", "list")
        assert result.exit_code == 0
        assert "Packaging" in result.output
        assert "-$12.50" in result.output
        assert "Boxes" in result.output

        assert "Checking: $87.50" in invoke("account", "balance", "Checking").output

    def test_list_filters(self, invoke, sample_account):
        invoke("transaction", "add", "--account", "1", "--type", "income", "--amount", "5", "--category", "Sales")

        assert "No transactions found." in invoke("transaction", "list", "--type", "expense").output
        assert "No transactions found." in invoke("transaction", "list", "--category", "Rent").output
        assert "Sales" in invoke("transaction", "list", "--account", "Checking", "--this-month").output

    def test_add_invalid_amount(self, invoke, sample_account):
        result = invoke(
            "transaction", "add", "--account", "Checking", "--type", "income", "--amount", "0", "--category", "Sales",
        )
        assert result.exit_code == 1
        assert "Amount must be greater than 0" in result.output

    def test_add_unknown_type(self, invoke, sample_account):
        result = invoke(
            "transaction", "add", "--account", "Checking", "--type", "gift", "--amount", "1", "--category", "x",
        )
        assert result.exit_code == 2

    def test_delete(self, invoke, sample_account, reopen_db):
        invoke("transaction", "add", "--account", "1", "--type", "income", "--amount", "5", "--category", "Sales")

        result = invoke("transaction", "delete", "1", input="n\n")
        assert "Deletion cancelled." in result.output

        result = invoke("transaction", "delete", "1", "--yes")
        assert result.exit_code == 0
        assert "Deleted transaction 1" in result.output
        assert reopen_db().get_transaction(1) is None

        result = invoke("transaction", "delete", "1", "--yes")
        assert result.exit_code == 1
        assert "Transaction 1 not found" in result.output

    def test_transfer(self, invoke, sample_account, savings_account):
        result = invoke("transfer", "add", "--from", "Checking", "--to", "Savings", "--amount", "25")
        assert result.exit_code == 0, result.output
        assert "Transferred $25.00 from Checking to Savings (ID: 1)" in result.output

        result = invoke("transfer", "list", "--account", "Savings")
        assert "Checking" in result.output
        assert "$25.00" in result.output

        assert "Savings: $25.00" in invoke("account", "balance", "Savings").output

        result = invoke("transfer", "delete", "1", "--yes")
        assert result.exit_code == 0
        assert "Deleted transfer 1" in result.output
        assert "No transfers found." in invoke("transfer", "list").output

    def test_transfer_to_same_account(self, invoke, sample_account):
        result = invoke("transfer", "add", "--from", "Checking", "--to", "1", "--amount", "5")
        assert result.exit_code == 1
        assert "Cannot transfer to the same account" in result.output

    def test_account_delete_blocked(self, invoke, sample_account):
        invoke("transaction", "add", "--account", "1", "--type", "income", "--amount", "5", "--category", "Sales")

        result = invoke("account", "delete", "Checking", "--yes")
        assert result.exit_code == 1
        assert "1 transaction" in result.output
