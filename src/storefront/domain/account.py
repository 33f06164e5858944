"""Account domain service."""

import logging
from typing import Optional

from storefront.database.base import Database
from storefront.domain.entities import Account as AccountEntity, DocumentType, TransactionType
from storefront.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    account_delete_blocked,
    account_not_found,
    category_not_found,
)
from storefront.utils.amount_parser import to_stored_cents

logger = logging.getLogger(__name__)


class AccountService:
    """Service for managing ledger accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_unique_name(self, name: str, account_id: Optional[int] = None) -> None:
        for acc in self.db.list_accounts():
            if acc.id != account_id and acc.name == name:
                raise ConflictError(f"Account with name '{name}' already exists")

    def create_account(
        self,
        name: str,
        category_id: int,
        initial_balance: Optional[str | int] = None,
        description: Optional[str] = None,
    ) -> int:
        """Create a new account.

        Args:
            name: Account name
            category_id: Account category ID
            initial_balance: Opening balance as entered, e.g. "1,250.00"
            description: Optional description

        Returns:
            Account ID

        Raises:
            ValidationError: If name is empty or balance cannot be parsed
            NotFoundError: If category doesn't exist
            ConflictError: If account name already exists
        """
        if not name or not name.strip():
            raise ValidationError("Account name is required")
        if self.db.get_account_category(category_id) is None:
            raise NotFoundError(category_not_found(category_id))
        self._check_unique_name(name)

        balance = to_stored_cents(initial_balance)
        account_id = self.db.create_account(
            category_id=category_id,
            name=name,
            description=description,
            initial_balance=balance,
        )
        logger.info(f"Created account '{name}' (ID {account_id}) with opening balance {balance}")
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def list_accounts(
        self, category_id: Optional[int] = None, active_only: bool = False
    ) -> list[AccountEntity]:
        """List accounts."""
        return self.db.list_accounts(category_id=category_id, active_only=active_only)

    def rename_account(self, account_id: int, name: str, description: Optional[str] = None) -> None:
        """Rename an account.

        Raises:
            NotFoundError: If account not found
            ConflictError: If name already exists
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        self._check_unique_name(name, account_id=account_id)
        self.db.update_account(account_id=account_id, name=name, description=description)

    def set_active(self, account_id: int, is_active: bool) -> None:
        """Activate or deactivate an account."""
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))
        self.db.update_account(account_id=account_id, is_active=is_active)
        logger.info(f"Account {account_id} {'activated' if is_active else 'deactivated'}")

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Raises:
            NotFoundError: If account not found
            DependencyError: If documents, transactions or transfers reference the account
        """
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        document_count = self.db.get_account_document_count(account_id)
        transaction_count = self.db.get_account_transaction_count(account_id)
        if document_count or transaction_count:
            raise DependencyError(account_delete_blocked(account_id, document_count, transaction_count))

        self.db.delete_account(account_id)
        logger.info(f"Deleted account {account_id}")

    def get_balance(self, account_id: int) -> int:
        """Current balance in cents.

        Opening balance, plus invoices, income and transfers in, minus
        bills, expenses and transfers out. Cancelled documents are ignored.
        """
        account = self.db.get_account(account_id)
        if account is None:
            raise NotFoundError(account_not_found(account_id))

        documents = self.db.get_account_document_totals(account_id)
        transactions = self.db.get_account_transaction_totals(account_id)
        transfers_in, transfers_out = self.db.get_account_transfer_totals(account_id)

        incoming = (
            documents.get(DocumentType.INVOICE.value, 0)
            + transactions.get(TransactionType.INCOME.value, 0)
            + transfers_in
        )
        outgoing = (
            documents.get(DocumentType.BILL.value, 0)
            + transactions.get(TransactionType.EXPENSE.value, 0)
            + transfers_out
        )
        return account.initial_balance + incoming - outgoing
