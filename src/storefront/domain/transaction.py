"""Standalone transaction and transfer domain service."""

import logging
from datetime import date
from typing import Optional

from storefront.database.base import Database
from storefront.domain.entities import Transaction, TransactionType, Transfer
from storefront.domain.errors import (
    NotFoundError,
    ValidationError,
    account_not_found,
    transaction_not_found,
    transfer_not_found,
)
from storefront.utils.amount_parser import to_stored_cents

logger = logging.getLogger(__name__)


def _positive_amount(amount: str | int) -> int:
    cents = to_stored_cents(amount)
    if cents <= 0:
        raise ValidationError("Amount must be greater than 0")
    return cents


def parse_transaction_type(value: TransactionType | str) -> TransactionType:
    """Parse a transaction type name such as "income".

    Raises:
        ValidationError: If the name is not a transaction type
    """
    if isinstance(value, TransactionType):
        return value
    try:
        return TransactionType(str(value).strip().lower())
    except ValueError:
        known = ", ".join(t.value for t in TransactionType)
        raise ValidationError(f"Unknown transaction type '{value}'. Use one of: {known}")


class TransactionService:
    """Service for income, expenses and transfers outside of invoices and bills."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db

    def _require_account(self, account_id: int) -> None:
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

    def create_transaction(
        self,
        account_id: int,
        transaction_type: TransactionType | str,
        amount: str | int,
        category: str,
        txn_date: Optional[date] = None,
        description: Optional[str] = None,
        reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Record income received into, or an expense paid from, an account.

        Args:
            account_id: Account the money moves through
            transaction_type: income or expense
            amount: Positive amount as entered, e.g. "49.90"
            category: Free-text category such as "Rent" or "Sales"
            txn_date: Defaults to today
            description: Optional description
            reference: Optional external reference number
            notes: Optional notes

        Returns:
            Transaction ID

        Raises:
            ValidationError: If the type, amount or category is invalid
            NotFoundError: If the account doesn't exist
        """
        transaction_type = parse_transaction_type(transaction_type)
        cents = _positive_amount(amount)
        if not category or not category.strip():
            raise ValidationError("Category is required")
        self._require_account(account_id)

        transaction_id = self.db.create_transaction(
            account_id=account_id,
            transaction_type=transaction_type.value,
            amount=cents,
            category=category.strip(),
            date=txn_date or date.today(),
            description=description,
            reference=reference,
            notes=notes,
        )
        logger.info(
            f"Recorded {transaction_type.value} of {cents} cents on account {account_id} "
            f"(transaction {transaction_id})"
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        return self.db.get_transaction(transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        transaction_type: Optional[TransactionType | str] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with filters, newest first."""
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            account_id=account_id,
            transaction_type=parse_transaction_type(transaction_type).value if transaction_type else None,
            category=category,
        )

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            NotFoundError: If the transaction doesn't exist
        """
        if self.db.get_transaction(transaction_id) is None:
            raise NotFoundError(transaction_not_found(transaction_id))
        self.db.delete_transaction(transaction_id)
        logger.info(f"Deleted transaction {transaction_id}")

    def create_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: str | int,
        transfer_date: Optional[date] = None,
        description: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> int:
        """Move money from one account to another.

        Raises:
            ValidationError: If the amount is invalid or both accounts are the same
            NotFoundError: If either account doesn't exist
        """
        cents = _positive_amount(amount)
        if from_account_id == to_account_id:
            raise ValidationError("Cannot transfer to the same account")
        self._require_account(from_account_id)
        self._require_account(to_account_id)

        transfer_id = self.db.create_transfer(
            from_account_id=from_account_id,
            to_account_id=to_account_id,
            amount=cents,
            date=transfer_date or date.today(),
            description=description,
            reference=reference,
        )
        logger.info(f"Transferred {cents} cents from account {from_account_id} to {to_account_id}")
        return transfer_id

    def get_transfer(self, transfer_id: int) -> Optional[Transfer]:
        return self.db.get_transfer(transfer_id)

    def list_transfers(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transfer]:
        """List transfers, newest first."""
        return self.db.list_transfers(account_id=account_id, start_date=start_date, end_date=end_date)

    def delete_transfer(self, transfer_id: int) -> None:
        if self.db.get_transfer(transfer_id) is None:
            raise NotFoundError(transfer_not_found(transfer_id))
        self.db.delete_transfer(transfer_id)
        logger.info(f"Deleted transfer {transfer_id}")
