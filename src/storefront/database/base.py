"""Abstract database interface."""

from abc import ABC, abstractmethod
from typing import Optional, Any
from datetime import date

# Import entities directly to avoid circular import through domain services
from storefront.domain.entities import (
    AccountCategory,
    Account,
    Product,
    FinanceDocument,
    Transaction,
    Transfer,
)


class Database(ABC):
    """Abstract database interface for storefront."""

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account category operations
    @abstractmethod
    def create_account_category(
        self,
        name: str,
        category_type: str,
        description: Optional[str] = None,
        is_system: bool = False,
    ) -> int:
        """Create an account category. Returns category ID."""
        pass

    @abstractmethod
    def get_account_category(self, category_id: int) -> Optional[AccountCategory]:
        """Get account category by ID."""
        pass

    @abstractmethod
    def get_account_category_by_name(self, name: str) -> Optional[AccountCategory]:
        """Get account category by name."""
        pass

    @abstractmethod
    def list_account_categories(self, category_type: Optional[str] = None) -> list[AccountCategory]:
        """List account categories, optionally filtered by type."""
        pass

    @abstractmethod
    def delete_account_category(self, category_id: int) -> None:
        """Delete an account category."""
        pass

    @abstractmethod
    def get_category_account_count(self, category_id: int) -> int:
        """Get count of accounts in a category."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        category_id: int,
        name: str,
        description: Optional[str] = None,
        initial_balance: int = 0,
    ) -> int:
        """Create a new account. Returns account ID."""
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def list_accounts(
        self, category_id: Optional[int] = None, active_only: bool = False
    ) -> list[Account]:
        """List accounts, optionally filtered by category or active flag."""
        pass

    @abstractmethod
    def update_account(
        self,
        account_id: int,
        name: Optional[str] = None,
        description: Optional[str] = None,
        is_active: Optional[bool] = None,
    ) -> None:
        """Update account fields. None leaves a field unchanged."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_document_count(self, account_id: int) -> int:
        """Get count of documents booked to an account."""
        pass

    @abstractmethod
    def get_account_document_totals(self, account_id: int) -> dict[str, int]:
        """Sum non-cancelled document totals per document type for an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Get count of transactions and transfers that touch an account."""
        pass

    # Product operations
    @abstractmethod
    def create_product(
        self,
        name: str,
        price: int,
        description: Optional[str] = None,
        sku: Optional[str] = None,
        inventory: int = 0,
    ) -> int:
        """Create a product. Returns product ID."""
        pass

    @abstractmethod
    def get_product(self, product_id: int) -> Optional[Product]:
        """Get product by ID."""
        pass

    @abstractmethod
    def list_products(self) -> list[Product]:
        """List all products."""
        pass

    @abstractmethod
    def update_product_price(self, product_id: int, price: int) -> None:
        """Update product price (cents)."""
        pass

    @abstractmethod
    def delete_product(self, product_id: int) -> None:
        """Delete a product."""
        pass

    # Document operations
    @abstractmethod
    def create_document(
        self,
        document_type: str,
        document_number: str,
        account_id: int,
        issue_date: date,
        items: list[dict[str, Any]],
        subtotal: int,
        tax_amount: int,
        adjustment: int,
        total_amount: int,
        payment_received: int = 0,
        status: str = "draft",
        contact_name: Optional[str] = None,
        due_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create an invoice or bill. Returns document ID."""
        pass

    @abstractmethod
    def get_document(self, document_id: int) -> Optional[FinanceDocument]:
        """Get document by ID."""
        pass

    @abstractmethod
    def get_document_by_number(self, document_number: str) -> Optional[FinanceDocument]:
        """Get document by document number."""
        pass

    @abstractmethod
    def list_documents(
        self,
        document_type: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[str] = None,
        account_id: Optional[int] = None,
    ) -> list[FinanceDocument]:
        """List documents with optional filters, ordered by issue date."""
        pass

    @abstractmethod
    def update_document_payment(self, document_id: int, payment_received: int, status: str) -> None:
        """Update payment received (cents) and status of a document."""
        pass

    @abstractmethod
    def update_document(
        self,
        document_id: int,
        items: list[dict[str, Any]],
        subtotal: int,
        tax_amount: int,
        adjustment: int,
        total_amount: int,
        payment_received: int,
        status: str,
        contact_name: Optional[str] = None,
        due_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> None:
        """Replace the items, totals and payment of a document.

        None leaves a header field (contact, due date, notes) unchanged.
        """
        pass

    @abstractmethod
    def update_document_status(self, document_id: int, status: str) -> None:
        """Update document status."""
        pass

    @abstractmethod
    def delete_document(self, document_id: int) -> None:
        """Delete a document."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        transaction_type: str,
        amount: int,
        category: str,
        date: date,
        description: Optional[str] = None,
        reference: Optional[str] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Create an income or expense transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
        transaction_type: Optional[str] = None,
        category: Optional[str] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def get_account_transaction_totals(self, account_id: int) -> dict[str, int]:
        """Sum transaction amounts per transaction type for an account."""
        pass

    # Transfer operations
    @abstractmethod
    def create_transfer(
        self,
        from_account_id: int,
        to_account_id: int,
        amount: int,
        date: date,
        description: Optional[str] = None,
        reference: Optional[str] = None,
    ) -> int:
        """Create a transfer between accounts. Returns transfer ID."""
        pass

    @abstractmethod
    def get_transfer(self, transfer_id: int) -> Optional[Transfer]:
        """Get transfer by ID."""
        pass

    @abstractmethod
    def list_transfers(
        self,
        account_id: Optional[int] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> list[Transfer]:
        """List transfers, optionally only those touching one account, newest first."""
        pass

    @abstractmethod
    def delete_transfer(self, transfer_id: int) -> None:
        """Delete a transfer."""
        pass

    @abstractmethod
    def get_account_transfer_totals(self, account_id: int) -> tuple[int, int]:
        """Sum transfers into and out of an account. Returns (incoming, outgoing)."""
        pass
