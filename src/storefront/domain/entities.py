"""Domain model entities for storefront.

These are pure data classes representing back-office concepts, independent
of database schema. Monetary fields are always integer cents.
"""

from dataclasses import dataclass, field
from datetime import datetime, date
from decimal import Decimal
from enum import Enum
from typing import Optional


class AccountType(str, Enum):
    """Chart-of-accounts category types."""

    ASSET = "asset"
    LIABILITY = "liability"
    EQUITY = "equity"
    INCOME = "income"
    EXPENSE = "expense"

    @property
    def label(self) -> str:
        return {
            AccountType.ASSET: "Assets",
            AccountType.LIABILITY: "Liabilities",
            AccountType.EQUITY: "Equity",
            AccountType.INCOME: "Income",
            AccountType.EXPENSE: "Expenses",
        }[self]


class DocumentType(str, Enum):
    """Kinds of priced finance documents."""

    INVOICE = "invoice"
    BILL = "bill"


class DocumentStatus(str, Enum):
    """Lifecycle status of an invoice or bill."""

    DRAFT = "draft"
    SENT = "sent"
    PAID = "paid"
    OVERDUE = "overdue"
    CANCELLED = "cancelled"


@dataclass(frozen=True)
class AccountCategory:
    """Chart-of-accounts category domain entity."""

    id: int
    name: str
    type: AccountType
    description: Optional[str]
    is_system: bool
    created_at: datetime


@dataclass(frozen=True)
class Account:
    """Ledger account domain entity."""

    id: int
    category_id: int
    name: str
    description: Optional[str]
    initial_balance: int
    is_active: bool
    created_at: datetime


@dataclass(frozen=True)
class Product:
    """Catalog product domain entity."""

    id: int
    name: str
    description: Optional[str]
    price: int
    sku: Optional[str]
    inventory: int
    in_stock: bool
    created_at: datetime


@dataclass(frozen=True)
class LineItem:
    """One priced row of an invoice or bill.

    ``unit_price`` and ``amount`` are cents. ``amount`` is derived from the
    other fields by the line-item calculator and is never edited directly.
    """

    product_id: Optional[int] = None
    description: str = ""
    quantity: Decimal = Decimal(1)
    unit_price: int = 0
    discount_percent: Decimal = Decimal(0)
    tax_rate_percent: Decimal = Decimal(0)
    amount: int = 0
    quantity_received: Decimal = Decimal(0)


@dataclass(frozen=True)
class DocumentTotals:
    """Subtotal, tax and total of a document, in cents."""

    subtotal: int = 0
    tax_amount: int = 0
    total_amount: int = 0


@dataclass(frozen=True)
class FinanceDocument:
    """Persisted invoice or bill."""

    id: int
    document_type: DocumentType
    document_number: str
    account_id: int
    contact_name: Optional[str]
    issue_date: date
    due_date: Optional[date]
    status: DocumentStatus
    subtotal: int
    tax_amount: int
    adjustment: int
    total_amount: int
    payment_received: int
    notes: Optional[str]
    created_at: datetime
    items: tuple[LineItem, ...] = field(default_factory=tuple)

    @property
    def balance_due(self) -> int:
        return max(self.total_amount - self.payment_received, 0)


class TransactionType(str, Enum):
    """Direction of a standalone money movement."""

    INCOME = "income"
    EXPENSE = "expense"


@dataclass(frozen=True)
class Transaction:
    """Income or expense booked directly to an account, outside any document.

    ``amount`` is positive cents; ``type`` gives the direction.
    """

    id: int
    account_id: int
    type: TransactionType
    amount: int
    category: str
    date: date
    description: Optional[str]
    reference: Optional[str]
    notes: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class Transfer:
    """Money moved from one account to another."""

    id: int
    from_account_id: int
    to_account_id: int
    amount: int
    date: date
    description: Optional[str]
    reference: Optional[str]
    created_at: datetime


@dataclass(frozen=True)
class SummaryLine:
    """Total of one category in a financial summary, in cents."""

    category: str
    amount: int


@dataclass(frozen=True)
class FinancialSummary:
    """Income and expenses for a period, grouped by category."""

    start_date: Optional[date]
    end_date: Optional[date]
    income: tuple[SummaryLine, ...] = ()
    expenses: tuple[SummaryLine, ...] = ()

    @property
    def total_income(self) -> int:
        return sum(line.amount for line in self.income)

    @property
    def total_expenses(self) -> int:
        return sum(line.amount for line in self.expenses)

    @property
    def net_profit(self) -> int:
        return self.total_income - self.total_expenses

    @property
    def profit_margin(self) -> Decimal:
        """Net profit as a percentage of income, to two places; 0 without income."""
        if self.total_income <= 0:
            return Decimal("0.00")
        return (Decimal(self.net_profit) * 100 / Decimal(self.total_income)).quantize(Decimal("0.01"))
