"""Domain layer for storefront application.

Services are imported from their modules (``storefront.domain.account``,
``storefront.domain.document``, ...); this package only re-exports the
plain entities and errors so that lower layers can import it freely.
"""

from storefront.domain.entities import (
    Account,
    AccountCategory,
    AccountType,
    DocumentStatus,
    DocumentTotals,
    DocumentType,
    FinanceDocument,
    FinancialSummary,
    LineItem,
    Product,
    SummaryLine,
    Transaction,
    TransactionType,
    Transfer,
)
from storefront.domain.errors import DomainError, ValidationError, InvalidAmountError

__all__ = [
    "Account",
    "AccountCategory",
    "AccountType",
    "DocumentStatus",
    "DocumentTotals",
    "DocumentType",
    "FinanceDocument",
    "FinancialSummary",
    "LineItem",
    "Product",
    "SummaryLine",
    "Transaction",
    "TransactionType",
    "Transfer",
    "DomainError",
    "ValidationError",
    "InvalidAmountError",
]
