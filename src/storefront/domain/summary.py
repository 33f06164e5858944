"""Income and expense summary for a period."""

from collections import defaultdict
from datetime import date
from typing import Optional

from storefront.database.base import Database
from storefront.domain.entities import (
    DocumentStatus,
    DocumentType,
    FinancialSummary,
    SummaryLine,
    TransactionType,
)

INVOICE_CATEGORY = "Sales invoices"
BILL_CATEGORY = "Purchase bills"


def _lines(totals: dict[str, int]) -> tuple[SummaryLine, ...]:
    ordered = sorted(totals.items(), key=lambda item: (-abs(item[1]), item[0]))
    return tuple(SummaryLine(category, amount) for category, amount in ordered if amount)


class SummaryService:
    """Service for building income and expense summaries."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db

    def build_summary(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        account_id: Optional[int] = None,
    ) -> FinancialSummary:
        """Group income and expenses by category.

        Invoices count as income and bills as expenses, each under one
        category of their own; cancelled documents are left out. Transfers
        only move money between accounts and are never part of the summary.

        Args:
            start_date: Optional start date filter
            end_date: Optional end date filter
            account_id: Only money booked to this account

        Returns:
            FinancialSummary with category lines sorted largest first
        """
        income: dict[str, int] = defaultdict(int)
        expenses: dict[str, int] = defaultdict(int)

        for txn in self.db.list_transactions(
            start_date=start_date, end_date=end_date, account_id=account_id
        ):
            target = income if txn.type == TransactionType.INCOME else expenses
            target[txn.category] += txn.amount

        for doc in self.db.list_documents(
            start_date=start_date, end_date=end_date, account_id=account_id
        ):
            if doc.status == DocumentStatus.CANCELLED:
                continue
            if doc.document_type == DocumentType.INVOICE:
                income[INVOICE_CATEGORY] += doc.total_amount
            else:
                expenses[BILL_CATEGORY] += doc.total_amount

        return FinancialSummary(
            start_date=start_date,
            end_date=end_date,
            income=_lines(income),
            expenses=_lines(expenses),
        )
