"""Purchase bill status derived from payments and received quantities."""

from decimal import Decimal
from enum import Enum
from typing import Iterable

from storefront.domain.entities import DocumentStatus, FinanceDocument, LineItem


class BillStatus(str, Enum):
    """Combined payment and receiving status of a purchase bill."""

    DRAFT = "draft"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    PARTIALLY_RECEIVED = "partially_received"
    RECEIVED = "received"
    PAID_RECEIVED = "paid_received"
    PAID_PARTIALLY_RECEIVED = "paid_partially_received"
    PARTIALLY_PAID_RECEIVED = "partially_paid_received"
    PARTIALLY_PAID_PARTIALLY_RECEIVED = "partially_paid_partially_received"
    CANCELLED = "cancelled"

    @property
    def label(self) -> str:
        return STATUS_LABELS[self]


STATUS_LABELS = {
    BillStatus.DRAFT: "Draft",
    BillStatus.PARTIALLY_PAID: "Partially Paid",
    BillStatus.PAID: "Paid",
    BillStatus.PARTIALLY_RECEIVED: "Partially Received",
    BillStatus.RECEIVED: "Received",
    BillStatus.PAID_RECEIVED: "Paid & Received",
    BillStatus.PAID_PARTIALLY_RECEIVED: "Paid & Partially Received",
    BillStatus.PARTIALLY_PAID_RECEIVED: "Partially Paid & Received",
    BillStatus.PARTIALLY_PAID_PARTIALLY_RECEIVED: "Partially Paid & Partially Received",
    BillStatus.CANCELLED: "Cancelled",
}

# (payment, receiving) -> status; each dimension is "none", "partial" or "full"
_COMBINED = {
    ("none", "none"): BillStatus.DRAFT,
    ("full", "full"): BillStatus.PAID_RECEIVED,
    ("full", "partial"): BillStatus.PAID_PARTIALLY_RECEIVED,
    ("partial", "full"): BillStatus.PARTIALLY_PAID_RECEIVED,
    ("partial", "partial"): BillStatus.PARTIALLY_PAID_PARTIALLY_RECEIVED,
    ("full", "none"): BillStatus.PAID,
    ("partial", "none"): BillStatus.PARTIALLY_PAID,
    ("none", "full"): BillStatus.RECEIVED,
    ("none", "partial"): BillStatus.PARTIALLY_RECEIVED,
}


def _payment_level(grand_total: int, total_paid: int) -> str:
    if total_paid >= grand_total and grand_total > 0:
        return "full"
    if 0 < total_paid < grand_total:
        return "partial"
    return "none"


def _receiving_level(items: Iterable[LineItem]) -> str:
    ordered = Decimal(0)
    received = Decimal(0)
    for item in items:
        ordered += item.quantity or 0
        received += item.quantity_received or 0

    if received >= ordered and ordered > 0:
        return "full"
    if 0 < received < ordered:
        return "partial"
    return "none"


def calculate_bill_status(
    grand_total: int,
    total_paid: int,
    items: Iterable[LineItem],
    is_cancelled: bool = False,
) -> BillStatus:
    """Calculate the status of a purchase bill.

    Args:
        grand_total: Bill total in cents
        total_paid: Amount paid so far in cents
        items: Bill line items with ordered and received quantities
        is_cancelled: Cancelled bills always report CANCELLED

    Returns:
        BillStatus combining the payment and receiving dimensions
    """
    if is_cancelled:
        return BillStatus.CANCELLED

    key = (_payment_level(grand_total, total_paid), _receiving_level(items))
    return _COMBINED[key]


def bill_status(document: FinanceDocument) -> BillStatus:
    """Calculate the status of a persisted bill."""
    return calculate_bill_status(
        grand_total=document.total_amount,
        total_paid=document.payment_received,
        items=document.items,
        is_cancelled=document.status == DocumentStatus.CANCELLED,
    )
