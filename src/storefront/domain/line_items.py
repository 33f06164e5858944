"""Line-item amount and document totals calculations.

Rounding discipline: each line amount is rounded to whole cents, the
subtotal is the sum of those rounded amounts, and tax is accumulated
exactly across lines and rounded once.
"""

from dataclasses import replace
from decimal import Decimal
from typing import Iterable

from storefront.domain.entities import DocumentTotals, LineItem
from storefront.utils.amount_parser import MAX_STORED_CENTS, exact_context, round_cents

HUNDRED = Decimal(100)


def _unrounded_line_amount(item: LineItem) -> Decimal:
    quantity = Decimal(item.quantity)
    unit_price = Decimal(item.unit_price)
    discount = Decimal(item.discount_percent)
    with exact_context(quantity, unit_price, discount, HUNDRED):
        return quantity * unit_price * (HUNDRED - discount) / HUNDRED


def compute_line_amount(item: LineItem) -> int:
    """Return quantity x unit price less discount, in whole cents."""
    return round_cents(_unrounded_line_amount(item))


def with_amount(item: LineItem) -> LineItem:
    """Return a copy of ``item`` whose amount matches its other fields."""
    return replace(item, amount=compute_line_amount(item))


def line_item_errors(item: LineItem) -> dict[str, str]:
    """Validate a line item.

    Returns:
        Mapping of field name to error message; empty when the line is valid.
        A line whose amount cannot be stored is reported under "amount".
    """
    errors: dict[str, str] = {}
    if item.quantity <= 0:
        errors["quantity"] = "Quantity must be greater than 0"
    if item.unit_price < 0:
        errors["unit_price"] = "Unit price cannot be negative"
    if not (0 <= item.discount_percent <= 100):
        errors["discount_percent"] = "Discount must be between 0 and 100"
    if item.tax_rate_percent < 0:
        errors["tax_rate_percent"] = "Tax rate cannot be negative"
    if item.quantity_received < 0:
        errors["quantity_received"] = "Quantity received cannot be negative"
    if not errors and abs(compute_line_amount(item)) > MAX_STORED_CENTS:
        errors["amount"] = "Line amount is too large"
    return errors


def _line_tax(amount: int, rate: Decimal) -> Decimal:
    cents = Decimal(amount)
    rate = Decimal(rate)
    with exact_context(cents, rate, HUNDRED):
        return cents * rate / HUNDRED


def compute_document_totals(items: Iterable[LineItem], adjustment: int = 0) -> DocumentTotals:
    """Aggregate line items into subtotal, tax and total.

    Args:
        items: Line items of the document
        adjustment: Flat cost added after tax (e.g. transport), in cents

    Returns:
        DocumentTotals in cents
    """
    subtotal = 0
    line_taxes = []
    for item in items:
        amount = compute_line_amount(item)
        subtotal += amount
        line_taxes.append(_line_tax(amount, item.tax_rate_percent))

    with exact_context(*line_taxes):
        tax = sum(line_taxes, Decimal(0))
    tax_amount = round_cents(tax)
    return DocumentTotals(
        subtotal=subtotal,
        tax_amount=tax_amount,
        total_amount=subtotal + tax_amount + adjustment,
    )
