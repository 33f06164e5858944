"""Editable invoice/bill state and the events that change it.

A document under edit is an immutable ``DocumentState``. Every user action
is an event, and ``reduce(state, event)`` returns the next state with its
totals already recomputed. Input that cannot be committed (unparseable or
out-of-range text) is kept as a draft with a field error; the committed
value, and therefore the totals, stay as they were until the input is
corrected.
"""

from dataclasses import dataclass, field, replace
from decimal import Decimal, InvalidOperation
from enum import Enum
from types import MappingProxyType
from typing import Any, Mapping, Optional, Union

from storefront.domain.entities import (
    DocumentStatus,
    DocumentTotals,
    FinanceDocument,
    LineItem,
    Product,
)
from storefront.domain.errors import ValidationError
from storefront.domain.line_items import compute_document_totals, line_item_errors, with_amount
from storefront.utils.amount_parser import MAX_AMOUNT_DIGITS, MAX_STORED_CENTS, to_stored_cents


class FormPhase(str, Enum):
    """Whether the totals reflect the current items."""

    EDITING_ITEMS = "editing-items"
    TOTALS_CONSISTENT = "totals-consistent"


def _frozen(mapping: Optional[Mapping[str, str]] = None) -> Mapping[str, str]:
    return MappingProxyType(dict(mapping or {}))


@dataclass(frozen=True)
class DocumentState:
    """Snapshot of a document under edit. All money is in cents."""

    items: tuple[LineItem, ...] = ()
    adjustment: int = 0
    payment_received: int = 0
    status: DocumentStatus = DocumentStatus.DRAFT
    totals: DocumentTotals = DocumentTotals()
    phase: FormPhase = FormPhase.TOTALS_CONSISTENT
    drafts: Mapping[str, str] = field(default_factory=_frozen)
    errors: Mapping[str, str] = field(default_factory=_frozen)

    @property
    def remaining(self) -> int:
        return max(self.totals.total_amount - self.payment_received, 0)


# Events


@dataclass(frozen=True)
class AddLineItem:
    item: Optional[LineItem] = None


@dataclass(frozen=True)
class UpdateLineItem:
    index: int
    field: str
    value: Any


@dataclass(frozen=True)
class ChooseProduct:
    index: int
    product: Product


@dataclass(frozen=True)
class RemoveLineItem:
    index: int


@dataclass(frozen=True)
class SetAdjustment:
    value: Any


@dataclass(frozen=True)
class SetPaymentReceived:
    value: Any


@dataclass(frozen=True)
class SetStatus:
    status: Union[DocumentStatus, str]


DocumentEvent = Union[
    AddLineItem,
    UpdateLineItem,
    ChooseProduct,
    RemoveLineItem,
    SetAdjustment,
    SetPaymentReceived,
    SetStatus,
]


def item_field_key(index: int, field_name: str) -> str:
    """Key used in ``drafts``/``errors`` for a line item field."""
    return f"items.{index}.{field_name}"


def parse_number(value: Any) -> Decimal:
    """Parse a quantity or percentage.

    Raises:
        ValidationError: If value is blank or not a finite number
    """
    if isinstance(value, bool):
        raise ValidationError(f"'{value}' is not a number")
    if isinstance(value, Decimal):
        number = value
    elif isinstance(value, float):
        number = Decimal(str(value))
    elif isinstance(value, int):
        number = Decimal(value)
    else:
        text = str(value).strip().rstrip("%").strip()
        if not text:
            raise ValidationError("A number is required")
        try:
            number = Decimal(text)
        except InvalidOperation:
            raise ValidationError(f"'{value}' is not a number")
    if not number.is_finite():
        raise ValidationError(f"'{value}' is not a number")
    if number.adjusted() >= MAX_AMOUNT_DIGITS:
        raise ValidationError(f"'{value}' is too large")
    return number


def _parse_product_id(value: Any) -> Optional[int]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    try:
        product_id = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"'{value}' is not a product ID")
    if product_id <= 0:
        raise ValidationError("Please select a product")
    return product_id


def _parse_description(value: Any) -> str:
    return "" if value is None else str(value).strip()


FIELD_PARSERS = {
    "product_id": _parse_product_id,
    "description": _parse_description,
    "quantity": parse_number,
    "unit_price": to_stored_cents,
    "discount_percent": parse_number,
    "tax_rate_percent": parse_number,
    "quantity_received": parse_number,
}


def _recompute(state: DocumentState) -> DocumentState:
    totals = compute_document_totals(state.items, state.adjustment)
    return replace(state, totals=totals, phase=FormPhase.TOTALS_CONSISTENT)


def _check_index(state: DocumentState, index: int) -> None:
    if not 0 <= index < len(state.items):
        raise ValidationError(f"Line item {index} does not exist")


def _set_draft(state: DocumentState, key: str, raw: Any, message: str) -> DocumentState:
    drafts = dict(state.drafts)
    errors = dict(state.errors)
    drafts[key] = "" if raw is None else str(raw)
    errors[key] = message
    return replace(state, drafts=_frozen(drafts), errors=_frozen(errors))


def _clear_draft(state: DocumentState, *keys: str) -> DocumentState:
    drafts = {k: v for k, v in state.drafts.items() if k not in keys}
    errors = {k: v for k, v in state.errors.items() if k not in keys}
    return replace(state, drafts=_frozen(drafts), errors=_frozen(errors))


def _replace_item(state: DocumentState, index: int, item: LineItem) -> DocumentState:
    items = list(state.items)
    items[index] = with_amount(item)
    editing = replace(state, items=tuple(items), phase=FormPhase.EDITING_ITEMS)
    return _recompute(editing)


def _add_line_item(state: DocumentState, event: AddLineItem) -> DocumentState:
    item = with_amount(event.item or LineItem())
    editing = replace(state, items=state.items + (item,), phase=FormPhase.EDITING_ITEMS)
    return _recompute(editing)


def _update_line_item(state: DocumentState, event: UpdateLineItem) -> DocumentState:
    _check_index(state, event.index)
    parser = FIELD_PARSERS.get(event.field)
    if parser is None:
        raise ValidationError(f"Unknown line item field '{event.field}'")

    key = item_field_key(event.index, event.field)
    try:
        candidate = replace(state.items[event.index], **{event.field: parser(event.value)})
        errors = line_item_errors(candidate)
        problem = errors.get(event.field) or errors.get("amount")
        if problem:
            raise ValidationError(problem)
    except ValidationError as e:
        return _set_draft(state, key, event.value, str(e))

    return _replace_item(_clear_draft(state, key), event.index, candidate)


def _choose_product(state: DocumentState, event: ChooseProduct) -> DocumentState:
    _check_index(state, event.index)
    candidate = replace(
        state.items[event.index],
        product_id=event.product.id,
        description=event.product.name,
        unit_price=event.product.price,
    )
    cleared = _clear_draft(
        state,
        *(item_field_key(event.index, name) for name in ("product_id", "description", "unit_price")),
    )
    return _replace_item(cleared, event.index, candidate)


def _shift_key(key: str, removed: int) -> Optional[str]:
    if not key.startswith("items."):
        return key
    _, index, field_name = key.split(".", 2)
    position = int(index)
    if position == removed:
        return None
    if position > removed:
        return item_field_key(position - 1, field_name)
    return key


def _reindex(mapping: Mapping[str, str], removed: int) -> Mapping[str, str]:
    shifted = {}
    for key, value in mapping.items():
        new_key = _shift_key(key, removed)
        if new_key is not None:
            shifted[new_key] = value
    return _frozen(shifted)


def _remove_line_item(state: DocumentState, event: RemoveLineItem) -> DocumentState:
    _check_index(state, event.index)
    items = state.items[: event.index] + state.items[event.index + 1 :]
    editing = replace(
        state,
        items=items,
        drafts=_reindex(state.drafts, event.index),
        errors=_reindex(state.errors, event.index),
        phase=FormPhase.EDITING_ITEMS,
    )
    return _recompute(editing)


def _set_adjustment(state: DocumentState, event: SetAdjustment) -> DocumentState:
    try:
        adjustment = to_stored_cents(event.value)
    except ValidationError as e:
        return _set_draft(state, "adjustment", event.value, str(e))
    return _recompute(replace(_clear_draft(state, "adjustment"), adjustment=adjustment))


def infer_status(current: DocumentStatus, payment_received: int, total_amount: int) -> DocumentStatus:
    """Derive a document status from the payment received.

    Full payment marks the document paid and partial payment marks it sent.
    No payment leaves the status alone, a cancelled document stays
    cancelled, and an overdue document stays overdue until fully paid.
    """
    if payment_received <= 0 or current == DocumentStatus.CANCELLED:
        return current
    if payment_received >= total_amount:
        return DocumentStatus.PAID
    if current == DocumentStatus.OVERDUE:
        return current
    return DocumentStatus.SENT


def _set_payment_received(state: DocumentState, event: SetPaymentReceived) -> DocumentState:
    try:
        payment = to_stored_cents(event.value)
        if payment < 0:
            raise ValidationError("Payment amount cannot be negative")
    except ValidationError as e:
        return _set_draft(state, "payment_received", event.value, str(e))

    status = infer_status(state.status, payment, state.totals.total_amount)
    return replace(_clear_draft(state, "payment_received"), payment_received=payment, status=status)


def _set_status(state: DocumentState, event: SetStatus) -> DocumentState:
    try:
        status = DocumentStatus(event.status)
    except ValueError:
        raise ValidationError(f"Unknown status '{event.status}'")
    return replace(state, status=status)


_HANDLERS = {
    AddLineItem: _add_line_item,
    UpdateLineItem: _update_line_item,
    ChooseProduct: _choose_product,
    RemoveLineItem: _remove_line_item,
    SetAdjustment: _set_adjustment,
    SetPaymentReceived: _set_payment_received,
    SetStatus: _set_status,
}


def reduce(state: DocumentState, event: DocumentEvent) -> DocumentState:
    """Apply one event to a document state and return the new state."""
    handler = _HANDLERS.get(type(event))
    if handler is None:
        raise TypeError(f"Unsupported document event: {event!r}")
    return handler(state, event)


def reduce_all(state: DocumentState, events) -> DocumentState:
    """Apply events in order."""
    for event in events:
        state = reduce(state, event)
    return state


def validate_document(state: DocumentState) -> list[str]:
    """Return the problems that block submitting the document."""
    problems = [f"{key}: {message}" for key, message in sorted(state.errors.items())]

    if not state.items:
        problems.append("At least one item is required")

    for index, item in enumerate(state.items):
        for name, message in sorted(line_item_errors(item).items()):
            key = item_field_key(index, name)
            if key not in state.errors:
                problems.append(f"{key}: {message}")
        if not item.description and item_field_key(index, "description") not in state.errors:
            problems.append(f"{item_field_key(index, 'description')}: Description is required")

    if state.items and state.totals.total_amount <= 0:
        problems.append("Total amount must be greater than 0")
    totals = state.totals
    if max(abs(totals.subtotal), abs(totals.tax_amount), abs(totals.total_amount)) > MAX_STORED_CENTS:
        problems.append("Total amount is too large")
    if state.payment_received < 0:
        problems.append("Payment amount cannot be negative")

    return problems


def line_item_to_dict(item: LineItem) -> dict[str, Any]:
    """Serialize a line item; money as cents, quantities as decimal strings."""
    return {
        "product_id": item.product_id,
        "description": item.description,
        "quantity": str(item.quantity),
        "unit_price": item.unit_price,
        "discount_percent": str(item.discount_percent),
        "tax_rate_percent": str(item.tax_rate_percent),
        "amount": item.amount,
        "quantity_received": str(item.quantity_received),
    }


def line_item_from_dict(data: Mapping[str, Any]) -> LineItem:
    """Rebuild a line item serialized by ``line_item_to_dict``."""
    return LineItem(
        product_id=data.get("product_id"),
        description=data.get("description") or "",
        quantity=Decimal(str(data.get("quantity", 1))),
        unit_price=int(data.get("unit_price", 0)),
        discount_percent=Decimal(str(data.get("discount_percent", 0))),
        tax_rate_percent=Decimal(str(data.get("tax_rate_percent", 0))),
        amount=int(data.get("amount", 0)),
        quantity_received=Decimal(str(data.get("quantity_received", 0))),
    )


def build_payload(state: DocumentState, header: Optional[Mapping[str, Any]] = None) -> dict[str, Any]:
    """Assemble the submission payload for a document.

    Args:
        state: Document state to submit
        header: Extra fields (document number, account, contact, dates)

    Returns:
        JSON-ready dict; every monetary field is an integer of cents

    Raises:
        ValidationError: If the document has unresolved problems
    """
    problems = validate_document(state)
    if problems:
        raise ValidationError("; ".join(problems))

    payload = dict(header or {})
    payload.update(
        {
            "status": state.status.value,
            "items": [line_item_to_dict(item) for item in state.items],
            "subtotal": state.totals.subtotal,
            "tax_amount": state.totals.tax_amount,
            "adjustment": state.adjustment,
            "total_amount": state.totals.total_amount,
            "payment_received": state.payment_received,
        }
    )
    return payload


def state_from_document(document: FinanceDocument) -> DocumentState:
    """Load a persisted document back into an editable state."""
    state = DocumentState(
        items=tuple(with_amount(item) for item in document.items),
        adjustment=document.adjustment,
        payment_received=document.payment_received,
        status=document.status,
    )
    return _recompute(state)
