"""Invoice and bill domain service."""

import logging
import random
from datetime import date
from typing import Iterable, Optional

from storefront.database.base import Database
from storefront.domain.document_form import (
    DocumentEvent,
    DocumentState,
    SetPaymentReceived,
    build_payload,
    reduce,
    reduce_all,
    state_from_document,
)
from storefront.domain.entities import DocumentStatus, DocumentType, FinanceDocument
from storefront.domain.errors import (
    ConflictError,
    NotFoundError,
    ValidationError,
    account_not_found,
    document_not_found,
    duplicate_document_number,
    product_not_found,
)
from storefront.utils.date_parser import default_due_date

logger = logging.getLogger(__name__)

# Random draws tried before giving up on a generated number
MAX_NUMBER_ATTEMPTS = 200

DOCUMENT_PREFIXES = {
    DocumentType.INVOICE: "INV",
    DocumentType.BILL: "BILL",
}


def generate_document_number(
    document_type: DocumentType,
    on_date: Optional[date] = None,
    rng: Optional[random.Random] = None,
) -> str:
    """Generate a number such as "INV-20240115-0042"."""
    on_date = on_date or date.today()
    rng = rng or random.Random()
    suffix = rng.randrange(10000)
    return f"{DOCUMENT_PREFIXES[DocumentType(document_type)]}-{on_date:%Y%m%d}-{suffix:04d}"


class DocumentService:
    """Service for saving and updating invoices and bills."""

    def __init__(self, db: Database, rng: Optional[random.Random] = None):
        """Initialize document service.

        Args:
            db: Database instance
            rng: Random source for generated document numbers
        """
        self.db = db
        self.rng = rng or random.Random()

    def _unused_number(self, document_type: DocumentType, issue_date: date) -> str:
        for _ in range(MAX_NUMBER_ATTEMPTS):
            number = generate_document_number(document_type, issue_date, self.rng)
            if self.db.get_document_by_number(number) is None:
                return number
            logger.debug(f"Generated document number {number} is taken, retrying")
        raise ConflictError(
            f"Could not find an unused {document_type.value} number for {issue_date}; "
            "please provide one"
        )

    def _check_products(self, state: DocumentState) -> None:
        for index, item in enumerate(state.items):
            if item.product_id is not None and self.db.get_product(item.product_id) is None:
                raise ValidationError(f"items.{index}.product_id: {product_not_found(item.product_id)}")

    def save(
        self,
        document_type: DocumentType | str,
        state: DocumentState,
        account_id: int,
        document_number: Optional[str] = None,
        contact_name: Optional[str] = None,
        issue_date: Optional[date] = None,
        due_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> int:
        """Persist a new invoice or bill from its edited state.

        Args:
            document_type: invoice or bill
            state: Document state with line items and payment
            account_id: Bank or cash account the document is booked to
            document_number: Defaults to a generated number
            contact_name: Customer (invoice) or vendor (bill)
            issue_date: Defaults to today
            due_date: Defaults to issue date plus the payment terms
            notes: Optional notes

        Returns:
            Document ID

        Raises:
            ValidationError: If the state has problems or references unknown products
            NotFoundError: If the account doesn't exist
            ConflictError: If the document number is taken
        """
        document_type = DocumentType(document_type)
        issue_date = issue_date or date.today()
        due_date = due_date or default_due_date(issue_date)
        if self.db.get_account(account_id) is None:
            raise NotFoundError(account_not_found(account_id))

        if document_number is None:
            document_number = self._unused_number(document_type, issue_date)
        elif self.db.get_document_by_number(document_number) is not None:
            raise ConflictError(duplicate_document_number(document_number))
        self._check_products(state)

        payload = build_payload(
            state,
            {
                "document_type": document_type.value,
                "document_number": document_number,
                "account_id": account_id,
                "contact_name": contact_name,
                "issue_date": issue_date,
                "due_date": due_date,
                "notes": notes,
            },
        )
        document_id = self.db.create_document(**payload)
        logger.info(
            f"Saved {document_type.value} {document_number} (ID {document_id}) "
            f"total {payload['total_amount']} cents"
        )
        return document_id

    def get_document(self, document_id: int) -> Optional[FinanceDocument]:
        """Get document by ID."""
        return self.db.get_document(document_id)

    def require_document(self, reference: int | str) -> FinanceDocument:
        """Find a document by document number or ID.

        Text is matched against document numbers first, so a numeric
        document number such as "1001" wins over the document with ID 1001.

        Raises:
            NotFoundError: If no document matches
        """
        document = None
        if not isinstance(reference, int):
            document = self.db.get_document_by_number(str(reference))
        if document is None and str(reference).isdigit():
            document = self.db.get_document(int(reference))
        if document is None:
            raise NotFoundError(document_not_found(reference))
        return document

    def list_documents(
        self,
        document_type: Optional[DocumentType | str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        status: Optional[DocumentStatus | str] = None,
        account_id: Optional[int] = None,
    ) -> list[FinanceDocument]:
        """List documents with filters."""
        return self.db.list_documents(
            document_type=DocumentType(document_type).value if document_type else None,
            start_date=start_date,
            end_date=end_date,
            status=DocumentStatus(status).value if status else None,
            account_id=account_id,
        )

    def update(
        self,
        reference: int | str,
        events: Iterable[DocumentEvent],
        contact_name: Optional[str] = None,
        due_date: Optional[date] = None,
        notes: Optional[str] = None,
    ) -> FinanceDocument:
        """Apply edit events to a stored document and save the result.

        The document is loaded back into an editable state, the events are
        replayed on it and the recomputed items and totals are written back.
        Status is only re-derived by payment events.

        Args:
            reference: Document number or ID
            events: Edits such as UpdateLineItem or SetAdjustment
            contact_name: New customer or vendor name
            due_date: New due date
            notes: New notes

        Returns:
            The updated document

        Raises:
            ValidationError: If the edited document has problems
            NotFoundError: If the document doesn't exist
        """
        document = self.require_document(reference)
        state = reduce_all(state_from_document(document), events)
        self._check_products(state)
        payload = build_payload(state)

        self.db.update_document(
            document.id, contact_name=contact_name, due_date=due_date, notes=notes, **payload
        )
        logger.info(
            f"Updated {document.document_type.value} {document.document_number}: "
            f"total {document.total_amount} -> {payload['total_amount']} cents"
        )
        return self.db.get_document(document.id)

    def record_payment(self, reference: int | str, amount: str | int) -> FinanceDocument:
        """Set the payment received on a document and re-derive its status.

        Args:
            reference: Document ID or number
            amount: Total payment received so far, as entered

        Returns:
            The updated document

        Raises:
            ValidationError: If amount is not a valid non-negative amount
        """
        document = self.require_document(reference)
        state = reduce(state_from_document(document), SetPaymentReceived(amount))
        if "payment_received" in state.errors:
            raise ValidationError(state.errors["payment_received"])

        self.db.update_document_payment(
            document.id, payment_received=state.payment_received, status=state.status.value
        )
        logger.info(
            f"Recorded payment {state.payment_received} on {document.document_number}; "
            f"status {document.status.value} -> {state.status.value}"
        )
        return self.db.get_document(document.id)

    def set_status(self, reference: int | str, status: DocumentStatus | str) -> None:
        """Manually set a document status."""
        document = self.require_document(reference)
        try:
            new_status = DocumentStatus(status)
        except ValueError:
            raise ValidationError(f"Unknown status '{status}'")
        self.db.update_document_status(document.id, new_status.value)
        logger.info(f"{document.document_number} status set to {new_status.value}")

    def delete_document(self, reference: int | str) -> None:
        document = self.require_document(reference)
        self.db.delete_document(document.id)
        logger.info(f"Deleted {document.document_type.value} {document.document_number}")
