"""Shared domain error messages and error types."""


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class InvalidAmountError(ValidationError):
    """Text that should be a monetary amount could not be parsed."""


class NotFoundError(DomainError):
    """Requested domain entity does not exist."""


class ConflictError(DomainError):
    """Domain conflict, such as uniqueness violations."""


class DependencyError(DomainError):
    """Operation blocked due to dependent domain data."""


def account_not_found(account_id: int) -> str:
    """Return message for missing account."""
    return f"Account {account_id} not found"


def category_not_found(category_id: int) -> str:
    """Return message for missing account category."""
    return f"Category {category_id} not found"


def product_not_found(product_id: int) -> str:
    """Return message for missing product."""
    return f"Product {product_id} not found"


def document_not_found(document: int | str) -> str:
    """Return message for missing invoice or bill."""
    return f"Document {document} not found"


def duplicate_document_number(document_number: str) -> str:
    """Return message for duplicate document number."""
    return f"Document number '{document_number}' already exists"


def transaction_not_found(transaction_id: int) -> str:
    """Return message for missing transaction."""
    return f"Transaction {transaction_id} not found"


def transfer_not_found(transfer_id: int) -> str:
    """Return message for missing transfer."""
    return f"Transfer {transfer_id} not found"


def _plural(count: int, noun: str) -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def account_delete_blocked(account_id: int, document_count: int, transaction_count: int = 0) -> str:
    """Return message when account has documents or transactions booked to it."""
    held = [
        _plural(count, noun)
        for count, noun in ((document_count, "document"), (transaction_count, "transaction"))
        if count
    ]
    return (
        f"Cannot delete account {account_id}: it has {' and '.join(held)}. "
        "Please delete them or deactivate the account instead."
    )


def category_delete_blocked(category_id: int, account_count: int) -> str:
    """Return message when category still holds accounts."""
    return (
        f"Cannot delete category {category_id}: it has {_plural(account_count, 'account')}. "
        "Please move or delete them first."
    )
