"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so enum values and the JSON item
payload are decoded in one place.
"""

from storefront.domain import entities as domain
from storefront.domain.document_form import line_item_from_dict
from storefront.database.models import (
    AccountCategory as ORMAccountCategory,
    Account as ORMAccount,
    Product as ORMProduct,
    Document as ORMDocument,
    Transaction as ORMTransaction,
    Transfer as ORMTransfer,
)


def account_category_to_domain(orm_category: ORMAccountCategory) -> domain.AccountCategory:
    """Convert SQLAlchemy AccountCategory model to domain AccountCategory entity."""
    return domain.AccountCategory(
        id=orm_category.id,
        name=orm_category.name,
        type=domain.AccountType(orm_category.type),
        description=orm_category.description,
        is_system=orm_category.is_system,
        created_at=orm_category.created_at,
    )


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        category_id=orm_account.category_id,
        name=orm_account.name,
        description=orm_account.description,
        initial_balance=orm_account.initial_balance,
        is_active=orm_account.is_active,
        created_at=orm_account.created_at,
    )


def product_to_domain(orm_product: ORMProduct) -> domain.Product:
    """Convert SQLAlchemy Product model to domain Product entity."""
    return domain.Product(
        id=orm_product.id,
        name=orm_product.name,
        description=orm_product.description,
        price=orm_product.price,
        sku=orm_product.sku,
        inventory=orm_product.inventory,
        in_stock=orm_product.in_stock,
        created_at=orm_product.created_at,
    )


def document_to_domain(orm_document: ORMDocument) -> domain.FinanceDocument:
    """Convert SQLAlchemy Document model to domain FinanceDocument entity."""
    return domain.FinanceDocument(
        id=orm_document.id,
        document_type=domain.DocumentType(orm_document.document_type),
        document_number=orm_document.document_number,
        account_id=orm_document.account_id,
        contact_name=orm_document.contact_name,
        issue_date=orm_document.issue_date,
        due_date=orm_document.due_date,
        status=domain.DocumentStatus(orm_document.status),
        subtotal=orm_document.subtotal,
        tax_amount=orm_document.tax_amount,
        adjustment=orm_document.adjustment,
        total_amount=orm_document.total_amount,
        payment_received=orm_document.payment_received,
        notes=orm_document.notes,
        created_at=orm_document.created_at,
        items=tuple(line_item_from_dict(item) for item in (orm_document.items or [])),
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        type=domain.TransactionType(orm_transaction.type),
        amount=orm_transaction.amount,
        category=orm_transaction.category,
        date=orm_transaction.date,
        description=orm_transaction.description,
        reference=orm_transaction.reference,
        notes=orm_transaction.notes,
        created_at=orm_transaction.created_at,
    )


def transfer_to_domain(orm_transfer: ORMTransfer) -> domain.Transfer:
    """Convert SQLAlchemy Transfer model to domain Transfer entity."""
    return domain.Transfer(
        id=orm_transfer.id,
        from_account_id=orm_transfer.from_account_id,
        to_account_id=orm_transfer.to_account_id,
        amount=orm_transfer.amount,
        date=orm_transfer.date,
        description=orm_transfer.description,
        reference=orm_transfer.reference,
        created_at=orm_transfer.created_at,
    )
