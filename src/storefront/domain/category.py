"""Account category domain service."""

import logging
from typing import Optional

from storefront.database.base import Database
from storefront.domain.entities import AccountCategory, AccountType
from storefront.domain.errors import (
    ConflictError,
    DependencyError,
    NotFoundError,
    ValidationError,
    category_delete_blocked,
    category_not_found,
)

logger = logging.getLogger(__name__)


def parse_account_type(value: AccountType | str) -> AccountType:
    """Convert a type name such as "Asset" to AccountType.

    Raises:
        ValidationError: If value is not one of the five account types
    """
    if isinstance(value, AccountType):
        return value
    try:
        return AccountType(value.strip().lower())
    except ValueError:
        allowed = ", ".join(t.value for t in AccountType)
        raise ValidationError(f"Unknown account type '{value}'. Expected one of: {allowed}")


class AccountCategoryService:
    """Service for managing chart-of-accounts categories."""

    def __init__(self, db: Database):
        """Initialize category service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_category(
        self,
        name: str,
        category_type: AccountType | str,
        description: Optional[str] = None,
        is_system: bool = False,
    ) -> int:
        """Create a category.

        Args:
            name: Category name
            category_type: Account type of the category
            description: Optional description
            is_system: System categories cannot be deleted

        Returns:
            Category ID

        Raises:
            ValidationError: If name is empty or type is unknown
            ConflictError: If a category with the same name exists
        """
        if not name or not name.strip():
            raise ValidationError("Category name is required")
        account_type = parse_account_type(category_type)

        if self.db.get_account_category_by_name(name) is not None:
            raise ConflictError(f"Category with name '{name}' already exists")

        category_id = self.db.create_account_category(
            name=name,
            category_type=account_type.value,
            description=description,
            is_system=is_system,
        )
        logger.info(f"Created {account_type.value} category '{name}' (ID {category_id})")
        return category_id

    def get_category(self, category_id: int) -> Optional[AccountCategory]:
        """Get category by ID."""
        return self.db.get_account_category(category_id)

    def require_category(self, category_id: int) -> AccountCategory:
        """Get category by ID, raising when it is missing."""
        category = self.db.get_account_category(category_id)
        if category is None:
            raise NotFoundError(category_not_found(category_id))
        return category

    def get_category_by_name(self, name: str) -> Optional[AccountCategory]:
        """Get category by name."""
        return self.db.get_account_category_by_name(name)

    def list_categories(self, category_type: Optional[AccountType | str] = None) -> list[AccountCategory]:
        """List categories, optionally of one account type."""
        type_value = None
        if category_type is not None:
            type_value = parse_account_type(category_type).value
        return self.db.list_account_categories(category_type=type_value)

    def delete_category(self, category_id: int) -> None:
        """Delete a category.

        Raises:
            NotFoundError: If category doesn't exist
            DependencyError: If category is a system category or has accounts
        """
        category = self.require_category(category_id)
        if category.is_system:
            logger.debug(f"Refused to delete system category {category_id}")
            raise DependencyError(f"Category '{category.name}' is a system category and cannot be deleted")

        account_count = self.db.get_category_account_count(category_id)
        if account_count > 0:
            raise DependencyError(category_delete_blocked(category_id, account_count))

        self.db.delete_account_category(category_id)
        logger.info(f"Deleted category '{category.name}' (ID {category_id})")
