"""Chart of accounts: default chart, grouped report and seeding."""

import logging
from dataclasses import dataclass

from storefront.database.base import Database
from storefront.domain.account import AccountService
from storefront.domain.account_codes import generate_code
from storefront.domain.category import AccountCategoryService
from storefront.domain.entities import Account, AccountCategory, AccountType

logger = logging.getLogger(__name__)

# (category name, type, description, [(account name, description), ...])
DEFAULT_CHART = [
    (
        "Assets",
        AccountType.ASSET,
        "Resources owned by the business",
        [
            ("Cash", "Cash on hand"),
            ("Bank Account", "Primary business checking account"),
            ("Accounts Receivable", "Money owed by customers"),
            ("Inventory", "Products held for sale"),
        ],
    ),
    (
        "Liabilities",
        AccountType.LIABILITY,
        "Debts and obligations owed by the business",
        [
            ("Accounts Payable", "Money owed to suppliers"),
            ("Credit Card", "Business credit card"),
        ],
    ),
    (
        "Equity",
        AccountType.EQUITY,
        "Owner's interest in the business",
        [("Owner's Capital", "Owner's investment in the business")],
    ),
    (
        "Sales Revenue",
        AccountType.INCOME,
        "Revenue from sales and operations",
        [
            ("Online Sales", "Revenue from online sales"),
            ("In-Store Sales", "Revenue from physical store"),
        ],
    ),
    (
        "Expenses",
        AccountType.EXPENSE,
        "Costs incurred in business operations",
        [
            ("Cost of Goods Sold", "Direct costs of products sold"),
            ("Advertising", "Marketing and advertising expenses"),
            ("Shipping & Fulfillment", "Costs of shipping and order fulfillment"),
        ],
    ),
]


@dataclass(frozen=True)
class ChartAccountLine:
    """An account with its display code and current balance."""

    account: Account
    code: str
    balance: int


@dataclass(frozen=True)
class ChartCategoryLine:
    """A category with its code and accounts."""

    category: AccountCategory
    code: str
    accounts: tuple[ChartAccountLine, ...]

    @property
    def total(self) -> int:
        return sum(line.balance for line in self.accounts)


@dataclass(frozen=True)
class ChartSection:
    """All categories of one account type."""

    account_type: AccountType
    categories: tuple[ChartCategoryLine, ...]

    @property
    def total(self) -> int:
        return sum(cat.total for cat in self.categories)


class ChartOfAccountsService:
    """Builds and seeds the chart of accounts."""

    def __init__(self, db: Database):
        self.db = db
        self.categories = AccountCategoryService(db)
        self.accounts = AccountService(db)

    def build_chart(self, include_inactive: bool = True) -> list[ChartSection]:
        """Group categories and accounts by account type.

        Sections follow asset, liability, equity, income, expense order and
        types without categories are omitted.
        """
        sections = []
        for account_type in AccountType:
            lines = []
            for category in self.categories.list_categories(account_type):
                accounts = self.accounts.list_accounts(
                    category_id=category.id, active_only=not include_inactive
                )
                account_lines = tuple(
                    ChartAccountLine(
                        account=acc,
                        code=generate_code(category.type, acc.id),
                        balance=self.accounts.get_balance(acc.id),
                    )
                    for acc in accounts
                )
                lines.append(
                    ChartCategoryLine(
                        category=category,
                        code=generate_code(category.type, category.id),
                        accounts=account_lines,
                    )
                )
            if lines:
                sections.append(ChartSection(account_type=account_type, categories=tuple(lines)))
        return sections

    def seed_default_chart(self) -> tuple[int, int]:
        """Create default categories and accounts that do not exist yet.

        Returns:
            Tuple of (categories created, accounts created)
        """
        created_categories = 0
        created_accounts = 0
        existing_accounts = {acc.name for acc in self.accounts.list_accounts()}

        for name, account_type, description, accounts in DEFAULT_CHART:
            category = self.categories.get_category_by_name(name)
            if category is None:
                category_id = self.categories.create_category(
                    name=name, category_type=account_type, description=description, is_system=True
                )
                created_categories += 1
            else:
                category_id = category.id

            for account_name, account_description in accounts:
                if account_name in existing_accounts:
                    continue
                self.accounts.create_account(
                    name=account_name, category_id=category_id, description=account_description
                )
                existing_accounts.add(account_name)
                created_accounts += 1

        logger.info(f"Seeded {created_categories} categories and {created_accounts} accounts")
        return created_categories, created_accounts
