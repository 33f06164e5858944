"""Display codes for account categories and accounts."""

from storefront.domain.entities import AccountType
from storefront.domain.errors import ValidationError

CODE_PREFIXES = {
    AccountType.ASSET: "A",
    AccountType.LIABILITY: "L",
    AccountType.EQUITY: "E",
    AccountType.INCOME: "I",
    AccountType.EXPENSE: "X",
}
OTHER_PREFIX = "O"


def generate_code(category_type: AccountType | str, account_id: int) -> str:
    """Build a code such as "A0001" from a category type and numeric ID.

    Unknown types use the "O" prefix. IDs wider than four digits are kept
    in full.

    Raises:
        ValidationError: If account_id is negative
    """
    if account_id < 0:
        raise ValidationError(f"Cannot generate a code for negative ID {account_id}")

    if isinstance(category_type, AccountType):
        prefix = CODE_PREFIXES[category_type]
    else:
        try:
            prefix = CODE_PREFIXES[AccountType(category_type.strip().lower())]
        except (ValueError, AttributeError):
            prefix = OTHER_PREFIX

    return f"{prefix}{account_id:04d}"
