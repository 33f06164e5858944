"""Utility functions for storefront."""

from storefront.utils.date_parser import parse_date
from storefront.utils.amount_parser import parse_amount, to_minor_units, to_decimal_string

__all__ = ["parse_date", "parse_amount", "to_minor_units", "to_decimal_string"]
