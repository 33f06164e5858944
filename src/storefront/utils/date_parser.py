"""Date parsing utilities for document dates and list filters."""

from datetime import date, timedelta
from typing import Optional
from dateutil import parser as date_parser
from dateutil.relativedelta import relativedelta

DEFAULT_PAYMENT_TERMS_DAYS = 30

SUPPORTED_PERIODS = ("this-month", "this-year", "this-week", "last-month", "last-year", "last-week")


def parse_date(date_str: str) -> date:
    """Parse a date string into a date object.

    Supports absolute dates ("2024-01-15", "January 15, 2024") and the
    relative words "today", "yesterday", "tomorrow", "in N days" and
    "N days ago".

    Args:
        date_str: Date string

    Returns:
        Date object

    Raises:
        ValueError: If date string cannot be parsed
    """
    text = date_str.strip().lower()
    today = date.today()

    relative_dates = {
        "today": today,
        "yesterday": today - timedelta(days=1),
        "tomorrow": today + timedelta(days=1),
    }
    if text in relative_dates:
        return relative_dates[text]

    words = text.split()
    if len(words) == 3 and words[0] == "in" and words[2] in ("day", "days") and words[1].isdigit():
        return today + timedelta(days=int(words[1]))
    if len(words) == 3 and words[2] == "ago" and words[1] in ("day", "days") and words[0].isdigit():
        return today - timedelta(days=int(words[0]))

    try:
        return date_parser.parse(text).date()
    except (ValueError, OverflowError) as e:
        raise ValueError(f"Could not parse date '{date_str}': {e}")


def default_due_date(issue_date: date, terms_days: int = DEFAULT_PAYMENT_TERMS_DAYS) -> date:
    """Return the due date for a document issued on ``issue_date``."""
    return issue_date + timedelta(days=terms_days)


def get_date_range(period: str, today: Optional[date] = None) -> tuple[date, date]:
    """Get start and end dates for a named period.

    Args:
        period: One of SUPPORTED_PERIODS
        today: Reference day (defaults to the current date)

    Returns:
        Tuple of (start_date, end_date); "this-*" periods end today

    Raises:
        ValueError: If period string is not recognized
    """
    period = period.strip().lower()
    today = today or date.today()
    month_start = today.replace(day=1)
    year_start = today.replace(month=1, day=1)
    week_start = today - timedelta(days=today.weekday())

    if period == "this-month":
        return month_start, today
    if period == "this-year":
        return year_start, today
    if period == "this-week":
        return week_start, today
    if period == "last-month":
        return month_start - relativedelta(months=1), month_start - timedelta(days=1)
    if period == "last-year":
        return year_start - relativedelta(years=1), year_start - timedelta(days=1)
    if period == "last-week":
        return week_start - timedelta(days=7), week_start - timedelta(days=1)

    raise ValueError(f"Unknown period: '{period}'. Supported periods: {', '.join(SUPPORTED_PERIODS)}")
