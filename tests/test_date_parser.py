"""Tests for date parsing utilities."""

from datetime import date, timedelta

import pytest

from storefront.utils.date_parser import (
    DEFAULT_PAYMENT_TERMS_DAYS,
    default_due_date,
    get_date_range,
    parse_date,
)


def test_parse_iso_date():
    assert parse_date("2024-01-15") == date(2024, 1, 15)


def test_parse_long_date():
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_relative_words():
    today = date.today()
    assert parse_date("today") == today
    assert parse_date("Yesterday") == today - timedelta(days=1)
    assert parse_date("tomorrow") == today + timedelta(days=1)


def test_parse_relative_days():
    today = date.today()
    assert parse_date("in 30 days") == today + timedelta(days=30)
    assert parse_date("3 days ago") == today - timedelta(days=3)
    assert parse_date("1 day ago") == today - timedelta(days=1)


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("not a date")


def test_default_due_date():
    assert DEFAULT_PAYMENT_TERMS_DAYS == 30
    assert default_due_date(date(2024, 1, 15)) == date(2024, 2, 14)
    assert default_due_date(date(2024, 1, 15), terms_days=7) == date(2024, 1, 22)


class TestGetDateRange:
    """Tests for get_date_range."""

    today = date(2024, 3, 20)

    def test_this_month(self):
        assert get_date_range("this-month", self.today) == (date(2024, 3, 1), self.today)

    def test_last_month(self):
        assert get_date_range("last-month", self.today) == (date(2024, 2, 1), date(2024, 2, 29))

    def test_this_year(self):
        assert get_date_range("this-year", self.today) == (date(2024, 1, 1), self.today)

    def test_last_year(self):
        assert get_date_range("last-year", self.today) == (date(2023, 1, 1), date(2023, 12, 31))

    def test_weeks(self):
        # 2024-03-20 is a Wednesday
        assert get_date_range("this-week", self.today) == (date(2024, 3, 18), self.today)
        assert get_date_range("last-week", self.today) == (date(2024, 3, 11), date(2024, 3, 17))

    def test_last_month_in_january(self):
        assert get_date_range("last-month", date(2024, 1, 5)) == (date(2023, 12, 1), date(2023, 12, 31))

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            get_date_range("next-decade")
