"""Tests for date parser with relative dates."""

import pytest
from datetime import date, datetime, timedelta
from dateutil.relativedelta import relativedelta
from paytrack.utils.date_parser import get_date_range, parse_date, parse_datetime


def test_parse_absolute_date():
    """Test parsing absolute dates."""
    assert parse_date("2024-01-15") == date(2024, 1, 15)
    assert parse_date("January 15, 2024") == date(2024, 1, 15)


def test_parse_today():
    assert parse_date("today") == date.today()
    assert parse_date("  Today ") == date.today()


def test_parse_yesterday():
    assert parse_date("yesterday") == date.today() - timedelta(days=1)


def test_parse_last_month():
    """Test parsing 'last month' as the first day of last month."""
    expected = (date.today() - relativedelta(months=1)).replace(day=1)
    assert parse_date("last month") == expected


def test_parse_last_week():
    """Test parsing 'last week' as Monday of last week."""
    result = parse_date("last week")
    today = date.today()
    assert result == today - timedelta(days=today.weekday() + 7)
    assert result.weekday() == 0


def test_parse_this_year():
    assert parse_date("this year") == date(date.today().year, 1, 1)


def test_parse_last_weekday():
    """'last friday' is the most recent Friday strictly before today."""
    result = parse_date("last friday")
    today = date.today()
    assert result.weekday() == 4
    assert 1 <= (today - result).days <= 7


def test_parse_invalid_date():
    with pytest.raises(ValueError, match="Could not parse date"):
        parse_date("garbage")


class TestParseDatetime:
    def test_keeps_time_of_day(self):
        assert parse_datetime("2024-01-15 14:30") == datetime(2024, 1, 15, 14, 30)

    def test_date_only_is_midnight(self):
        assert parse_datetime("2024-01-15") == datetime(2024, 1, 15)

    def test_relative_is_midnight(self):
        assert parse_datetime("yesterday") == datetime.combine(
            date.today() - timedelta(days=1), datetime.min.time()
        )

    def test_invalid(self):
        with pytest.raises(ValueError):
            parse_datetime("someday")


class TestGetDateRange:
    def test_this_month(self):
        start, end = get_date_range("this-month")
        today = date.today()
        assert start == today.replace(day=1)
        assert end == today

    def test_last_month(self):
        start, end = get_date_range("last-month")
        first_of_month = date.today().replace(day=1)
        assert end == first_of_month - timedelta(days=1)
        assert start == end.replace(day=1)

    def test_last_year(self):
        start, end = get_date_range("last-year")
        year = date.today().year - 1
        assert (start, end) == (date(year, 1, 1), date(year, 12, 31))

    def test_weeks(self):
        this_start, this_end = get_date_range("this-week")
        last_start, last_end = get_date_range("last-week")
        assert this_start.weekday() == 0
        assert this_end == date.today()
        assert last_start == this_start - timedelta(days=7)
        assert last_end == this_start - timedelta(days=1)

    def test_unknown_period(self):
        with pytest.raises(ValueError, match="Unknown period"):
            get_date_range("next-decade")
