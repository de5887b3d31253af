"""
Tests for backend/incubator/services/period_resolver.py

Covers:
- resolve_period: every token, year boundaries, leap years, unbounded tokens
- format_period_display: labels for the period dropdown and report header
"""

from datetime import date, datetime

import pytest

from incubator.constants import PERIOD_OPTIONS
from incubator.services.period_resolver import format_period_display, resolve_period


class TestResolvePeriod:
    """Tests for resolve_period()"""

    def test_current_month(self):
        r = resolve_period("current-month", date(2024, 3, 15))
        assert r.start_date == date(2024, 3, 1)
        assert r.end_date == date(2024, 3, 31)

    def test_current_month_leap_february(self):
        r = resolve_period("current-month", date(2024, 2, 10))
        assert r.end_date == date(2024, 2, 29)

    def test_last_month_crosses_year(self):
        r = resolve_period("last-month", date(2024, 1, 20))
        assert r.start_date == date(2023, 12, 1)
        assert r.end_date == date(2023, 12, 31)

    def test_last_month_from_march_31(self):
        """End-of-month day does not overflow into the wrong month."""
        r = resolve_period("last-month", date(2023, 3, 31))
        assert r.start_date == date(2023, 2, 1)
        assert r.end_date == date(2023, 2, 28)

    @pytest.mark.parametrize("today,start,end", [
        (date(2024, 1, 1), date(2024, 1, 1), date(2024, 3, 31)),
        (date(2024, 5, 15), date(2024, 4, 1), date(2024, 6, 30)),
        (date(2024, 9, 30), date(2024, 7, 1), date(2024, 9, 30)),
        (date(2024, 12, 31), date(2024, 10, 1), date(2024, 12, 31)),
    ])
    def test_current_quarter(self, today, start, end):
        r = resolve_period("current-quarter", today)
        assert (r.start_date, r.end_date) == (start, end)

    @pytest.mark.parametrize("today", [date(2024, 1, 1), date(2024, 2, 15), date(2024, 3, 31)])
    def test_last_quarter_from_q1_is_prior_year_q4(self, today):
        r = resolve_period("last-quarter", today)
        assert r.start_date == date(2023, 10, 1)
        assert r.end_date == date(2023, 12, 31)

    def test_last_quarter_mid_year(self):
        r = resolve_period("last-quarter", date(2024, 8, 1))
        assert r.start_date == date(2024, 4, 1)
        assert r.end_date == date(2024, 6, 30)

    def test_current_year(self):
        r = resolve_period("current-year", date(2024, 6, 1))
        assert r.start_date == date(2024, 1, 1)
        assert r.end_date == date(2024, 12, 31)

    def test_last_year(self):
        r = resolve_period("last-year", date(2024, 6, 1))
        assert r.start_date == date(2023, 1, 1)
        assert r.end_date == date(2023, 12, 31)

    @pytest.mark.parametrize("token", ["all-time", "custom", "next-decade", ""])
    def test_unbounded_tokens(self, token):
        r = resolve_period(token, date(2024, 6, 1))
        assert r.is_unbounded
        assert r.to_query_params() == {}

    def test_accepts_datetime(self):
        r = resolve_period("current-month", datetime(2024, 3, 15, 23, 59))
        assert r.start_date == date(2024, 3, 1)

    def test_start_never_after_end(self):
        tokens = [token for token, _ in PERIOD_OPTIONS if token != "all-time"]
        for month in range(1, 13):
            for token in tokens:
                r = resolve_period(token, date(2023, month, 28))
                assert r.start_date <= r.end_date

    def test_query_params_are_iso_dates(self):
        r = resolve_period("current-month", date(2024, 3, 15))
        assert r.to_query_params() == {"startDate": "2024-03-01", "endDate": "2024-03-31"}


class TestFormatPeriodDisplay:
    """Tests for format_period_display()"""

    def test_all_time(self):
        assert format_period_display("all-time") == "All Time"

    def test_hyphenated_token(self):
        assert format_period_display("current-quarter") == "Current Quarter"
        assert format_period_display("last-month") == "Last Month"

    def test_matches_dropdown_labels(self):
        for token, label in PERIOD_OPTIONS:
            assert format_period_display(token) == label
