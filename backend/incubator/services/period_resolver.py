"""
Period Resolver

Maps a symbolic period token ("current-quarter", "last-month", ...) to a
concrete, inclusive calendar date range. Pure: the caller supplies ``now``.
"""

from datetime import date, datetime, timedelta
from typing import Union

from dateutil.relativedelta import relativedelta

from incubator.constants import PeriodToken
from incubator.schemas.reports import DateRange


def _month_bounds(first: date, months: int = 1) -> DateRange:
    """Range from ``first`` through the day before ``first + months``."""
    end = first + relativedelta(months=months) - timedelta(days=1)
    return DateRange(start_date=first, end_date=end)


def _quarter_start(day: date) -> date:
    month_index = (day.month - 1) // 3 * 3  # 0, 3, 6, 9
    return day.replace(month=month_index + 1, day=1)


def resolve_period(token: str, now: Union[date, datetime]) -> DateRange:
    """
    Resolve ``token`` to a DateRange relative to ``now``.

    all-time, custom, and unrecognized tokens are unbounded. Quarter math
    goes through relativedelta so last-quarter in Q1 lands in Q4 of the
    prior year.
    """
    today = now.date() if isinstance(now, datetime) else now
    first_of_month = today.replace(day=1)

    if token == PeriodToken.CURRENT_MONTH.value:
        return _month_bounds(first_of_month)

    if token == PeriodToken.LAST_MONTH.value:
        return _month_bounds(first_of_month - relativedelta(months=1))

    if token == PeriodToken.CURRENT_QUARTER.value:
        return _month_bounds(_quarter_start(today), months=3)

    if token == PeriodToken.LAST_QUARTER.value:
        return _month_bounds(
            _quarter_start(today) - relativedelta(months=3), months=3
        )

    if token == PeriodToken.CURRENT_YEAR.value:
        return DateRange(
            start_date=date(today.year, 1, 1), end_date=date(today.year, 12, 31)
        )

    if token == PeriodToken.LAST_YEAR.value:
        return DateRange(
            start_date=date(today.year - 1, 1, 1),
            end_date=date(today.year - 1, 12, 31),
        )

    # all-time, custom, unknown
    return DateRange()


def format_period_display(token: str) -> str:
    """Human label for a period token: "All Time", "Current Quarter", ..."""
    if token == PeriodToken.ALL_TIME.value:
        return "All Time"
    return " ".join(w[:1].upper() + w[1:] for w in token.replace("-", " ").split(" "))
