"""
Formatters — currency, date, and percentage strings shared by the report builders.

Part of the report_generator_service package.
"""

from datetime import date, datetime
from html import escape
from typing import Optional, Union

from incubator.constants import CURRENCY_DIVISOR


def format_currency(amount: float, use_k: bool = False, decimals: int = 0) -> str:
    """
    Format a dollar amount: "$12,500", or "$13K" with use_k for amounts >= 1000.
    """
    amount = amount or 0
    if use_k and amount >= CURRENCY_DIVISOR:
        return f"${amount / CURRENCY_DIVISOR:.{decimals}f}K"
    return f"${amount:,.{decimals}f}"


def format_report_date(value: Union[date, datetime, str, None]) -> str:
    """Long US date, e.g. "March 4, 2024". Empty/None → "N/A"."""
    if not value:
        return "N/A"
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    return f"{value.strftime('%B')} {value.day}, {value.year}"


def percent_of(part: float, whole: float) -> str:
    """part/whole as a one-decimal percentage string; "0" when whole is not positive."""
    if not whole or whole <= 0:
        return "0"
    return f"{part / whole * 100:.1f}"


def text(value: Optional[object], default: str = "") -> str:
    """HTML-escape user-supplied text for element content or attributes."""
    if value is None or value == "":
        return escape(default)
    return escape(str(value), quote=True)
