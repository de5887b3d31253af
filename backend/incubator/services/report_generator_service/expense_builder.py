"""
Expense Builder — summary cards plus status and category breakdown tables.

Part of the report_generator_service package.
"""

from incubator.schemas.reports import ExpenseReport
from incubator.services.report_generator_service.components import (
    section,
    summary_card,
    summary_grid,
    table,
)
from incubator.services.report_generator_service.formatters import (
    format_currency,
    percent_of,
    text,
)


def _status_badge(status: str) -> str:
    css = text(status.lower())
    return f'<span class="badge badge-{css}">{text(status)}</span>'


def build_expense_status_table(data: ExpenseReport) -> str:
    """Count, total, and share of the grand total for each status."""
    grand_total = data.summary.total_amount
    rows = [
        [
            _status_badge(status),
            str(totals.count),
            format_currency(totals.total),
            f"{percent_of(totals.total, grand_total)}%",
        ]
        for status, totals in data.status_rows()
    ]
    return table(["Status", "Count", "Total Amount", "Percentage"], rows)


def build_expense_category_table(data: ExpenseReport) -> str:
    grand_total = data.summary.total_amount
    rows = [
        [
            text(item.category_name),
            text(item.startup_name),
            str(item.count),
            format_currency(item.total),
            f"{percent_of(item.total, grand_total)}%",
        ]
        for item in data.by_category
    ]
    return table(
        ["Category", "Startup", "Count", "Total Amount", "Percentage"], rows,
    )


def build_expense_body(data: ExpenseReport) -> str:
    s = data.summary
    pending = data.by_status.get("PENDING")
    pending_count = pending.count if pending else 0

    summary = summary_grid([
        summary_card("Total Expenses", str(s.total_expenses)),
        summary_card("Total Amount", format_currency(s.total_amount, use_k=True)),
        summary_card("Approved", format_currency(s.approved_amount, use_k=True)),
        summary_card("Pending", str(pending_count)),
    ])
    return (
        summary
        + section("Expenses by Status", build_expense_status_table(data))
        + section("Expenses by Category", build_expense_category_table(data))
    )
