"""
Activity Builder — progress update cards and the per-startup activity table.

Part of the report_generator_service package.
"""

from typing import List

from incubator.constants import ACTIVITY_UPDATES_LIMIT
from incubator.schemas.reports import ActivityReport, ProgressUpdate
from incubator.services.report_generator_service.components import (
    card_item,
    section,
    summary_card,
    summary_grid,
    table,
)
from incubator.services.report_generator_service.formatters import (
    format_currency,
    format_report_date,
    text,
)

NO_UPDATES_MESSAGE = "No progress updates found for the selected period."


def recent_updates(data: ActivityReport, limit: int = ACTIVITY_UPDATES_LIMIT) -> List[ProgressUpdate]:
    """Most recent progress updates first, capped at ``limit``."""
    items = sorted(
        data.progress_updates.items, key=lambda u: u.created_at, reverse=True,
    )
    return items[:limit]


def _update_field(label: str, value) -> str:
    return f"""
                <div class="update-field">
                    <div class="update-field-label">{label}</div>
                    <div class="update-field-value">{text(value, default="N/A")}</div>
                </div>"""


def _build_update_card(update: ProgressUpdate) -> str:
    meta = [
        card_item("Updated", format_report_date(update.created_at)),
        card_item("Submitted By", text(update.submitted_by.name, default="N/A")),
    ]
    return f"""
        <div class="card">
            <h3 class="card-title">{text(update.startup.name)}</h3>
            <div class="card-grid">{''.join(meta)}
            </div>
            <div class="update-details">{_update_field("What Was Done", update.what_was_done)}{_update_field("What Is Blocked", update.what_is_blocked)}{_update_field("What Is Next", update.what_is_next)}
            </div>
        </div>"""


def _build_activity_table(data: ActivityReport) -> str:
    rows = [
        [
            text(item.startup.name),
            str(item.progress_update_count),
            str(item.expense_count),
            format_currency(item.total_expense_amount),
            format_report_date(item.last_activity),
        ]
        for item in data.activity_by_startup
    ]
    return table(
        ["Startup", "Progress Updates", "Expenses", "Total Spent", "Last Activity"],
        rows,
    )


def build_activity_body(data: ActivityReport) -> str:
    s = data.summary
    summary = summary_grid([
        summary_card("Total Progress Updates", str(s.total_progress_updates)),
        summary_card("Active Startups", str(s.active_startups)),
        summary_card("Total Expenses", str(s.total_expenses)),
        summary_card("Expense Amount", format_currency(data.expenses.total, use_k=True)),
    ])

    updates = recent_updates(data)
    if updates:
        updates_html = "".join(_build_update_card(u) for u in updates)
    else:
        updates_html = f'\n        <p class="empty-message">{NO_UPDATES_MESSAGE}</p>'

    html = summary + section("Recent Progress Updates", updates_html)
    if data.activity_by_startup:
        html += section("Activity by Startup", _build_activity_table(data))
    return html
