"""
Budget Builder — summary cards and per-startup budget cards.

Part of the report_generator_service package.
"""

from incubator.schemas.reports import BudgetReport, BudgetReportItem
from incubator.services.report_generator_service.components import (
    card_item,
    section,
    summary_card,
    summary_grid,
)
from incubator.services.report_generator_service.formatters import (
    format_currency,
    percent_of,
    text,
)


def utilization_percent(spent: float, total: float) -> str:
    """spent/total as a percentage with one decimal; "0" when there is no budget."""
    return percent_of(spent, total)


def _build_startup_budget_card(item: BudgetReportItem) -> str:
    b = item.budget
    items = [
        card_item("Total Budget", format_currency(b.total)),
        card_item("Allocated", format_currency(b.allocated)),
        card_item("Spent", format_currency(b.spent)),
        card_item("Remaining", format_currency(b.remaining)),
        card_item("Utilization", f"{utilization_percent(b.spent, b.total)}%"),
    ]
    return f"""
        <div class="card">
            <h3 class="card-title">{text(item.startup.name)}</h3>
            <div class="card-grid">{''.join(items)}
            </div>
        </div>"""


def build_budget_body(data: BudgetReport) -> str:
    """Four aggregate cards, then one detail card per startup."""
    s = data.summary
    summary = summary_grid([
        summary_card("Total Startups", str(s.total_startups)),
        summary_card("Total Budget", format_currency(s.total_budget, use_k=True)),
        summary_card("Total Allocated", format_currency(s.total_allocated, use_k=True)),
        summary_card("Total Spent", format_currency(s.total_spent, use_k=True)),
    ])
    cards = "".join(_build_startup_budget_card(item) for item in data.report)
    return summary + section("Budget by Startup", cards)
