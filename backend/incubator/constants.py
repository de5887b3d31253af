"""
Application Constants

Report kinds, period tokens, and the report catalog shown in the wizard.
"""

from enum import Enum
from typing import Dict, List, Tuple


class ReportKind(str, Enum):
    BUDGET_UTILIZATION = "budget-utilization"
    EXPENSE_SUMMARY = "expense-summary"
    STARTUP_PROGRESS = "startup-progress"
    FINANCIAL_OVERVIEW = "financial-overview"


class PeriodToken(str, Enum):
    ALL_TIME = "all-time"
    CURRENT_MONTH = "current-month"
    LAST_MONTH = "last-month"
    CURRENT_QUARTER = "current-quarter"
    LAST_QUARTER = "last-quarter"
    CURRENT_YEAR = "current-year"
    LAST_YEAR = "last-year"
    CUSTOM = "custom"


# Payload discriminator values (the "kind" field on report payloads)
PAYLOAD_BUDGET = "budget"
PAYLOAD_EXPENSE = "expense"
PAYLOAD_ACTIVITY = "activity"

# Expense statuses in display order
EXPENSE_STATUSES = ["PENDING", "APPROVED", "REJECTED"]

# Report catalog for the selection step (display order)
REPORT_TYPES: List[Dict[str, str]] = [
    {
        "id": ReportKind.EXPENSE_SUMMARY.value,
        "name": "Expense Summary",
        "description": "Overview of all expenses by startup and category",
    },
    {
        "id": ReportKind.BUDGET_UTILIZATION.value,
        "name": "Budget Utilization",
        "description": "Track budget allocation and spending across startups",
    },
    {
        "id": ReportKind.STARTUP_PROGRESS.value,
        "name": "Startup Progress",
        "description": "Comprehensive report on startup milestones and KPIs",
    },
    {
        "id": ReportKind.FINANCIAL_OVERVIEW.value,
        "name": "Financial Overview",
        "description": "Complete financial summary of the incubation program",
    },
]

# Payloads each report kind needs; the first entry is the primary payload
REQUIRED_PAYLOADS: Dict[str, List[str]] = {
    ReportKind.BUDGET_UTILIZATION.value: [PAYLOAD_BUDGET],
    ReportKind.EXPENSE_SUMMARY.value: [PAYLOAD_EXPENSE],
    ReportKind.STARTUP_PROGRESS.value: [PAYLOAD_ACTIVITY],
    ReportKind.FINANCIAL_OVERVIEW.value: [PAYLOAD_BUDGET, PAYLOAD_EXPENSE],
}

# Period dropdown options (token, label)
PERIOD_OPTIONS: List[Tuple[str, str]] = [
    (PeriodToken.CURRENT_MONTH.value, "Current Month"),
    (PeriodToken.LAST_MONTH.value, "Last Month"),
    (PeriodToken.CURRENT_QUARTER.value, "Current Quarter"),
    (PeriodToken.LAST_QUARTER.value, "Last Quarter"),
    (PeriodToken.CURRENT_YEAR.value, "Current Year"),
    (PeriodToken.LAST_YEAR.value, "Last Year"),
    (PeriodToken.ALL_TIME.value, "All Time"),
]

# Amounts at or above this are abbreviated with a "K" suffix
CURRENCY_DIVISOR = 1000

# Most recent progress updates shown in an activity report
ACTIVITY_UPDATES_LIMIT = 20

# Report API routes
API_ROUTES = {
    "REPORTS_BUDGET": "/api/reports/budget",
    "REPORTS_EXPENSES": "/api/reports/expenses",
    "REPORTS_ACTIVITY": "/api/reports/activity",
    "STARTUPS": "/api/startups",
}


def report_type_name(kind: str) -> str:
    """Display name for a report kind ("Report" if unknown)."""
    for entry in REPORT_TYPES:
        if entry["id"] == kind:
            return entry["name"]
    return "Report"
