"""
Shared test fixtures for the incubator report engine tests.

Provides reusable fixtures for:
- Raw API payloads (camelCase, as the report endpoints return them)
- Parsed payload models
- Report metadata
- Brand cache reset
"""

from datetime import datetime

import pytest

import incubator.services.brand_service as brand_mod
from incubator.constants import PAYLOAD_ACTIVITY, PAYLOAD_BUDGET, PAYLOAD_EXPENSE
from incubator.schemas.reports import ReportMetadata, parse_payload


# ---------------------------------------------------------------------------
# Brand
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True)
def reset_brand_cache():
    """Every test starts from the default brand."""
    brand_mod._brand_config = None
    yield
    brand_mod._brand_config = None


# ---------------------------------------------------------------------------
# Raw payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def budget_raw():
    return {
        "summary": {
            "totalStartups": 2,
            "totalBudget": 150000,
            "totalAllocated": 120000,
            "totalSpent": 45000,
        },
        "report": [
            {
                "startup": {"id": "s1", "name": "Acme Robotics"},
                "budget": {
                    "total": 100000, "allocated": 80000, "spent": 30000,
                    "remaining": 70000, "utilizationPercent": 30,
                },
            },
            {
                "startup": {"id": "s2", "name": "Zero Budget Labs"},
                "budget": {
                    "total": 0, "allocated": 0, "spent": 0,
                    "remaining": 0, "utilizationPercent": 0,
                },
            },
        ],
    }


@pytest.fixture
def expense_raw():
    return {
        "summary": {"totalExpenses": 10, "totalAmount": 12500, "approvedAmount": 8000},
        "byStatus": {
            "APPROVED": {"count": 6, "total": 8000},
            "PENDING": {"count": 3, "total": 3500},
            "REJECTED": {"count": 1, "total": 1000},
        },
        "byCategory": [
            {"categoryName": "Equipment", "startupName": "Acme Robotics", "count": 4, "total": 7000},
            {"categoryName": "Travel", "startupName": "Acme Robotics", "count": 6, "total": 5500},
        ],
    }


def _make_update(i, startup_name="Acme Robotics", **overrides):
    update = {
        "id": f"u{i}",
        "whatWasDone": f"Shipped milestone {i}",
        "whatIsBlocked": None,
        "whatIsNext": f"Plan milestone {i + 1}",
        "createdAt": f"2024-03-{(i % 28) + 1:02d}T10:00:00",
        "startup": {"id": "s1", "name": startup_name},
        "submittedBy": {"id": "usr1", "name": "Dana Founder", "email": "dana@example.com"},
    }
    update.update(overrides)
    return update


@pytest.fixture
def activity_raw():
    return {
        "summary": {"totalProgressUpdates": 2, "totalExpenses": 3, "activeStartups": 1},
        "progressUpdates": {"count": 2, "items": [_make_update(1), _make_update(5)]},
        "expenses": {"count": 3, "total": 4200},
        "activityByStartup": [
            {
                "startup": {"id": "s1", "name": "Acme Robotics"},
                "progressUpdateCount": 2,
                "expenseCount": 3,
                "totalExpenseAmount": 4200,
                "lastActivity": "2024-03-06T10:00:00",
            },
        ],
        "timeline": [],
    }


# ---------------------------------------------------------------------------
# Parsed payloads
# ---------------------------------------------------------------------------


@pytest.fixture
def budget_report(budget_raw):
    return parse_payload(PAYLOAD_BUDGET, budget_raw)


@pytest.fixture
def expense_report(expense_raw):
    return parse_payload(PAYLOAD_EXPENSE, expense_raw)


@pytest.fixture
def activity_report(activity_raw):
    return parse_payload(PAYLOAD_ACTIVITY, activity_raw)


@pytest.fixture
def metadata():
    return ReportMetadata(
        report_type="Expense Summary",
        period="current-quarter",
        generated_at=datetime(2024, 3, 4, 15, 30),
    )
