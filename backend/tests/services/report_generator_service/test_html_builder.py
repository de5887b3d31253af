"""
Tests for backend/incubator/services/report_generator_service/html_builder.py
and the per-kind body builders.

Tests cover:
- Document shell: title, period label, startup line, footer, logo block
- Identical inputs give identical output
- User text is escaped
- Budget: utilization percentages, zero-budget guard
- Expense: status rows, percentages, zero-total guard
- Activity: empty message, newest-first ordering, 20-update cap
- Untagged dicts are dispatched by shape
"""

from datetime import datetime

import pytest

from incubator.constants import PAYLOAD_ACTIVITY, PAYLOAD_EXPENSE
from incubator.exceptions import ValidationError
from incubator.schemas.reports import parse_payload
from incubator.services.report_generator_service.activity_builder import (
    NO_UPDATES_MESSAGE,
    recent_updates,
)
from incubator.services.report_generator_service.budget_builder import utilization_percent
from incubator.services.report_generator_service.html_builder import build_report_html


def _update(i, **overrides):
    update = {
        "id": f"u{i}",
        "whatWasDone": f"Done {i}",
        "whatIsNext": f"Next {i}",
        "createdAt": datetime(2024, 1, 1, 0, 0).replace(day=(i % 28) + 1, hour=i % 24).isoformat(),
        "startup": {"id": "s1", "name": "Acme Robotics"},
        "submittedBy": {"name": "Dana Founder"},
    }
    update.update(overrides)
    return update


def _activity(items, by_startup=None):
    return parse_payload(PAYLOAD_ACTIVITY, {
        "summary": {"totalProgressUpdates": len(items), "totalExpenses": 0, "activeStartups": 1},
        "progressUpdates": {"count": len(items), "items": items},
        "expenses": {"count": 0, "total": 0},
        "activityByStartup": by_startup or [],
        "timeline": [],
    })


class TestDocumentShell:

    def test_title_and_header(self, expense_report, metadata):
        html = build_report_html(expense_report, metadata)
        assert html.startswith("<!DOCTYPE html>")
        assert "<title>Expense Summary Report</title>" in html
        assert "<h1>Expense Summary</h1>" in html
        assert "<strong>Period:</strong> Current Quarter" in html
        assert "<strong>Generated:</strong> March 4, 2024" in html

    def test_startup_line_only_when_named(self, expense_report, metadata):
        assert "Startup:</strong>" not in build_report_html(expense_report, metadata)

        named = metadata.model_copy(update={"startup_name": "Acme Robotics"})
        assert "<strong>Startup:</strong> Acme Robotics" in build_report_html(expense_report, named)

    def test_footer_attribution(self, expense_report, metadata):
        html = build_report_html(expense_report, metadata)
        assert "Généré par 2BAConcours le March 4, 2024" in html
        assert "&bull;" in html

    def test_logo_block_only_with_logo(self, expense_report, metadata):
        assert "logo-header\">" not in build_report_html(expense_report, metadata)

        html = build_report_html(expense_report, metadata, "data:image/png;base64,AAAA")
        assert '<img src="data:image/png;base64,AAAA"' in html

    def test_deterministic(self, activity_report, metadata):
        assert build_report_html(activity_report, metadata) == build_report_html(activity_report, metadata)

    def test_user_text_is_escaped(self, metadata):
        report = _activity([_update(1, whatWasDone="<script>alert(1)</script>")])
        named = metadata.model_copy(update={"startup_name": "A & B <Labs>"})

        html = build_report_html(report, named)

        assert "<script>" not in html
        assert "&lt;script&gt;alert(1)&lt;/script&gt;" in html
        assert "A &amp; B &lt;Labs&gt;" in html

    def test_untagged_dict_dispatched_by_shape(self, budget_raw, metadata):
        html = build_report_html(budget_raw, metadata)
        assert "Budget by Startup" in html

    def test_unrecognized_payload_rejected(self, metadata):
        with pytest.raises(ValidationError):
            build_report_html({"summary": {}}, metadata)


class TestBudgetBody:

    def test_utilization_percent(self):
        assert utilization_percent(30000, 100000) == "30.0"
        assert utilization_percent(1, 3) == "33.3"

    def test_zero_budget_shows_zero_percent(self):
        assert utilization_percent(0, 0) == "0"
        assert utilization_percent(500, 0) == "0"

    def test_cards(self, budget_report, metadata):
        html = build_report_html(budget_report, metadata)
        assert "Total Startups" in html
        assert "$150K" in html  # total budget, abbreviated
        assert "$45K" in html  # total spent
        assert "Acme Robotics" in html
        assert "30.0%" in html
        assert "Zero Budget Labs" in html
        assert ">0%<" in html


class TestExpenseBody:

    def test_status_rows_in_display_order(self, expense_report):
        assert [s for s, _ in expense_report.status_rows()] == ["PENDING", "APPROVED", "REJECTED"]

    def test_status_counts_sum_to_total(self, expense_report):
        counts = sum(t.count for _, t in expense_report.status_rows())
        assert counts == expense_report.summary.total_expenses

    def test_status_table(self, expense_report, metadata):
        html = build_report_html(expense_report, metadata)
        assert '<span class="badge badge-pending">PENDING</span>' in html
        assert "<td>$8,000</td>" in html
        assert "<td>64.0%</td>" in html  # 8000 / 12500
        assert "<td>28.0%</td>" in html  # 3500 / 12500
        assert "Expenses by Category" in html
        assert "<td>Equipment</td>" in html

    def test_pending_card_shows_count(self, expense_report, metadata):
        html = build_report_html(expense_report, metadata)
        assert 'Pending</div>\n            <div class="summary-card-value">3</div>' in html

    def test_zero_total_shows_zero_percent(self, metadata):
        report = parse_payload(PAYLOAD_EXPENSE, {
            "summary": {"totalExpenses": 0, "totalAmount": 0, "approvedAmount": 0},
            "byStatus": {"PENDING": {"count": 0, "total": 0}},
            "byCategory": [],
        })
        html = build_report_html(report, metadata)
        assert "<td>0%</td>" in html
        assert "NaN" not in html


class TestActivityBody:

    def test_empty_updates_message(self, metadata):
        html = build_report_html(_activity([]), metadata)
        assert NO_UPDATES_MESSAGE in html
        assert "Activity by Startup" not in html

    def test_recent_updates_newest_first(self):
        report = _activity([_update(3), _update(10), _update(1)])
        assert [u.id for u in recent_updates(report)] == ["u10", "u3", "u1"]

    def test_capped_at_twenty(self, metadata):
        report = _activity([_update(i) for i in range(25)])
        assert len(recent_updates(report)) == 20

        html = build_report_html(report, metadata)
        assert html.count('class="update-details"') == 20

    def test_missing_fields_show_na(self, metadata):
        report = _activity([_update(1, whatIsBlocked=None)])
        html = build_report_html(report, metadata)
        assert "What Is Blocked" in html
        assert ">N/A<" in html

    def test_activity_table(self, activity_report, metadata):
        html = build_report_html(activity_report, metadata)
        assert "Activity by Startup" in html
        assert "<td>$4,200</td>" in html
        assert "<td>March 6, 2024</td>" in html
