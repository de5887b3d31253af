"""
Tests for backend/incubator/services/report_fetch_coordinator.py

Covers:
- Only the queries a report kind needs are issued
- financial-overview runs budget and expense together
- Primary failure raises ReportFetchError, secondary failure is tolerated
- is_loading reflects queries in flight, including overlapping fetches
"""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from incubator.exceptions import ReportFetchError, ValidationError
from incubator.schemas.reports import ReportFilter
from incubator.services.report_fetch_coordinator import ReportFetchCoordinator


def _mock_client(budget=None, expense=None, activity=None):
    client = MagicMock()
    client.get_budget_report = AsyncMock(return_value=budget)
    client.get_expense_report = AsyncMock(return_value=expense)
    client.get_activity_report = AsyncMock(return_value=activity)
    return client


class TestRequiredPayloads:

    @pytest.mark.parametrize("kind,expected", [
        ("budget-utilization", ["budget"]),
        ("expense-summary", ["expense"]),
        ("startup-progress", ["activity"]),
        ("financial-overview", ["budget", "expense"]),
    ])
    def test_mapping(self, kind, expected):
        assert ReportFetchCoordinator.required_payloads(kind) == expected

    def test_unknown_kind_rejected(self):
        with pytest.raises(ValidationError):
            ReportFetchCoordinator.required_payloads("weekly-digest")


class TestFetch:

    @pytest.mark.asyncio
    async def test_expense_summary_only_queries_expenses(self, expense_report):
        client = _mock_client(expense=expense_report)
        coordinator = ReportFetchCoordinator(client)
        f = ReportFilter(startup_id="s1")

        result = await coordinator.fetch("expense-summary", f)

        assert result.primary is expense_report
        assert result.secondary is None
        client.get_expense_report.assert_awaited_once_with(f)
        client.get_budget_report.assert_not_called()
        client.get_activity_report.assert_not_called()
        assert coordinator.armed == ["expense"]

    @pytest.mark.asyncio
    async def test_financial_overview_queries_both(self, budget_report, expense_report):
        client = _mock_client(budget=budget_report, expense=expense_report)
        coordinator = ReportFetchCoordinator(client)

        result = await coordinator.fetch("financial-overview", ReportFilter())

        assert result.primary is budget_report
        assert result.secondary is expense_report
        client.get_activity_report.assert_not_called()

    @pytest.mark.asyncio
    async def test_financial_overview_budget_missing_raises(self, expense_report):
        client = _mock_client(budget=None, expense=expense_report)
        with pytest.raises(ReportFetchError):
            await ReportFetchCoordinator(client).fetch("financial-overview", ReportFilter())

    @pytest.mark.asyncio
    async def test_secondary_failure_tolerated(self, budget_report):
        client = _mock_client(budget=budget_report)
        client.get_expense_report = AsyncMock(side_effect=httpx.ConnectError("down"))

        result = await ReportFetchCoordinator(client).fetch("financial-overview", ReportFilter())

        assert result.primary is budget_report
        assert result.secondary is None

    @pytest.mark.asyncio
    async def test_primary_query_error_becomes_fetch_error(self):
        client = _mock_client()
        client.get_activity_report = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        coordinator = ReportFetchCoordinator(client)

        with pytest.raises(ReportFetchError):
            await coordinator.fetch("startup-progress", ReportFilter())
        assert not coordinator.is_loading


class TestLoadingFlag:

    @pytest.mark.asyncio
    async def test_loading_while_query_in_flight(self, activity_report):
        release = asyncio.Event()

        async def slow_activity(report_filter):
            await release.wait()
            return activity_report

        client = _mock_client()
        client.get_activity_report = slow_activity
        coordinator = ReportFetchCoordinator(client)

        assert not coordinator.is_loading
        task = asyncio.ensure_future(coordinator.fetch("startup-progress", ReportFilter()))
        for _ in range(5):
            await asyncio.sleep(0)
        assert coordinator.is_loading

        release.set()
        result = await task
        assert result.primary is activity_report
        assert not coordinator.is_loading

    @pytest.mark.asyncio
    async def test_overlapping_fetches_keep_loading_until_last_finishes(self, activity_report):
        releases = [asyncio.Event(), asyncio.Event()]
        calls = []

        async def slow_activity(report_filter):
            release = releases[len(calls)]
            calls.append(report_filter)
            await release.wait()
            return activity_report

        client = _mock_client()
        client.get_activity_report = slow_activity
        coordinator = ReportFetchCoordinator(client)

        first = asyncio.ensure_future(coordinator.fetch("startup-progress", ReportFilter()))
        second = asyncio.ensure_future(coordinator.fetch("startup-progress", ReportFilter(startup_id="s1")))
        for _ in range(5):
            await asyncio.sleep(0)
        assert len(calls) == 2

        releases[0].set()
        await first
        assert coordinator.is_loading

        releases[1].set()
        await second
        assert not coordinator.is_loading
