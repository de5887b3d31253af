"""
Report API Client

Thin async client for the report endpoints. Responses come back as
``{"success": true, "data": {...}}``; the payload is validated and tagged
with its kind here, at the boundary, so nothing downstream has to guess
which report shape it holds.
"""

import logging
from typing import Any, Dict, List, Optional

import httpx

from incubator.config import settings
from incubator.constants import API_ROUTES, PAYLOAD_ACTIVITY, PAYLOAD_BUDGET, PAYLOAD_EXPENSE
from incubator.schemas.reports import (
    ActivityReport,
    BudgetReport,
    ExpenseReport,
    ReportFilter,
    StartupRef,
    parse_payload,
)

logger = logging.getLogger(__name__)


class ReportApiClient:
    """Client for /api/reports/* and the startups listing."""

    def __init__(
        self,
        base_url: Optional[str] = None,
        token: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.base_url = (base_url if base_url is not None else settings.api_base_url).rstrip("/")
        self.token = token if token is not None else settings.api_token
        self.timeout = timeout if timeout is not None else settings.api_timeout_seconds
        self._transport = transport

    def _headers(self) -> Dict[str, str]:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    async def _get(self, endpoint: str, params: Optional[Dict[str, str]] = None) -> Any:
        """GET ``endpoint`` and return the ``data`` member, or None when absent."""
        url = f"{self.base_url}{endpoint}"
        async with httpx.AsyncClient(timeout=self.timeout, transport=self._transport) as client:
            response = await client.get(url, headers=self._headers(), params=params or None)
            response.raise_for_status()
            body = response.json()

        if not isinstance(body, dict) or body.get("success") is False:
            logger.warning(f"Report API returned an unsuccessful response for {endpoint}")
            return None
        return body.get("data")

    @staticmethod
    def _params(report_filter: ReportFilter, with_dates: bool = True) -> Dict[str, str]:
        params = {}
        if report_filter.startup_id:
            params["startupId"] = report_filter.startup_id
        if with_dates:
            params.update(report_filter.date_range.to_query_params())
        return params

    async def get_budget_report(self, report_filter: ReportFilter) -> Optional[BudgetReport]:
        """Budget report. The endpoint only filters by startup; dates are not sent."""
        data = await self._get(
            API_ROUTES["REPORTS_BUDGET"], self._params(report_filter, with_dates=False)
        )
        return parse_payload(PAYLOAD_BUDGET, data) if data else None

    async def get_expense_report(self, report_filter: ReportFilter) -> Optional[ExpenseReport]:
        params = self._params(report_filter)
        if report_filter.status:
            params["status"] = report_filter.status
        data = await self._get(API_ROUTES["REPORTS_EXPENSES"], params)
        return parse_payload(PAYLOAD_EXPENSE, data) if data else None

    async def get_activity_report(self, report_filter: ReportFilter) -> Optional[ActivityReport]:
        data = await self._get(API_ROUTES["REPORTS_ACTIVITY"], self._params(report_filter))
        return parse_payload(PAYLOAD_ACTIVITY, data) if data else None

    async def list_startups(self) -> List[StartupRef]:
        """Startups for the filter dropdown (id and name only)."""
        data = await self._get(API_ROUTES["STARTUPS"])
        if not isinstance(data, list):
            return []
        return [StartupRef.model_validate(item) for item in data]
