"""
Report Fetch Coordinator

Translates a report kind plus filter into exactly the report queries that
kind needs, runs them concurrently, and exposes one loading flag.
"""

import asyncio
import logging
from collections import Counter
from dataclasses import dataclass
from typing import Any, List, Optional

from incubator.constants import (
    PAYLOAD_ACTIVITY,
    PAYLOAD_BUDGET,
    PAYLOAD_EXPENSE,
    REQUIRED_PAYLOADS,
)
from incubator.exceptions import ReportFetchError, ValidationError
from incubator.schemas.reports import ReportFilter
from incubator.services.report_api_client import ReportApiClient

logger = logging.getLogger(__name__)


@dataclass
class FetchResult:
    """Outcome of a successful fetch."""
    kind: str
    primary: Any  # Payload that gets rendered and stored
    secondary: Optional[Any] = None  # Expense half of financial-overview


class ReportFetchCoordinator:
    """Arms only the queries a report kind requires."""

    def __init__(self, client: Optional[ReportApiClient] = None):
        self.client = client or ReportApiClient()
        self._in_flight: Counter = Counter()  # payload kind -> queries running
        self._armed: List[str] = []

    @staticmethod
    def required_payloads(kind: str) -> List[str]:
        if kind not in REQUIRED_PAYLOADS:
            raise ValidationError(f"Unknown report type: {kind}")
        return list(REQUIRED_PAYLOADS[kind])

    @property
    def is_loading(self) -> bool:
        return any(n > 0 for n in self._in_flight.values())

    @property
    def armed(self) -> List[str]:
        return list(self._armed)

    def _query_for(self, payload: str):
        return {
            PAYLOAD_BUDGET: self.client.get_budget_report,
            PAYLOAD_EXPENSE: self.client.get_expense_report,
            PAYLOAD_ACTIVITY: self.client.get_activity_report,
        }[payload]

    async def _run(self, payload: str, report_filter: ReportFilter):
        self._in_flight[payload] += 1
        try:
            return await self._query_for(payload)(report_filter)
        finally:
            self._in_flight[payload] -= 1

    async def fetch(self, kind: str, report_filter: ReportFilter) -> FetchResult:
        """
        Fetch the payload(s) for ``kind``.

        Raises ReportFetchError if the primary payload comes back empty or
        its query fails. A failed secondary payload is logged and left None.
        """
        required = self.required_payloads(kind)
        self._armed = required

        results = await asyncio.gather(
            *(self._run(p, report_filter) for p in required),
            return_exceptions=True,
        )

        payloads = {}
        for name, result in zip(required, results):
            if isinstance(result, Exception):
                logger.warning(f"{name} report query failed for {kind}: {result}")
                payloads[name] = None
            else:
                payloads[name] = result

        primary = payloads[required[0]]
        if primary is None:
            raise ReportFetchError(f"No {required[0]} data returned for {kind}")

        secondary = payloads[required[1]] if len(required) > 1 else None
        return FetchResult(kind=kind, primary=primary, secondary=secondary)
