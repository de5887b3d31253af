"""Centralized Pydantic schemas for report payloads and history"""

from .reports import (
    ActivityReport,
    BudgetReport,
    DateRange,
    ExpenseReport,
    ReportFilter,
    ReportMetadata,
    ReportPayload,
    StoredReport,
    coerce_payload,
    detect_payload_kind,
    parse_payload,
)

__all__ = [
    # Payloads
    "BudgetReport",
    "ExpenseReport",
    "ActivityReport",
    "ReportPayload",
    "coerce_payload",
    "detect_payload_kind",
    "parse_payload",
    # Filters and metadata
    "DateRange",
    "ReportFilter",
    "ReportMetadata",
    # History
    "StoredReport",
]
