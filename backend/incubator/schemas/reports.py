"""Report payload, metadata, and history Pydantic schemas

Payloads arrive from the report API with camelCase keys and no type tag.
Each model carries a ``kind`` literal that is filled in when the payload is
validated at the API boundary, so renderers dispatch on the tag instead of
sniffing keys.
"""
from datetime import date, datetime
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic.alias_generators import to_camel

from incubator.constants import (
    EXPENSE_STATUSES,
    PAYLOAD_ACTIVITY,
    PAYLOAD_BUDGET,
    PAYLOAD_EXPENSE,
    ReportKind,
)
from incubator.exceptions import ValidationError


class ApiModel(BaseModel):
    """Base for API shapes: camelCase on the wire, snake_case in Python."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra="ignore",
    )


class StartupRef(ApiModel):
    id: str
    name: str


class UserRef(ApiModel):
    id: Optional[str] = None
    name: str = ""
    email: Optional[str] = None


# ---------------------------------------------------------------------------
# Budget report
# ---------------------------------------------------------------------------


class BudgetSummary(ApiModel):
    total_startups: int = 0
    total_budget: float = 0
    total_allocated: float = 0
    total_spent: float = 0


class BudgetFigures(ApiModel):
    total: float = 0
    allocated: float = 0
    spent: float = 0
    remaining: float = 0
    utilization_percent: float = 0


class BudgetReportItem(ApiModel):
    startup: StartupRef
    budget: BudgetFigures


class BudgetReport(ApiModel):
    kind: Literal["budget"] = PAYLOAD_BUDGET
    summary: BudgetSummary
    report: List[BudgetReportItem] = []


# ---------------------------------------------------------------------------
# Expense report
# ---------------------------------------------------------------------------


class ExpenseSummary(ApiModel):
    total_expenses: int = 0
    total_amount: float = 0
    approved_amount: float = 0


class StatusTotals(ApiModel):
    count: int = 0
    total: float = 0


class CategoryTotals(ApiModel):
    category_name: str
    startup_name: str = ""
    count: int = 0
    total: float = 0


class ExpenseReport(ApiModel):
    kind: Literal["expense"] = PAYLOAD_EXPENSE
    summary: ExpenseSummary
    by_status: Dict[str, StatusTotals] = {}
    by_category: List[CategoryTotals] = []

    def status_rows(self) -> List[tuple]:
        """(status, totals) pairs: known statuses first, in display order."""
        known = [(s, self.by_status[s]) for s in EXPENSE_STATUSES if s in self.by_status]
        extra = [(s, t) for s, t in self.by_status.items() if s not in EXPENSE_STATUSES]
        return known + extra


# ---------------------------------------------------------------------------
# Activity report
# ---------------------------------------------------------------------------


class ActivitySummary(ApiModel):
    total_progress_updates: int = 0
    total_expenses: int = 0
    active_startups: int = 0


class ProgressUpdate(ApiModel):
    id: Optional[str] = None
    what_was_done: Optional[str] = None
    what_is_blocked: Optional[str] = None
    what_is_next: Optional[str] = None
    created_at: datetime
    startup: StartupRef
    submitted_by: UserRef = UserRef()


class ProgressUpdates(ApiModel):
    count: int = 0
    items: List[ProgressUpdate] = []


class ActivityExpenses(ApiModel):
    count: int = 0
    total: float = 0


class StartupActivity(ApiModel):
    startup: StartupRef
    progress_update_count: int = 0
    expense_count: int = 0
    total_expense_amount: float = 0
    last_activity: Optional[datetime] = None


class ActivityReport(ApiModel):
    kind: Literal["activity"] = PAYLOAD_ACTIVITY
    summary: ActivitySummary
    progress_updates: ProgressUpdates = ProgressUpdates()
    expenses: ActivityExpenses = ActivityExpenses()
    activity_by_startup: List[StartupActivity] = []
    timeline: List[Dict[str, Any]] = []


ReportPayload = Annotated[
    Union[BudgetReport, ExpenseReport, ActivityReport],
    Field(discriminator="kind"),
]

_payload_adapter = TypeAdapter(ReportPayload)

_PAYLOAD_MODELS = {
    PAYLOAD_BUDGET: BudgetReport,
    PAYLOAD_EXPENSE: ExpenseReport,
    PAYLOAD_ACTIVITY: ActivityReport,
}


def detect_payload_kind(raw: Dict[str, Any]) -> Optional[str]:
    """
    Infer the payload kind of an untagged dict from its key shape.

    Only used for data that never passed through the API boundary
    (e.g. history entries written without a tag).
    """
    if not isinstance(raw, dict) or "summary" not in raw:
        return None
    summary = raw.get("summary") or {}
    if "report" in raw and isinstance(summary, dict) and "totalStartups" in summary:
        return PAYLOAD_BUDGET
    if "byStatus" in raw and "byCategory" in raw:
        return PAYLOAD_EXPENSE
    if "progressUpdates" in raw and ("timeline" in raw or "activityByStartup" in raw):
        return PAYLOAD_ACTIVITY
    return None


def parse_payload(kind: str, raw: Dict[str, Any]):
    """Validate raw API data as the payload model for ``kind``."""
    model = _PAYLOAD_MODELS.get(kind)
    if model is None:
        raise ValidationError(f"Unknown payload kind: {kind}")
    data = dict(raw)
    data["kind"] = kind
    return model.model_validate(data)


def coerce_payload(data: Any):
    """
    Turn a model, a tagged dict, or an untagged dict into a payload model.

    Raises ValidationError when the shape matches no report type.
    """
    if isinstance(data, (BudgetReport, ExpenseReport, ActivityReport)):
        return data
    if isinstance(data, dict):
        if data.get("kind") in _PAYLOAD_MODELS:
            return _payload_adapter.validate_python(data)
        kind = detect_payload_kind(data)
        if kind:
            return parse_payload(kind, data)
    raise ValidationError("Unrecognized report payload")


# ---------------------------------------------------------------------------
# Filters, metadata, history
# ---------------------------------------------------------------------------


class DateRange(BaseModel):
    start_date: Optional[date] = None
    end_date: Optional[date] = None

    @property
    def is_unbounded(self) -> bool:
        return self.start_date is None and self.end_date is None

    def to_query_params(self) -> Dict[str, str]:
        params = {}
        if self.start_date is not None:
            params["startDate"] = self.start_date.isoformat()
        if self.end_date is not None:
            params["endDate"] = self.end_date.isoformat()
        return params


class ReportFilter(BaseModel):
    startup_id: Optional[str] = None
    date_range: DateRange = DateRange()
    status: Optional[Literal["PENDING", "APPROVED", "REJECTED"]] = None

    @field_validator("startup_id")
    @classmethod
    def all_means_unfiltered(cls, v: Optional[str]) -> Optional[str]:
        if not v or v == "all":
            return None
        return v


class ReportMetadata(BaseModel):
    report_type: str
    period: str
    startup_name: Optional[str] = None
    generated_at: datetime


class StoredReport(ApiModel):
    id: str
    type: ReportKind
    type_name: str
    period: str
    startup_name: Optional[str] = None
    format: Literal["html", "pdf"]
    generated_at: str
    data: ReportPayload

    @field_validator("data", mode="before")
    @classmethod
    def tag_untagged_payload(cls, v: Any) -> Any:
        if isinstance(v, dict) and "kind" not in v:
            kind = detect_payload_kind(v)
            if kind:
                return {**v, "kind": kind}
        return v

    def to_metadata(self) -> ReportMetadata:
        return ReportMetadata(
            report_type=self.type_name,
            period=self.period,
            startup_name=self.startup_name,
            generated_at=datetime.fromisoformat(self.generated_at.replace("Z", "+00:00")),
        )
