"""
Report Wizard

Three-step flow for generating a report: select a report kind, configure
the period and startup filter, then preview and download. Holds the
selections, drives the fetch coordinator and exporters, and records each
download in the report history.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from pathlib import Path
from typing import Any, Callable, List, Optional, Union

from incubator.constants import REPORT_TYPES, REQUIRED_PAYLOADS, report_type_name
from incubator.exceptions import AppError, ReportFetchError, ValidationError
from incubator.schemas.reports import (
    DateRange,
    ReportFilter,
    ReportMetadata,
    StartupRef,
    StoredReport,
)
from incubator.services.period_resolver import resolve_period
from incubator.services.report_fetch_coordinator import ReportFetchCoordinator
from incubator.services.report_generator_service import (
    LogoCache,
    PdfExporter,
    export_html,
)
from incubator.services.report_history_service import ReportHistoryStore, new_report_id

logger = logging.getLogger(__name__)

EXPORT_FORMATS = ("html", "pdf")
DEFAULT_FORMAT = "pdf"
ALL_STARTUPS = "all"


class WizardStep(str, Enum):
    SELECT = "select"
    CONFIGURE = "configure"
    PREVIEW = "preview"


class Notifier(ABC):
    """Non-blocking user notices (toasts in a UI, log lines otherwise)."""

    @abstractmethod
    def success(self, message: str) -> None:
        pass

    @abstractmethod
    def error(self, message: str) -> None:
        pass


class LoggingNotifier(Notifier):
    def success(self, message: str) -> None:
        logger.info(message)

    def error(self, message: str) -> None:
        logger.warning(message)


@dataclass
class GeneratedReport:
    """A fetched report plus the selections it was fetched for."""
    kind: str
    period: str
    data: Any
    secondary: Optional[Any] = None
    startup_id: str = ALL_STARTUPS
    startup_name: Optional[str] = None


class ReportWizard:
    """
    select → configure → preview.

    Always starts at ``select``. ``reset()`` bumps a generation counter so a
    generate call still in flight cannot push a stale result into the next
    cycle.
    """

    def __init__(
        self,
        coordinator: Optional[ReportFetchCoordinator] = None,
        pdf_exporter: Optional[PdfExporter] = None,
        history: Optional[ReportHistoryStore] = None,
        notifier: Optional[Notifier] = None,
        logo_cache: Optional[LogoCache] = None,
        startups: Optional[List[StartupRef]] = None,
        clock: Callable[[], datetime] = datetime.utcnow,
        output_dir: Union[str, Path, None] = None,
    ):
        self.coordinator = coordinator or ReportFetchCoordinator()
        self.pdf_exporter = pdf_exporter or PdfExporter()
        self.history_store = history or ReportHistoryStore()
        self.notifier = notifier or LoggingNotifier()
        self.logo_cache = logo_cache or LogoCache()
        self.startups: List[StartupRef] = list(startups or [])
        self.clock = clock
        self.output_dir = output_dir

        self._generation = 0
        self.is_generating = False
        self._clear_selections()

    def _clear_selections(self):
        self.step = WizardStep.SELECT
        self.report_kind: Optional[str] = None
        self.period: Optional[str] = None
        self.startup_id: str = ALL_STARTUPS
        self.export_format: str = DEFAULT_FORMAT
        self.generated_report: Optional[GeneratedReport] = None

    # ------------------------------------------------------------------
    # Selection
    # ------------------------------------------------------------------

    @property
    def report_types(self) -> List[dict]:
        return REPORT_TYPES

    async def load_startups(self) -> List[StartupRef]:
        """Refresh the startup dropdown from the API; keeps the old list on failure."""
        try:
            self.startups = await self.coordinator.client.list_startups()
        except Exception as e:
            logger.warning(f"Failed to load startups: {e}")
        return self.startups

    def select_report(self, kind: str) -> None:
        if kind not in REQUIRED_PAYLOADS:
            raise ValidationError(f"Unknown report type: {kind}")
        self.report_kind = kind
        self.step = WizardStep.CONFIGURE

    def set_period(self, token: str) -> None:
        self.period = token or None

    def set_startup(self, startup_id: Optional[str]) -> None:
        self.startup_id = startup_id or ALL_STARTUPS

    def set_format(self, export_format: str) -> None:
        if export_format not in EXPORT_FORMATS:
            raise ValidationError(f"Unsupported export format: {export_format}")
        self.export_format = export_format

    @property
    def can_generate(self) -> bool:
        return bool(self.report_kind and self.period)

    @property
    def date_range(self) -> DateRange:
        if not self.period:
            return DateRange()
        return resolve_period(self.period, self.clock())

    @property
    def report_filter(self) -> ReportFilter:
        return ReportFilter(startup_id=self.startup_id, date_range=self.date_range)

    @property
    def is_loading(self) -> bool:
        return self.is_generating or self.coordinator.is_loading

    def _startup_name(self) -> Optional[str]:
        if self.startup_id == ALL_STARTUPS:
            return None
        for startup in self.startups:
            if startup.id == self.startup_id:
                return startup.name
        return None

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------

    def back(self) -> None:
        """configure → select."""
        if self.step == WizardStep.CONFIGURE:
            self.step = WizardStep.SELECT

    def back_to_configure(self) -> None:
        """preview → configure, keeping every selection."""
        if self.step == WizardStep.PREVIEW:
            self.step = WizardStep.CONFIGURE

    def reset(self) -> None:
        """Back to the initial select step with all selections cleared."""
        self._generation += 1
        self.is_generating = False
        self._clear_selections()

    # ------------------------------------------------------------------
    # Generate / download
    # ------------------------------------------------------------------

    async def generate(self) -> bool:
        """
        Fetch the report for the current selections.

        Only runs from the configure step. Success moves to preview. Failure
        stays in configure and posts an error notice. Returns True on success.
        """
        if self.step != WizardStep.CONFIGURE:
            logger.warning(f"generate() ignored in step {self.step.value}")
            return False
        if not self.can_generate:
            self.notifier.error("Please select a report type and time period")
            return False

        generation = self._generation
        kind = self.report_kind
        period = self.period
        startup_id = self.startup_id
        startup_name = self._startup_name()
        self.is_generating = True
        try:
            result = await self.coordinator.fetch(kind, self.report_filter)
        except ReportFetchError as e:
            if generation == self._generation:
                logger.warning(f"Report generation failed for {kind}: {e.message}")
                self.is_generating = False
                self.notifier.error("Failed to generate report. Please try again.")
            return False

        if generation != self._generation:
            # Wizard was reset while the fetch was running
            return False

        self.generated_report = GeneratedReport(
            kind=kind,
            period=period,
            data=result.primary,
            secondary=result.secondary,
            startup_id=startup_id,
            startup_name=startup_name,
        )
        self.step = WizardStep.PREVIEW
        self.is_generating = False
        self.notifier.success("Report generated successfully")
        return True

    async def _export(self, data: Any, metadata: ReportMetadata, export_format: str) -> Path:
        logo = await self.logo_cache.get()
        if export_format == "pdf":
            return await self.pdf_exporter.export(data, metadata, logo, self.output_dir)
        return export_html(data, metadata, logo, self.output_dir)

    async def download(self) -> Optional[Path]:
        """
        Export the generated report in the selected format and record it in
        history. Returns the written file, or None on failure.
        """
        report = self.generated_report
        if report is None or report.data is None:
            self.notifier.error("No report to download")
            return None

        export_format = self.export_format
        type_name = report_type_name(report.kind)
        startup_name = report.startup_name
        generated_at = self.clock()
        metadata = ReportMetadata(
            report_type=type_name,
            period=report.period,
            startup_name=startup_name,
            generated_at=generated_at,
        )

        try:
            path = await self._export(report.data, metadata, export_format)
        except (AppError, OSError) as e:
            logger.error(f"Report download failed: {e}")
            self.notifier.error("Failed to download report. Please try again.")
            return None

        self.notifier.success(f"{export_format.upper()} report downloaded")
        self.history_store.add(StoredReport(
            id=new_report_id(generated_at),
            type=report.kind,
            type_name=type_name,
            period=report.period,
            startup_name=startup_name,
            format=export_format,
            generated_at=generated_at.isoformat(),
            data=report.data,
        ))
        return path

    # ------------------------------------------------------------------
    # History
    # ------------------------------------------------------------------

    @property
    def history(self) -> List[StoredReport]:
        return self.history_store.list()

    async def download_from_history(self, entry: StoredReport) -> Optional[Path]:
        """Re-export a stored report from its saved payload, without re-fetching."""
        try:
            path = await self._export(entry.data, entry.to_metadata(), entry.format)
        except (AppError, OSError) as e:
            logger.error(f"History download failed for {entry.id}: {e}")
            self.notifier.error("Failed to download report. Please try again.")
            return None
        self.notifier.success(f"{entry.format.upper()} report downloaded")
        return path

    def delete_from_history(self, report_id: str) -> None:
        self.history_store.delete(report_id)
        self.notifier.success("Report deleted from history")
