"""
Report History Service

Bounded, newest-first list of generated reports so they can be downloaded
again without re-fetching. History is a convenience: read failures yield an
empty list and write failures are logged and dropped, never raised.
"""

import json
import logging
import os
import secrets
import string
import tempfile
from abc import ABC, abstractmethod
from datetime import datetime
from pathlib import Path
from typing import Dict, List, Optional

from pydantic import ValidationError as PydanticValidationError

from incubator.config import settings
from incubator.schemas.reports import StoredReport

logger = logging.getLogger(__name__)

_ID_ALPHABET = string.digits + string.ascii_lowercase


class KeyValueStore(ABC):
    """String key → string value storage backing the history."""

    @abstractmethod
    def get(self, key: str) -> Optional[str]:
        pass

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        pass


class InMemoryStore(KeyValueStore):
    """Process-local store (tests, ephemeral sessions)."""

    def __init__(self, initial: Optional[Dict[str, str]] = None):
        self._data: Dict[str, str] = dict(initial or {})

    def get(self, key: str) -> Optional[str]:
        return self._data.get(key)

    def set(self, key: str, value: str) -> None:
        self._data[key] = value


class JsonFileStore(KeyValueStore):
    """
    Disk-backed store: one JSON object mapping keys to string values.

    Survives restarts. Writes go through a temp file and os.replace.
    """

    def __init__(self, path: Optional[str] = None):
        self.path = Path(path or settings.report_history_path)

    def _read_all(self) -> Dict[str, str]:
        if not self.path.exists():
            return {}
        with open(self.path, "r", encoding="utf-8") as f:
            data = json.load(f)
        if not isinstance(data, dict):
            raise ValueError(f"{self.path} does not contain a JSON object")
        return data

    def get(self, key: str) -> Optional[str]:
        return self._read_all().get(key)

    def set(self, key: str, value: str) -> None:
        try:
            data = self._read_all()
        except ValueError as e:
            logger.warning(f"Replacing unreadable store {self.path}: {e}")
            data = {}
        data[key] = value

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_path = tempfile.mkstemp(dir=self.path.parent, suffix=".tmp")
        try:
            with os.fdopen(fd, "w", encoding="utf-8") as f:
                json.dump(data, f)
            os.replace(tmp_path, self.path)
        except BaseException:
            if os.path.exists(tmp_path):
                os.remove(tmp_path)
            raise


def new_report_id(now: Optional[datetime] = None) -> str:
    """Millisecond timestamp plus 9 random base36 characters."""
    now = now or datetime.utcnow()
    suffix = "".join(secrets.choice(_ID_ALPHABET) for _ in range(9))
    return f"{int(now.timestamp() * 1000)}-{suffix}"


class ReportHistoryStore:
    """Newest-first report history capped at ``limit`` entries."""

    def __init__(
        self,
        store: Optional[KeyValueStore] = None,
        key: Optional[str] = None,
        limit: Optional[int] = None,
    ):
        self.store = store if store is not None else JsonFileStore()
        self.key = key or settings.report_history_key
        self.limit = limit or settings.report_history_limit

    def list(self) -> List[StoredReport]:
        """All entries, newest first. A corrupted store reads as empty."""
        try:
            raw = self.store.get(self.key)
        except (OSError, ValueError) as e:
            logger.warning(f"Failed to read report history: {e}")
            return []
        if not raw:
            return []

        try:
            entries = json.loads(raw)
        except (json.JSONDecodeError, TypeError) as e:
            logger.warning(f"Report history is not valid JSON, ignoring it: {e}")
            return []
        if not isinstance(entries, list):
            return []

        reports = []
        for item in entries:
            try:
                reports.append(StoredReport.model_validate(item))
            except PydanticValidationError as e:
                logger.warning(f"Skipping invalid history entry: {e.error_count()} errors")
        return reports

    def get(self, report_id: str) -> Optional[StoredReport]:
        for report in self.list():
            if report.id == report_id:
                return report
        return None

    def add(self, entry: StoredReport) -> None:
        """Prepend ``entry`` (replacing any entry with the same id), then cap."""
        existing = [r for r in self.list() if r.id != entry.id]
        self._write([entry] + existing)

    def delete(self, report_id: str) -> None:
        """Remove the entry with ``report_id``; no-op if it is not there."""
        reports = self.list()
        remaining = [r for r in reports if r.id != report_id]
        if len(remaining) != len(reports):
            self._write(remaining)

    def _write(self, reports: List[StoredReport]) -> None:
        try:
            payload = json.dumps([
                r.model_dump(mode="json", by_alias=True)
                for r in reports[: self.limit]
            ])
            self.store.set(self.key, payload)
        except Exception as e:
            logger.warning(f"Failed to write report history: {e}")
