"""
Export — report filenames and writing finished documents to disk.

Part of the report_generator_service package.
"""

import logging
import os
import re
import tempfile
from pathlib import Path
from typing import Any, Optional, Union

from incubator.config import settings
from incubator.schemas.reports import ReportMetadata
from incubator.services.report_generator_service.html_builder import build_report_html

logger = logging.getLogger(__name__)


def _slug(value: str, default: str) -> str:
    """Lowercase and reduce to [a-z0-9-]; anything else collapses to one '-'."""
    slug = re.sub(r"[^a-z0-9]+", "-", (value or "").lower()).strip("-")
    return slug or default


def build_report_filename(metadata: ReportMetadata, extension: str) -> str:
    """
    "{report type slug}-{period slug}-{YYYY-MM-DD}.{ext}"

    Type and period are reduced to [a-z0-9-] so the result is always a bare
    filename inside the output directory. The date is the date part of
    metadata.generated_at.
    """
    report_slug = _slug(metadata.report_type, "report")
    period_slug = _slug(metadata.period, "all-time")
    day = metadata.generated_at.date().isoformat()
    return f"{report_slug}-{period_slug}-{day}.{_slug(extension, 'html')}"


def write_report_file(
    output_dir: Union[str, Path, None], filename: str, content: bytes,
) -> Path:
    """
    Write ``content`` to output_dir/filename.

    Goes through a temp file and os.replace so a failed write never leaves
    a partial report behind.
    """
    directory = Path(output_dir or settings.report_output_dir)
    directory.mkdir(parents=True, exist_ok=True)
    target = directory / filename

    fd, tmp_path = tempfile.mkstemp(dir=directory, suffix=".part")
    try:
        with os.fdopen(fd, "wb") as f:
            f.write(content)
        os.replace(tmp_path, target)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise

    logger.info(f"Report written: {target}")
    return target


def export_html(
    payload: Any,
    metadata: ReportMetadata,
    logo_base64: Optional[str] = None,
    output_dir: Union[str, Path, None] = None,
) -> Path:
    """Render the report and save it as a UTF-8 .html file."""
    html = build_report_html(payload, metadata, logo_base64)
    filename = build_report_filename(metadata, "html")
    return write_report_file(output_dir, filename, html.encode("utf-8"))
