"""
PDF Generator — rasterize the HTML report and paginate it into an A4 PDF.

The HTML document is rendered by a headless browser page (off-screen
surface) at a fixed width, screenshotted as one tall bitmap, sliced into
A4-proportioned pages with Pillow, and assembled with fpdf2.

Part of the report_generator_service package.
"""

import io
import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, List, Optional, Union

from PIL import Image

from incubator.config import settings
from incubator.exceptions import ExportError
from incubator.schemas.reports import ReportMetadata
from incubator.services.report_generator_service.export import (
    build_report_filename,
    write_report_file,
)
from incubator.services.report_generator_service.html_builder import build_report_html

logger = logging.getLogger(__name__)

A4_WIDTH_MM = 210.0
A4_HEIGHT_MM = 297.0


class Rasterizer(ABC):
    """Renders an HTML string into a single bitmap."""

    @abstractmethod
    async def rasterize(
        self, html: str, width: int, scale: int, settle_ms: int,
    ) -> Image.Image:
        """Return the whole rendered document as one image."""


class PlaywrightRasterizer(Rasterizer):
    """Headless Chromium via Playwright; the browser is always closed."""

    async def rasterize(
        self, html: str, width: int, scale: int, settle_ms: int,
    ) -> Image.Image:
        try:
            from playwright.async_api import async_playwright
        except ImportError as e:
            raise ExportError("Playwright is not installed, cannot render PDF") from e

        async with async_playwright() as p:
            browser = await p.chromium.launch()
            try:
                page = await browser.new_page(
                    viewport={"width": width, "height": 800},
                    device_scale_factor=scale,
                )
                await page.set_content(html, wait_until="load")
                # Let fonts and images settle before capture
                await page.wait_for_timeout(settle_ms)
                png = await page.screenshot(full_page=True, type="png")
            finally:
                await browser.close()

        return Image.open(io.BytesIO(png)).convert("RGB")


def page_height_px(image_width: int) -> int:
    """Bitmap rows per A4 page when the image width spans the page width."""
    return max(1, round(image_width * A4_HEIGHT_MM / A4_WIDTH_MM))


def paginate_image(image: Image.Image) -> List[Image.Image]:
    """
    Slice a tall bitmap into A4-proportioned pages.

    Keeps placing the remaining slice on a new page until no height is
    left; the last page may be shorter.
    """
    width, height = image.size
    if width <= 0 or height <= 0:
        raise ExportError("Rendered report is empty")

    step = page_height_px(width)
    pages = []
    top = 0
    while top < height:
        bottom = min(top + step, height)
        pages.append(image.crop((0, top, width, bottom)))
        top = bottom
    return pages


def assemble_pdf(pages: List[Image.Image]) -> bytes:
    """One A4 page per slice, image at the top-left spanning the full width."""
    from fpdf import FPDF

    pdf = FPDF(orientation="P", unit="mm", format="A4")
    pdf.set_auto_page_break(auto=False)
    pdf.set_margins(0, 0, 0)

    for page in pages:
        pdf.add_page()
        height_mm = page.height * A4_WIDTH_MM / page.width
        pdf.image(page, x=0, y=0, w=A4_WIDTH_MM, h=height_mm)

    return bytes(pdf.output())


class PdfExporter:
    """Renders a report payload to PDF bytes or a .pdf file."""

    def __init__(
        self,
        rasterizer: Optional[Rasterizer] = None,
        viewport_width: Optional[int] = None,
        scale: Optional[int] = None,
        settle_ms: Optional[int] = None,
    ):
        self.rasterizer = rasterizer or PlaywrightRasterizer()
        self.viewport_width = viewport_width or settings.pdf_viewport_width
        self.scale = scale or settings.pdf_scale
        self.settle_ms = settle_ms if settle_ms is not None else settings.pdf_settle_ms

    async def render(
        self, payload: Any, metadata: ReportMetadata, logo_base64: Optional[str] = None,
    ) -> bytes:
        """
        Render → settle → rasterize → paginate → assemble, strictly in order.

        Raises ExportError on any failure; nothing is written here.
        """
        html = build_report_html(payload, metadata, logo_base64)
        try:
            image = await self.rasterizer.rasterize(
                html, self.viewport_width, self.scale, self.settle_ms,
            )
            pages = paginate_image(image)
            return assemble_pdf(pages)
        except ExportError:
            raise
        except Exception as e:
            logger.error(f"PDF generation failed: {e}", exc_info=True)
            raise ExportError("Failed to generate PDF. Please try again.") from e

    async def export(
        self,
        payload: Any,
        metadata: ReportMetadata,
        logo_base64: Optional[str] = None,
        output_dir: Union[str, Path, None] = None,
    ) -> Path:
        """Render the PDF and save it under the report filename convention."""
        pdf_bytes = await self.render(payload, metadata, logo_base64)
        filename = build_report_filename(metadata, "pdf")
        return write_report_file(output_dir, filename, pdf_bytes)
