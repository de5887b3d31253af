"""
Report Generator Service

Split into focused modules:
- html_builder: complete HTML document (stylesheet, header, footer)
- budget_builder / expense_builder / activity_builder: per-kind report bodies
- pdf_generator: headless rasterization, A4 pagination, PDF assembly with fpdf2
- export: filenames and file writing
- logo_cache: logo loaded once as a data URL
"""

from incubator.services.report_generator_service.html_builder import build_report_html  # noqa: F401
from incubator.services.report_generator_service.export import (  # noqa: F401
    build_report_filename,
    export_html,
    write_report_file,
)
from incubator.services.report_generator_service.logo_cache import LogoCache  # noqa: F401
from incubator.services.report_generator_service.pdf_generator import (  # noqa: F401
    PdfExporter,
    PlaywrightRasterizer,
    Rasterizer,
    assemble_pdf,
    paginate_image,
)
