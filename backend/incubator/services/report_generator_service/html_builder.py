"""
HTML Builder — full report document: stylesheet, logo, header, body, footer.

Part of the report_generator_service package.
"""

from typing import Any, Optional

from incubator.constants import PAYLOAD_ACTIVITY, PAYLOAD_BUDGET, PAYLOAD_EXPENSE
from incubator.schemas.reports import ReportMetadata, coerce_payload
from incubator.services.brand_service import get_brand
from incubator.services.period_resolver import format_period_display
from incubator.services.report_generator_service.activity_builder import build_activity_body
from incubator.services.report_generator_service.budget_builder import build_budget_body
from incubator.services.report_generator_service.expense_builder import build_expense_body
from incubator.services.report_generator_service.formatters import format_report_date, text

_BODY_BUILDERS = {
    PAYLOAD_BUDGET: build_budget_body,
    PAYLOAD_EXPENSE: build_expense_body,
    PAYLOAD_ACTIVITY: build_activity_body,
}


def build_report_html(
    payload: Any,
    metadata: ReportMetadata,
    logo_base64: Optional[str] = None,
) -> str:
    """
    Build the complete, self-contained HTML report.

    Args:
        payload: Budget/Expense/Activity report model (or a raw dict, which is
            coerced by shape)
        metadata: Title, period, optional startup name, generation time
        logo_base64: Optional data URL embedded above the header

    Returns:
        HTML string. Identical arguments always produce identical output.
    """
    report = coerce_payload(payload)
    b = get_brand()

    logo_html = _report_logo(logo_base64, b) if logo_base64 else ""
    body_html = _BODY_BUILDERS[report.kind](report)

    html = f"""<!DOCTYPE html>
<html lang="en">
<head>
    <meta charset="UTF-8">
    <meta name="viewport" content="width=device-width, initial-scale=1.0">
    <title>{text(metadata.report_type)} Report</title>
    <style>{_report_stylesheet(b["colors"])}
    </style>
</head>
<body>
<div class="container">{logo_html}
    {_report_header(metadata)}
    {body_html}
    {_report_footer(b, metadata)}
</div>
</body>
</html>"""
    return html


def _report_logo(logo_base64: str, brand: dict) -> str:
    return f"""
    <div class="logo-header">
        <div class="logo-container">
            <img src="{text(logo_base64)}" alt="{text(brand['logoAlt'])}" />
        </div>
    </div>"""


def _report_header(metadata: ReportMetadata) -> str:
    """Report title, period, optional startup, and generation date."""
    startup_html = ""
    if metadata.startup_name:
        startup_html = (
            '\n            <div class="header-meta-item"><strong>Startup:</strong> '
            f"{text(metadata.startup_name)}</div>"
        )
    return f"""
    <div class="header">
        <h1>{text(metadata.report_type)}</h1>
        <div class="header-meta">
            <div class="header-meta-item"><strong>Period:</strong> {text(format_period_display(metadata.period))}</div>{startup_html}
            <div class="header-meta-item"><strong>Generated:</strong> {format_report_date(metadata.generated_at)}</div>
        </div>
    </div>"""


def _report_footer(brand: dict, metadata: ReportMetadata) -> str:
    """Static attribution line with the generation date."""
    return f"""
    <div class="footer">
        <p>{text(brand['attribution'])} {format_report_date(metadata.generated_at)}</p>
        <span>&bull;</span>
        <p>{text(brand['disclaimer'])}</p>
    </div>"""


def _report_stylesheet(c: dict) -> str:
    """Inline stylesheet for the report; colours come from the brand theme."""
    return f"""
        * {{ margin: 0; padding: 0; box-sizing: border-box; }}
        body {{
            font-family: -apple-system, BlinkMacSystemFont, 'Segoe UI', 'Roboto', sans-serif;
            line-height: 1.6; color: {c['textPrimary']}; background: {c['background']};
            padding: 40px;
        }}
        .container {{
            max-width: 1200px; margin: 0 auto; background: {c['surface']};
            padding: 40px; border-radius: 8px;
        }}
        .logo-header {{
            display: flex; align-items: center; justify-content: center;
            margin-bottom: 30px; padding-bottom: 20px;
            border-bottom: 2px solid {c['border']};
        }}
        .logo-container {{ width: 140px; height: 56px; flex-shrink: 0; }}
        .logo-container img {{ width: 100%; height: 100%; object-fit: contain; }}
        .header {{
            border-bottom: 3px solid {c['primary']};
            padding-bottom: 30px; margin-bottom: 40px;
        }}
        .header h1 {{
            font-size: 32px; font-weight: 700; color: {c['textPrimary']};
            margin-bottom: 10px;
        }}
        .header-meta {{
            display: flex; gap: 30px; flex-wrap: wrap; font-size: 14px;
            color: {c['textSecondary']}; margin-top: 15px;
        }}
        .header-meta-item {{ display: flex; align-items: center; gap: 8px; }}
        .summary-grid {{
            display: grid; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr));
            gap: 20px; margin-bottom: 40px;
        }}
        .summary-card {{
            background: {c['primaryLight']}; border: 1px solid {c['border']};
            padding: 24px; border-radius: 8px;
        }}
        .summary-card-label {{
            font-size: 13px; color: {c['textSecondary']}; margin-bottom: 8px;
            font-weight: 500; text-transform: uppercase; letter-spacing: 0.5px;
        }}
        .summary-card-value {{ font-size: 28px; font-weight: 700; color: {c['primary']}; }}
        .section {{ margin-bottom: 50px; }}
        .section-title {{
            font-size: 22px; font-weight: 700; color: {c['textPrimary']};
            margin-bottom: 24px; padding-bottom: 12px;
            border-bottom: 2px solid {c['border']};
        }}
        .table-container {{
            overflow-x: auto; margin-bottom: 30px; border-radius: 8px;
            border: 1px solid {c['border']};
        }}
        table {{ width: 100%; border-collapse: collapse; }}
        thead {{ background: {c['primary']}; color: {c['textInverse']}; }}
        th {{
            padding: 16px; text-align: left; font-weight: 600; font-size: 13px;
            text-transform: uppercase; letter-spacing: 0.5px;
        }}
        td {{
            padding: 16px; border-bottom: 1px solid {c['border']}; font-size: 14px;
            color: {c['textPrimary']};
        }}
        tbody tr:last-child td {{ border-bottom: none; }}
        .badge {{
            display: inline-block; padding: 4px 12px; border-radius: 12px;
            font-size: 12px; font-weight: 600; text-transform: uppercase;
            letter-spacing: 0.5px;
        }}
        .badge-pending {{ background: {c['warningLight']}; color: #92400e; }}
        .badge-approved {{ background: {c['successLight']}; color: #065f46; }}
        .badge-rejected {{ background: {c['errorLight']}; color: #991b1b; }}
        .card {{
            background: {c['surface']}; border: 1px solid {c['border']};
            border-radius: 12px; padding: 24px; margin-bottom: 20px;
            box-shadow: 0 1px 3px rgba(0, 0, 0, 0.1);
        }}
        .card-title {{
            font-size: 18px; font-weight: 700; color: {c['textPrimary']};
            margin-bottom: 16px;
        }}
        .card-grid {{
            display: grid; grid-template-columns: repeat(auto-fit, minmax(150px, 1fr));
            gap: 20px;
        }}
        .card-item {{ display: flex; flex-direction: column; }}
        .card-item-label {{
            font-size: 12px; color: {c['textSecondary']}; margin-bottom: 6px;
            text-transform: uppercase; letter-spacing: 0.5px;
        }}
        .card-item-value {{ font-size: 20px; font-weight: 700; color: {c['primary']}; }}
        .update-details {{
            margin-top: 16px; padding-top: 16px; border-top: 1px solid {c['border']};
        }}
        .update-field {{ margin-bottom: 12px; }}
        .update-field-label {{
            font-weight: 600; color: {c['textPrimary']}; margin-bottom: 4px;
        }}
        .update-field-value {{
            color: {c['textSecondary']}; white-space: pre-wrap; word-break: break-word;
        }}
        .empty-message {{ color: {c['textSecondary']}; }}
        .footer {{
            margin-top: 60px; padding-top: 30px; border-top: 2px solid {c['border']};
            text-align: center; color: {c['textSecondary']}; font-size: 13px;
            page-break-inside: avoid;
        }}
        .footer p {{ display: inline-block; margin: 0 8px; vertical-align: middle; }}
        @media print {{
            body {{ padding: 20px; }}
            .container {{ padding: 30px; }}
            .summary-card, .section {{ break-inside: avoid; page-break-inside: avoid; }}
            .table-container {{ overflow: visible; }}
        }}"""
