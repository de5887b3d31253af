"""
Components — small HTML building blocks shared by the report body builders.

Part of the report_generator_service package. Callers pass already-escaped
strings; labels are static text.
"""

from typing import List, Sequence


def summary_card(label: str, value: str) -> str:
    return f"""
        <div class="summary-card">
            <div class="summary-card-label">{label}</div>
            <div class="summary-card-value">{value}</div>
        </div>"""


def summary_grid(cards: List[str]) -> str:
    return f"""
    <div class="summary-grid">{''.join(cards)}
    </div>"""


def card_item(label: str, value: str) -> str:
    return f"""
                <div class="card-item">
                    <div class="card-item-label">{label}</div>
                    <div class="card-item-value">{value}</div>
                </div>"""


def section(title: str, body: str) -> str:
    return f"""
    <div class="section">
        <h2 class="section-title">{title}</h2>{body}
    </div>"""


def table(headers: Sequence[str], rows: Sequence[Sequence[str]]) -> str:
    """Bordered table; each row is a sequence of cell HTML strings."""
    head = "".join(f"<th>{h}</th>" for h in headers)
    body = "".join(
        "\n                <tr>" + "".join(f"<td>{cell}</td>" for cell in row) + "</tr>"
        for row in rows
    )
    return f"""
        <div class="table-container">
            <table>
                <thead><tr>{head}</tr></thead>
                <tbody>{body}
                </tbody>
            </table>
        </div>"""
