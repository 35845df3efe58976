import datetime
import io
from decimal import Decimal
from typing import Iterable, List, Optional, Union

from .config import ReportConfig
from .models import (
    ChartPoint,
    LedgerEntry,
    LedgerSummary,
    MonthBucket,
    ReportDocument,
    ReportRow,
    SourceKind,
)
from .utils import format_currency, format_date

HEADER_FILL = "#db7093"


def _require_reportlab():
    try:
        from reportlab.lib import colors
        from reportlab.lib.pagesizes import A4
        from reportlab.lib.styles import getSampleStyleSheet
        from reportlab.lib.units import cm
        from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle
        return colors, A4, getSampleStyleSheet, cm, (Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle)
    except ModuleNotFoundError as e:
        raise RuntimeError(
            "PDF export requires `reportlab`. Install dependencies with `pip install -e .`."
        ) from e


def build_chart_series(buckets: Iterable[MonthBucket]) -> List[ChartPoint]:
    """
    One point per month bucket, in the buckets' chronological order.
    `cumulative_profit` carries the running total for the profit-evolution chart.
    """
    if buckets is None:
        raise ValueError("buckets is None")

    series: List[ChartPoint] = []
    running = Decimal("0.00")
    for bucket in buckets:
        running += bucket.profit
        series.append(
            ChartPoint(
                display_label=bucket.display_label,
                year=bucket.year,
                month=bucket.month,
                income=bucket.income,
                expense=bucket.expense,
                profit=bucket.profit,
                cumulative_profit=running,
            )
        )
    return series


def sort_entries_for_report(entries: Iterable[LedgerEntry], order: str = "desc") -> List[LedgerEntry]:
    """
    Order rows for the printable report: "desc" (most recent first), "asc",
    or "input" (as supplied). Entries sharing a date keep their input order.
    """
    if order not in {"desc", "asc", "input"}:
        raise ValueError("order must be 'desc', 'asc', or 'input'")
    entries = list(entries)
    if order == "input":
        return entries
    return sorted(entries, key=lambda entry: entry.date, reverse=(order == "desc"))


def build_report_document(
    entries: Iterable[LedgerEntry],
    summary: LedgerSummary,
    generated_on: Optional[datetime.date] = None,
    config: Optional[ReportConfig] = None,
    source: Optional[Union[SourceKind, str]] = None,
) -> ReportDocument:
    """
    Build the printable report: header lines (generation date and the three
    totals) plus one pre-formatted row per entry, in the order supplied.
    The label column is headed by source ("Status" for orders, "Descrição"
    for transactions); without `source` it follows the first entry.
    """
    if entries is None:
        raise ValueError("entries is None")
    entries = list(entries)
    if source is None:
        source = entries[0].source if entries else SourceKind.ORDER
    source = SourceKind(source)
    config = config or ReportConfig()
    text = config.text
    generated_on = generated_on or datetime.date.today()
    symbol = config.currency_symbol

    header_lines = [
        text["generated_on"].format(date=format_date(generated_on)),
        text["total_income"].format(value=format_currency(summary.total_income, symbol)),
        text["total_expense"].format(value=format_currency(summary.total_expense, symbol)),
        text["net_profit"].format(value=format_currency(summary.net_profit, symbol)),
    ]

    rows = [
        ReportRow(
            date=format_date(entry.date),
            label=entry.label,
            settled_state=text["settled"] if entry.settled else text["pending"],
            amount=format_currency(entry.amount, symbol),
        )
        for entry in entries
    ]

    return ReportDocument(
        title=config.title,
        generated_on=format_date(generated_on),
        header_lines=header_lines,
        columns=[col.format(label=text["label_heading"][source.value]) for col in text["columns"]],
        rows=rows,
    )


def report_filename(generated_on: Optional[datetime.date] = None) -> str:
    generated_on = generated_on or datetime.date.today()
    return f"relatorio-financeiro-{generated_on.isoformat()}.pdf"


def build_pdf_report(document: ReportDocument) -> bytes:
    """
    Render a ReportDocument to A4 PDF bytes:
      - title and header lines
      - grid table with one row per entry
    Writing the bytes anywhere is left to the caller.
    """
    colors, A4, getSampleStyleSheet, cm, platypus = _require_reportlab()
    Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle = platypus

    buf = io.BytesIO()
    styles = getSampleStyleSheet()
    doc = SimpleDocTemplate(
        buf,
        pagesize=A4,
        leftMargin=1.5 * cm,
        rightMargin=1.5 * cm,
        topMargin=1.5 * cm,
        bottomMargin=1.5 * cm,
        title=document.title,
    )

    story = [Paragraph(document.title, styles["Title"]), Spacer(1, 0.3 * cm)]
    for line in document.header_lines:
        story.append(Paragraph(line, styles["Normal"]))
    story.append(Spacer(1, 0.5 * cm))

    table_data = [list(document.columns)]
    for row in document.rows:
        table_data.append([row.date, row.label, row.settled_state, row.amount])

    tbl = Table(table_data, colWidths=[3 * cm, 7 * cm, 3.5 * cm, 3.5 * cm], repeatRows=1)
    tbl.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), colors.HexColor(HEADER_FILL)),
        ("TEXTCOLOR", (0, 0), (-1, 0), colors.white),
        ("FONTNAME", (0, 0), (-1, 0), "Helvetica-Bold"),
        ("GRID", (0, 0), (-1, -1), 0.25, colors.grey),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
        ("ALIGN", (-1, 1), (-1, -1), "RIGHT"),
    ]))
    story.append(tbl)

    doc.build(story)
    buf.seek(0)
    return buf.read()
