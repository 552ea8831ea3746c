"""
Export encoders for filtered transaction sets.

Both encoders work from the rows they are given and never query the store,
so a document's totals always describe exactly the rows it lists.
"""

import csv
import io
import logging
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable

from ..errors import UpstreamError
from .ledger_service import ExportRow
from .pdf_renderer import render_pdf
from .report_document import REPORT_TITLE, DocumentRenderer, ReportDocument, ReportRow

logger = logging.getLogger(__name__)

CSV_HEADER = "Date,Type,Amount,Description,Category"


def _to_decimal(value) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def _format_date(value) -> str:
    if isinstance(value, (date, datetime)):
        return value.isoformat()
    return str(value)


def _format_amount(value) -> str:
    return f"{_to_decimal(value):.2f}"


def encode_csv(rows: Iterable[ExportRow]) -> str:
    """
    Encode transactions as CSV text.

    The header is unquoted; every data field is quoted, with embedded quotes
    doubled. Lines are separated by ``\\n``; only a header-only export ends
    with a newline.
    """
    buffer = io.StringIO()
    writer = csv.writer(buffer, quoting=csv.QUOTE_ALL, lineterminator="\n")

    buffer.write(CSV_HEADER + "\n")
    for row in rows:
        writer.writerow([
            _format_date(row.date),
            row.type,
            _format_amount(row.amount),
            row.description or "",
            row.category_name or "",
        ])

    text = buffer.getvalue()
    if text == CSV_HEADER + "\n":
        return text
    # Drop the terminator after the last data line
    return text[:-1]


def format_period(start_date: date | None, end_date: date | None) -> str:
    start = _format_date(start_date) if start_date else "All time"
    end = _format_date(end_date) if end_date else "Present"
    return f"{start} to {end}"


def build_report_document(
    rows: Iterable[ExportRow],
    start_date: date | None = None,
    end_date: date | None = None,
    generated_at: datetime | None = None,
) -> ReportDocument:
    """Lay out the report: header, one row per transaction, summary totals."""
    document = ReportDocument(
        title=REPORT_TITLE,
        generated_at=generated_at or datetime.now(),
        period=format_period(start_date, end_date),
    )

    for row in rows:
        amount = _to_decimal(row.amount)
        if row.type == "income":
            document.total_income += amount
        elif row.type == "expense":
            document.total_expense += amount

        document.rows.append(ReportRow(
            date=_format_date(row.date),
            type=row.type,
            amount=f"${amount:.2f}",
            description=row.description or "",
            category=row.category_name or "",
        ))

    return document


def encode_report_document(
    rows: Iterable[ExportRow],
    start_date: date | None = None,
    end_date: date | None = None,
    renderer: DocumentRenderer = render_pdf,
    generated_at: datetime | None = None,
) -> bytes:
    """
    Build the report document and render it to bytes.

    Any renderer failure becomes a single UpstreamError; nothing is returned
    from a failed render.
    """
    document = build_report_document(rows, start_date, end_date, generated_at)

    try:
        return renderer(document)
    except Exception as e:
        logger.exception("Report rendering failed for %d rows", document.transaction_count)
        raise UpstreamError() from e
