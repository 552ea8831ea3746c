"""Render a ReportDocument to an A4 PDF with reportlab."""

from io import BytesIO
from xml.sax.saxutils import escape

from reportlab.lib import colors
from reportlab.lib.pagesizes import A4
from reportlab.lib.styles import ParagraphStyle, getSampleStyleSheet
from reportlab.lib.units import mm
from reportlab.platypus import Paragraph, SimpleDocTemplate, Spacer, Table, TableStyle

from .report_document import ReportDocument

# Per-type text colours, keyed by row css_class
TYPE_COLORS = {
    "income": colors.HexColor("#10B981"),
    "expense": colors.HexColor("#EF4444"),
}
HEADER_BACKGROUND = colors.HexColor("#F2F2F2")
GRID_COLOR = colors.HexColor("#DDDDDD")
SUMMARY_BACKGROUND = colors.HexColor("#F9F9F9")

COLUMNS = ["Date", "Type", "Amount", "Description", "Category"]
COLUMN_WIDTHS = [25 * mm, 22 * mm, 28 * mm, 60 * mm, 40 * mm]


def _cell_style(base: ParagraphStyle, css_class: str | None = None) -> ParagraphStyle:
    color = TYPE_COLORS.get(css_class, colors.black) if css_class else colors.black
    return ParagraphStyle(f"cell-{css_class or 'plain'}", parent=base, textColor=color)


def _build_table(document: ReportDocument, styles) -> Table:
    body = styles["BodyText"]
    plain = _cell_style(body)

    data = [[Paragraph(f"<b>{name}</b>", plain) for name in COLUMNS]]
    for row in document.rows:
        typed = _cell_style(body, row.css_class)
        data.append([
            Paragraph(escape(row.date), plain),
            Paragraph(escape(row.type), typed),
            Paragraph(escape(row.amount), typed),
            Paragraph(escape(row.description), plain),
            Paragraph(escape(row.category), plain),
        ])

    table = Table(data, colWidths=COLUMN_WIDTHS, repeatRows=1)
    table.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, 0), HEADER_BACKGROUND),
        ("GRID", (0, 0), (-1, -1), 0.5, GRID_COLOR),
        ("VALIGN", (0, 0), (-1, -1), "TOP"),
    ]))
    return table


def _build_summary(document: ReportDocument, styles) -> Table:
    rows = [[Paragraph("Summary", styles["Heading2"])]]
    rows.extend([Paragraph(escape(line), styles["BodyText"])] for line in document.summary_lines)

    summary = Table(rows, colWidths=[sum(COLUMN_WIDTHS)])
    summary.setStyle(TableStyle([
        ("BACKGROUND", (0, 0), (-1, -1), SUMMARY_BACKGROUND),
        ("LEFTPADDING", (0, 0), (-1, -1), 12),
    ]))
    return summary


def render_pdf(document: ReportDocument) -> bytes:
    """Lay the document out on A4 pages and return the PDF bytes."""
    styles = getSampleStyleSheet()

    story = [
        Paragraph(escape(document.title), styles["Title"]),
        Paragraph(escape(document.generated_line), styles["Normal"]),
        Paragraph(escape(document.period_line), styles["Normal"]),
        Spacer(1, 6 * mm),
        _build_table(document, styles),
        Spacer(1, 10 * mm),
        _build_summary(document, styles),
    ]

    buffer = BytesIO()
    try:
        pdf = SimpleDocTemplate(
            buffer,
            pagesize=A4,
            title=document.title,
            leftMargin=15 * mm,
            rightMargin=15 * mm,
            topMargin=15 * mm,
            bottomMargin=15 * mm,
        )
        pdf.build(story)
        return buffer.getvalue()
    finally:
        buffer.close()
