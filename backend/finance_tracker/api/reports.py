import logging
from datetime import date
from fastapi import APIRouter, Depends, Query
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import get_db
from ..models import TransactionType
from ..schemas import (
    CurrentUser,
    PeriodSummary,
    CategoryBreakdownRow,
    DailySeriesPoint,
    Period,
    MonthlySummaryResponse,
    TrendPoint,
    TrendsResponse,
)
from ..services.export_service import encode_csv, encode_report_document
from ..services.ledger_service import LedgerService, TransactionFilters
from ..services.report_document import DocumentRenderer
from ..services.report_service import ReportService, DEFAULT_TREND_MONTHS
from .deps import get_current_user, get_document_renderer, get_settings

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/monthly-summary", response_model=MonthlySummaryResponse)
def monthly_summary(
    year: int | None = Query(None),
    month: int | None = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Totals, category breakdown and daily series for one month (default: current)."""
    result = ReportService(db).monthly_summary(user.id, year=year, month=month)

    return MonthlySummaryResponse(
        summary=PeriodSummary(**result["summary"]),
        category_breakdown=[CategoryBreakdownRow(**row) for row in result["category_breakdown"]],
        daily_spending=[DailySeriesPoint(**row) for row in result["daily_spending"]],
        period=Period(**result["period"]),
    )


@router.get("/trends", response_model=TrendsResponse)
def trends(
    months: int = Query(DEFAULT_TREND_MONTHS),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Monthly income and expense over the last ``months`` calendar months."""
    service = ReportService(db, max_trend_months=settings.max_trend_months)
    result = service.trends(user.id, months=months)

    return TrendsResponse(
        trends={key: TrendPoint(**point) for key, point in result.items()}
    )


@router.get("/export/csv")
def export_csv(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    type: TransactionType | None = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Download every matching transaction as CSV."""
    filters = TransactionFilters(start_date=start_date, end_date=end_date, type=type)
    rows = LedgerService(db).export_rows(user.id, filters)
    logger.info("CSV export of %d transactions for user %d", len(rows), user.id)

    return Response(
        content=encode_csv(rows),
        media_type="text/csv",
        headers={"Content-Disposition": "attachment; filename=transactions.csv"},
    )


@router.get("/export/pdf")
def export_pdf(
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    type: TransactionType | None = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
    renderer: DocumentRenderer = Depends(get_document_renderer),
):
    """Download every matching transaction as a PDF report."""
    filters = TransactionFilters(start_date=start_date, end_date=end_date, type=type)
    rows = LedgerService(db).export_rows(user.id, filters)
    logger.info("PDF export of %d transactions for user %d", len(rows), user.id)

    pdf = encode_report_document(rows, start_date, end_date, renderer=renderer)
    return Response(
        content=pdf,
        media_type="application/pdf",
        headers={"Content-Disposition": "attachment; filename=transactions.pdf"},
    )
