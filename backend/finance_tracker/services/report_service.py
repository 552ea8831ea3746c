import calendar
from datetime import date
from sqlalchemy.orm import Session
from sqlalchemy import func, extract, case

from ..errors import ValidationError
from ..models import Transaction, TransactionType, Category

DEFAULT_TREND_MONTHS = 6
DEFAULT_MAX_TREND_MONTHS = 120


def month_bounds(year: int, month: int) -> tuple[date, date]:
    """First day of the month and first day of the following month."""
    start = date(year, month, 1)
    if month == 12:
        return start, date(year + 1, 1, 1)
    return start, date(year, month + 1, 1)


def months_ago(today: date, months: int) -> date:
    """
    Step back a number of calendar months.

    The day is clamped to the length of the target month, so 31 March minus
    one month is 28 (or 29) February.
    """
    index = today.year * 12 + (today.month - 1) - months
    year, month_index = divmod(index, 12)
    month = month_index + 1
    day = min(today.day, calendar.monthrange(year, month)[1])
    return date(year, month, day)


def _is_positive_int(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value > 0


class ReportService:
    """Aggregations over one user's ledger. Every query is scoped to ``user_id``."""

    def __init__(self, db: Session, max_trend_months: int = DEFAULT_MAX_TREND_MONTHS):
        self.db = db
        self.max_trend_months = max_trend_months

    @staticmethod
    def _income_expense_columns():
        income = func.coalesce(
            func.sum(case((Transaction.type == TransactionType.INCOME, Transaction.amount), else_=0)),
            0,
        ).label("income")
        expense = func.coalesce(
            func.sum(case((Transaction.type == TransactionType.EXPENSE, Transaction.amount), else_=0)),
            0,
        ).label("expense")
        return income, expense

    def monthly_summary(
        self,
        user_id: int,
        year: int | None = None,
        month: int | None = None,
        today: date | None = None,
    ) -> dict:
        """
        Totals, per-category breakdown and daily series for one calendar month.

        Missing year or month default to the current one.
        """
        today = today or date.today()
        year = today.year if year is None else year
        month = today.month if month is None else month

        if not 1 <= month <= 12:
            raise ValidationError("month must be between 1 and 12")
        if not 1 <= year <= 9998:
            raise ValidationError("year is out of range")

        start, end = month_bounds(year, month)
        period = (
            Transaction.user_id == user_id,
            Transaction.date >= start,
            Transaction.date < end,
        )

        return {
            "summary": self._period_summary(period),
            "category_breakdown": self._category_breakdown(period),
            "daily_spending": self._daily_spending(period),
            "period": {"year": year, "month": month},
        }

    def _period_summary(self, period) -> dict:
        rows = (
            self.db.query(
                Transaction.type,
                func.sum(Transaction.amount).label("total"),
                func.count(Transaction.id).label("count"),
            )
            .filter(*period)
            .group_by(Transaction.type)
            .all()
        )

        summary = {
            "income": 0.0,
            "expense": 0.0,
            "net": 0.0,
            "income_count": 0,
            "expense_count": 0,
        }
        for row in rows:
            if row.type == TransactionType.INCOME:
                summary["income"] = float(row.total or 0)
                summary["income_count"] = int(row.count or 0)
            else:
                summary["expense"] = float(row.total or 0)
                summary["expense_count"] = int(row.count or 0)

        summary["net"] = summary["income"] - summary["expense"]
        return summary

    def _category_breakdown(self, period) -> list[dict]:
        total = func.sum(Transaction.amount).label("total")

        # Ties on total fall back to category name (uncategorized last), then type
        rows = (
            self.db.query(
                Category.name.label("category_name"),
                Category.color.label("category_color"),
                Category.icon.label("category_icon"),
                Transaction.type,
                total,
                func.count(Transaction.id).label("count"),
            )
            .outerjoin(Category, Transaction.category_id == Category.id)
            .filter(*period)
            .group_by(Category.name, Category.color, Category.icon, Transaction.type)
            .order_by(
                total.desc(),
                Category.name.is_(None),
                Category.name,
                Transaction.type,
            )
            .all()
        )

        return [
            {
                "category_name": row.category_name,
                "category_color": row.category_color,
                "category_icon": row.category_icon,
                "type": row.type,
                "total": float(row.total or 0),
                "count": int(row.count or 0),
            }
            for row in rows
        ]

    def _daily_spending(self, period) -> list[dict]:
        income, expense = self._income_expense_columns()

        rows = (
            self.db.query(Transaction.date, income, expense)
            .filter(*period)
            .group_by(Transaction.date)
            .order_by(Transaction.date)
            .all()
        )

        return [
            {
                "date": row.date,
                "income": float(row.income or 0),
                "expense": float(row.expense or 0),
            }
            for row in rows
        ]

    def trends(
        self,
        user_id: int,
        months: int = DEFAULT_TREND_MONTHS,
        today: date | None = None,
    ) -> dict[str, dict[str, float]]:
        """
        Income and expense per calendar month over a rolling window.

        The window starts ``months`` calendar months before today (inclusive).
        Keys are ``YYYY-MM`` strings in ascending order.
        """
        if not _is_positive_int(months):
            raise ValidationError("months must be a positive integer")
        if months > self.max_trend_months:
            raise ValidationError(f"months must not exceed {self.max_trend_months}")

        since = months_ago(today or date.today(), months)

        year_col = extract("year", Transaction.date)
        month_col = extract("month", Transaction.date)

        rows = (
            self.db.query(
                year_col.label("year"),
                month_col.label("month"),
                Transaction.type,
                func.sum(Transaction.amount).label("total"),
            )
            .filter(Transaction.user_id == user_id, Transaction.date >= since)
            .group_by(year_col, month_col, Transaction.type)
            .order_by(year_col, month_col)
            .all()
        )

        trends: dict[str, dict[str, float]] = {}
        for row in rows:
            key = f"{int(row.year)}-{int(row.month):02d}"
            point = trends.setdefault(key, {"income": 0.0, "expense": 0.0})
            point[row.type.value] = float(row.total or 0)

        return trends
