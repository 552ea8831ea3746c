import datetime
from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..models.transaction import TransactionType


class CamelModel(BaseModel):
    """Serialises field names in camelCase, accepts either form on input."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PeriodSummary(CamelModel):
    income: float = 0
    expense: float = 0
    net: float = 0
    income_count: int = 0
    expense_count: int = 0


class CategoryBreakdownRow(CamelModel):
    category_name: str | None
    category_color: str | None
    category_icon: str | None
    type: TransactionType
    total: float
    count: int


class DailySeriesPoint(CamelModel):
    date: datetime.date
    income: float
    expense: float


class Period(CamelModel):
    year: int
    month: int


class MonthlySummaryResponse(CamelModel):
    summary: PeriodSummary
    category_breakdown: list[CategoryBreakdownRow]
    daily_spending: list[DailySeriesPoint]
    period: Period


class TrendPoint(CamelModel):
    income: float = 0
    expense: float = 0


class TrendsResponse(CamelModel):
    trends: dict[str, TrendPoint]
