"""Structured report document, independent of how it gets rendered."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Callable

REPORT_TITLE = "Transaction Report"


@dataclass
class ReportRow:
    """A table row. ``css_class`` drives per-type styling."""
    date: str
    type: str
    amount: str
    description: str
    category: str

    @property
    def css_class(self) -> str:
        return self.type


@dataclass
class ReportDocument:
    """Header, transaction table and summary block of an exported report."""
    title: str
    generated_at: datetime
    period: str
    rows: list[ReportRow] = field(default_factory=list)
    total_income: Decimal = Decimal("0")
    total_expense: Decimal = Decimal("0")

    @property
    def transaction_count(self) -> int:
        return len(self.rows)

    @property
    def period_line(self) -> str:
        return f"Period: {self.period}"

    @property
    def generated_line(self) -> str:
        return f"Generated on: {self.generated_at:%Y-%m-%d %H:%M}"

    @property
    def summary_lines(self) -> list[str]:
        return [
            f"Total Transactions: {self.transaction_count}",
            f"Total Income: ${self.total_income:.2f}",
            f"Total Expenses: ${self.total_expense:.2f}",
        ]


DocumentRenderer = Callable[[ReportDocument], bytes]
