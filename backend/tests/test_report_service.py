"""Tests for the aggregation engine (monthly summary and trends)."""
from datetime import date

import pytest

from finance_tracker.errors import ValidationError
from finance_tracker.models import TransactionType
from finance_tracker.services.report_service import ReportService, months_ago, month_bounds

from .factories import INCOME, EXPENSE, make_user, make_category, add_tx


@pytest.fixture
def ledger(db):
    """A user with a mixed January 2024 ledger and one stray December entry."""
    user = make_user(db)
    food = make_category(db, user, "Food & Dining", EXPENSE, "#F59E0B", "restaurant")
    salary = make_category(db, user, "Salary", INCOME, "#10B981", "work")

    add_tx(db, user, "3000.00", INCOME, date(2024, 1, 1), salary, "January pay")
    add_tx(db, user, "12.50", EXPENSE, date(2024, 1, 5), food, "Lunch")
    add_tx(db, user, "40.25", EXPENSE, date(2024, 1, 5), food, "Groceries")
    add_tx(db, user, "99.99", EXPENSE, date(2024, 1, 20), None, "Uncategorized gadget")
    add_tx(db, user, "150.00", INCOME, date(2024, 1, 20), None, "Gift")
    add_tx(db, user, "500.00", EXPENSE, date(2023, 12, 31), food, "Party")
    return user


def test_monthly_summary_totals(db, ledger):
    result = ReportService(db).monthly_summary(ledger.id, year=2024, month=1)
    summary = result["summary"]

    assert summary["income"] == pytest.approx(3150.00)
    assert summary["expense"] == pytest.approx(152.74)
    assert summary["income_count"] == 2
    assert summary["expense_count"] == 3
    assert summary["net"] == summary["income"] - summary["expense"]
    assert result["period"] == {"year": 2024, "month": 1}


def test_breakdown_totals_match_summary(db, ledger):
    result = ReportService(db).monthly_summary(ledger.id, year=2024, month=1)

    for type_, key in ((TransactionType.INCOME, "income"), (TransactionType.EXPENSE, "expense")):
        rows = [row for row in result["category_breakdown"] if row["type"] == type_]
        assert sum(row["total"] for row in rows) == pytest.approx(result["summary"][key])


def test_breakdown_rows_and_order(db, ledger):
    breakdown = ReportService(db).monthly_summary(ledger.id, year=2024, month=1)["category_breakdown"]

    assert [(row["category_name"], row["type"], row["total"], row["count"]) for row in breakdown] == [
        ("Salary", TransactionType.INCOME, pytest.approx(3000.00), 1),
        (None, TransactionType.INCOME, pytest.approx(150.00), 1),
        (None, TransactionType.EXPENSE, pytest.approx(99.99), 1),
        ("Food & Dining", TransactionType.EXPENSE, pytest.approx(52.75), 2),
    ]
    food = breakdown[3]
    assert food["category_color"] == "#F59E0B"
    assert food["category_icon"] == "restaurant"
    uncategorized = breakdown[2]
    assert uncategorized["category_color"] is None
    assert uncategorized["category_icon"] is None


def test_breakdown_ties_sorted_by_category_name(db):
    user = make_user(db)
    zoo = make_category(db, user, "Zoo")
    books = make_category(db, user, "Books")
    cafe = make_category(db, user, "Cafe")

    add_tx(db, user, "10.00", EXPENSE, date(2024, 3, 2), zoo)
    add_tx(db, user, "10.00", EXPENSE, date(2024, 3, 3), None)
    add_tx(db, user, "10.00", EXPENSE, date(2024, 3, 4), books)
    add_tx(db, user, "10.00", EXPENSE, date(2024, 3, 5), cafe)

    breakdown = ReportService(db).monthly_summary(user.id, year=2024, month=3)["category_breakdown"]

    assert [row["category_name"] for row in breakdown] == ["Books", "Cafe", "Zoo", None]


def test_daily_spending_is_sparse_and_split(db, ledger):
    daily = ReportService(db).monthly_summary(ledger.id, year=2024, month=1)["daily_spending"]

    assert [row["date"] for row in daily] == [date(2024, 1, 1), date(2024, 1, 5), date(2024, 1, 20)]
    assert daily[0]["income"] == pytest.approx(3000.00)
    assert daily[0]["expense"] == 0
    assert daily[1]["income"] == 0
    assert daily[1]["expense"] == pytest.approx(52.75)
    assert daily[2]["income"] == pytest.approx(150.00)
    assert daily[2]["expense"] == pytest.approx(99.99)


def test_empty_month(db, ledger):
    result = ReportService(db).monthly_summary(ledger.id, year=2024, month=2)

    assert result["summary"] == {
        "income": 0,
        "expense": 0,
        "net": 0,
        "income_count": 0,
        "expense_count": 0,
    }
    assert result["category_breakdown"] == []
    assert result["daily_spending"] == []


def test_income_only_month_reports_zero_expense(db):
    user = make_user(db)
    add_tx(db, user, "1200.00", INCOME, date(2024, 5, 1))

    summary = ReportService(db).monthly_summary(user.id, year=2024, month=5)["summary"]

    assert summary["expense"] == 0
    assert summary["expense_count"] == 0
    assert summary["income"] == pytest.approx(1200.00)
    assert summary["net"] == pytest.approx(1200.00)


def test_summary_ignores_other_users(db, ledger):
    bob = make_user(db, "bob")
    add_tx(db, bob, "777.00", EXPENSE, date(2024, 1, 10))

    alice = ReportService(db).monthly_summary(ledger.id, year=2024, month=1)
    assert alice["summary"]["expense_count"] == 3

    bob_result = ReportService(db).monthly_summary(bob.id, year=2024, month=1)
    assert bob_result["summary"]["expense"] == pytest.approx(777.00)
    assert bob_result["summary"]["income_count"] == 0


def test_summary_defaults_to_current_month(db):
    user = make_user(db)
    add_tx(db, user, "20.00", EXPENSE, date(2025, 7, 14))

    result = ReportService(db).monthly_summary(user.id, today=date(2025, 7, 31))

    assert result["period"] == {"year": 2025, "month": 7}
    assert result["summary"]["expense_count"] == 1


def test_december_period_includes_last_day(db):
    user = make_user(db)
    add_tx(db, user, "5.00", EXPENSE, date(2023, 12, 31))
    add_tx(db, user, "7.00", EXPENSE, date(2024, 1, 1))

    summary = ReportService(db).monthly_summary(user.id, year=2023, month=12)["summary"]

    assert summary["expense"] == pytest.approx(5.00)
    assert summary["expense_count"] == 1


@pytest.mark.parametrize("month", [0, 13])
def test_summary_rejects_invalid_month(db, month):
    user = make_user(db)
    with pytest.raises(ValidationError):
        ReportService(db).monthly_summary(user.id, year=2024, month=month)


def test_trends_window_and_keys(db):
    user = make_user(db)
    today = date(2024, 6, 15)

    add_tx(db, user, "100.00", INCOME, date(2023, 12, 14))  # just outside the window
    add_tx(db, user, "200.00", INCOME, date(2023, 12, 15))  # first day of the window
    add_tx(db, user, "50.00", EXPENSE, date(2024, 3, 3))
    add_tx(db, user, "25.50", EXPENSE, date(2024, 3, 28))
    add_tx(db, user, "900.00", INCOME, date(2024, 6, 1))

    trends = ReportService(db).trends(user.id, months=6, today=today)

    assert list(trends) == ["2023-12", "2024-03", "2024-06"]
    assert trends["2023-12"] == {"income": pytest.approx(200.00), "expense": 0}
    assert trends["2024-03"] == {"income": 0, "expense": pytest.approx(75.50)}
    assert trends["2024-06"] == {"income": pytest.approx(900.00), "expense": 0}


def test_trends_is_idempotent(db):
    user = make_user(db)
    today = date(2024, 6, 15)
    add_tx(db, user, "10.00", EXPENSE, date(2024, 5, 1))
    add_tx(db, user, "30.00", INCOME, date(2024, 4, 1))

    service = ReportService(db)
    assert service.trends(user.id, 6, today=today) == service.trends(user.id, 6, today=today)


def test_trends_scoped_to_user(db):
    alice = make_user(db)
    bob = make_user(db, "bob")
    add_tx(db, bob, "10.00", EXPENSE, date(2024, 5, 1))

    assert ReportService(db).trends(alice.id, 6, today=date(2024, 6, 1)) == {}


@pytest.mark.parametrize("months", [0, -3, True, "6"])
def test_trends_rejects_non_positive_months(db, months):
    user = make_user(db)
    with pytest.raises(ValidationError):
        ReportService(db).trends(user.id, months=months)


def test_trends_caps_window(db):
    user = make_user(db)
    service = ReportService(db, max_trend_months=24)

    assert service.trends(user.id, months=24, today=date(2024, 1, 1)) == {}
    with pytest.raises(ValidationError):
        service.trends(user.id, months=25)


@pytest.mark.parametrize("today, months, expected", [
    (date(2024, 6, 15), 6, date(2023, 12, 15)),
    (date(2024, 3, 31), 1, date(2024, 2, 29)),
    (date(2023, 3, 31), 1, date(2023, 2, 28)),
    (date(2024, 1, 10), 13, date(2022, 12, 10)),
    (date(2024, 8, 31), 2, date(2024, 6, 30)),
])
def test_months_ago(today, months, expected):
    assert months_ago(today, months) == expected


def test_month_bounds_wraps_year():
    assert month_bounds(2024, 12) == (date(2024, 12, 1), date(2025, 1, 1))
    assert month_bounds(2024, 2) == (date(2024, 2, 1), date(2024, 3, 1))
