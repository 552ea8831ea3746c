from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import NamedTuple
from sqlalchemy.orm import Session, Query, joinedload

from ..errors import NotFoundError, ValidationError
from ..models import Transaction, TransactionType, Category


@dataclass(frozen=True)
class TransactionFilters:
    """Optional, conjunctive constraints on a user's ledger."""
    start_date: date | None = None
    end_date: date | None = None
    type: TransactionType | None = None
    category_id: int | None = None


class ExportRow(NamedTuple):
    """One transaction as consumed by the export encoders."""
    date: date
    type: str
    amount: Decimal
    description: str | None
    category_name: str | None
    category_color: str | None = None


# Columns that can never be cleared by an update
_REQUIRED_FIELDS = ("amount", "date", "type")


class LedgerService:
    """Reads and writes a single user's transactions."""

    def __init__(self, db: Session):
        self.db = db

    @staticmethod
    def _apply_filters(query: Query, user_id: int, filters: TransactionFilters) -> Query:
        query = query.filter(Transaction.user_id == user_id)

        if filters.start_date:
            query = query.filter(Transaction.date >= filters.start_date)
        if filters.end_date:
            query = query.filter(Transaction.date <= filters.end_date)
        if filters.type:
            query = query.filter(Transaction.type == filters.type)
        if filters.category_id is not None:
            query = query.filter(Transaction.category_id == filters.category_id)

        return query

    def count_transactions(self, user_id: int, filters: TransactionFilters) -> int:
        """Number of matches for the filters, ignoring any pagination."""
        return self._apply_filters(self.db.query(Transaction), user_id, filters).count()

    def list_transactions(
        self,
        user_id: int,
        filters: TransactionFilters,
        page: int = 1,
        limit: int = 50,
    ) -> tuple[list[Transaction], int]:
        """
        One page of matching transactions, newest first, and the total match count.

        The total comes from a separate COUNT over the same filters.
        """
        if page < 1 or limit < 1:
            raise ValidationError("page and limit must be positive integers")

        query = self._apply_filters(
            self.db.query(Transaction).options(joinedload(Transaction.category)),
            user_id,
            filters,
        )
        items = (
            query.order_by(
                Transaction.date.desc(),
                Transaction.created_at.desc(),
                Transaction.id.desc(),
            )
            .offset((page - 1) * limit)
            .limit(limit)
            .all()
        )
        total = self.count_transactions(user_id, filters)
        return items, total

    def export_rows(self, user_id: int, filters: TransactionFilters) -> list[ExportRow]:
        """Every matching transaction, newest date first, unpaginated."""
        query = self.db.query(
            Transaction.date,
            Transaction.type,
            Transaction.amount,
            Transaction.description,
            Category.name.label("category_name"),
            Category.color.label("category_color"),
        ).outerjoin(Category, Transaction.category_id == Category.id)

        rows = (
            self._apply_filters(query, user_id, filters)
            .order_by(Transaction.date.desc())
            .all()
        )

        return [
            ExportRow(
                date=row.date,
                type=row.type.value,
                amount=row.amount,
                description=row.description,
                category_name=row.category_name,
                category_color=row.category_color,
            )
            for row in rows
        ]

    def get_transaction(self, user_id: int, transaction_id: int) -> Transaction:
        transaction = (
            self.db.query(Transaction)
            .options(joinedload(Transaction.category))
            .filter(Transaction.id == transaction_id, Transaction.user_id == user_id)
            .first()
        )
        if not transaction:
            raise NotFoundError("Transaction not found")
        return transaction

    def _require_category(self, user_id: int, category_id: int) -> None:
        """Referenced category must exist and belong to the user."""
        exists = (
            self.db.query(Category.id)
            .filter(Category.id == category_id, Category.user_id == user_id)
            .first()
        )
        if not exists:
            raise ValidationError("Invalid category")

    def create_transaction(self, user_id: int, data: dict) -> Transaction:
        if data.get("category_id") is not None:
            self._require_category(user_id, data["category_id"])

        transaction = Transaction(
            user_id=user_id,
            category_id=data.get("category_id"),
            amount=data["amount"],
            description=data.get("description") or "",
            date=data["date"],
            type=data["type"],
        )
        self.db.add(transaction)
        self.db.flush()
        self.db.refresh(transaction)
        return transaction

    def update_transaction(self, user_id: int, transaction_id: int, update_data: dict) -> Transaction:
        transaction = self.get_transaction(user_id, transaction_id)

        for field in _REQUIRED_FIELDS:
            if field in update_data and update_data[field] is None:
                raise ValidationError(f"{field} cannot be empty")

        if update_data.get("category_id") is not None:
            self._require_category(user_id, update_data["category_id"])

        for field, value in update_data.items():
            setattr(transaction, field, value)

        self.db.flush()
        self.db.refresh(transaction)
        return transaction

    def delete_transaction(self, user_id: int, transaction_id: int) -> None:
        transaction = self.get_transaction(user_id, transaction_id)
        self.db.delete(transaction)
        self.db.flush()
