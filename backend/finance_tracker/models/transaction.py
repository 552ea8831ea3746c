import enum
import datetime
from decimal import Decimal
from sqlalchemy import String, Integer, Date, ForeignKey, Enum, Numeric, CheckConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin


class TransactionType(enum.Enum):
    """Direction of a ledger entry."""
    INCOME = "income"
    EXPENSE = "expense"


class Transaction(Base, TimestampMixin):
    """
    A single ledger entry.

    Amounts are always positive; the direction lives in ``type``.
    Only the calendar date matters for reporting, there is no time of day.
    """

    __tablename__ = "transactions"
    __table_args__ = (
        CheckConstraint("amount > 0", name="ck_transaction_amount_positive"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Ownership
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )

    # Core fields
    date: Mapped[datetime.date] = mapped_column(Date, nullable=False, index=True)
    amount: Mapped[Decimal] = mapped_column(Numeric(12, 2), nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True, default="")

    # Category (uncategorized entries allowed)
    category_id: Mapped[int | None] = mapped_column(
        Integer, ForeignKey("categories.id"), nullable=True, index=True
    )

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="transactions")
    category: Mapped["Category | None"] = relationship(
        "Category", back_populates="transactions"
    )

    @property
    def category_name(self) -> str | None:
        return self.category.name if self.category else None

    @property
    def category_color(self) -> str | None:
        return self.category.color if self.category else None

    @property
    def category_icon(self) -> str | None:
        return self.category.icon if self.category else None

    def __repr__(self) -> str:
        return (
            f"<Transaction(id={self.id}, date={self.date}, "
            f"amount={self.amount:.2f}, type='{self.type.value}')>"
        )
