from sqlalchemy import String, Integer, ForeignKey, Enum, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, TimestampMixin
from .transaction import TransactionType

DEFAULT_COLOR = "#3B82F6"
DEFAULT_ICON = "category"


class Category(Base, TimestampMixin):
    """
    User-defined label for transactions.
    Names are unique per user; a category in use by any transaction cannot be deleted.
    """

    __tablename__ = "categories"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_category_user_name"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    user_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False, index=True
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    type: Mapped[TransactionType] = mapped_column(
        Enum(TransactionType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    color: Mapped[str] = mapped_column(String(7), nullable=False, default=DEFAULT_COLOR)
    icon: Mapped[str] = mapped_column(String(50), nullable=False, default=DEFAULT_ICON)

    # Relationships
    user: Mapped["User"] = relationship("User", back_populates="categories")
    transactions: Mapped[list["Transaction"]] = relationship(
        "Transaction", back_populates="category"
    )

    def __repr__(self) -> str:
        return f"<Category(id={self.id}, name='{self.name}', type='{self.type.value}')>"
