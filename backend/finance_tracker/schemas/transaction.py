import datetime
from decimal import Decimal
from pydantic import BaseModel, ConfigDict, Field

from ..models.transaction import TransactionType


class TransactionCreate(BaseModel):
    """Fields for creating a transaction."""
    amount: Decimal = Field(gt=0, max_digits=12, decimal_places=2)
    date: datetime.date
    type: TransactionType
    description: str | None = Field(None, max_length=1000)
    category_id: int | None = None


class TransactionUpdate(BaseModel):
    """Fields for updating a transaction (all optional)."""
    amount: Decimal | None = Field(None, gt=0, max_digits=12, decimal_places=2)
    date: datetime.date | None = None
    type: TransactionType | None = None
    description: str | None = Field(None, max_length=1000)
    category_id: int | None = None


class TransactionResponse(BaseModel):
    """Stored transaction plus the display fields of its category."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    category_id: int | None = None
    amount: float
    description: str | None = None
    date: datetime.date
    type: TransactionType
    created_at: datetime.datetime
    updated_at: datetime.datetime
    category_name: str | None = None
    category_color: str | None = None
    category_icon: str | None = None


class Pagination(BaseModel):
    page: int
    limit: int
    total: int
    pages: int


class TransactionListResponse(BaseModel):
    transactions: list[TransactionResponse]
    pagination: Pagination
