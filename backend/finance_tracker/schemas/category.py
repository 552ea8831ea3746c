import datetime
from pydantic import BaseModel, ConfigDict, Field

from ..models.transaction import TransactionType


class CategoryBase(BaseModel):
    """Base category fields."""
    name: str = Field(min_length=1, max_length=100)
    type: TransactionType
    color: str | None = Field(None, max_length=7)
    icon: str | None = Field(None, max_length=50)


class CategoryCreate(CategoryBase):
    """Fields for creating a category."""
    pass


class CategoryUpdate(BaseModel):
    """Fields for updating a category (all optional)."""
    name: str | None = Field(None, min_length=1, max_length=100)
    type: TransactionType | None = None
    color: str | None = Field(None, max_length=7)
    icon: str | None = Field(None, max_length=50)


class CategoryResponse(BaseModel):
    """Category response with all fields."""
    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    name: str
    type: TransactionType
    color: str
    icon: str
    created_at: datetime.datetime
