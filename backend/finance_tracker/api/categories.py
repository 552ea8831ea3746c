from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import TransactionType
from ..schemas import CategoryCreate, CategoryUpdate, CategoryResponse, CurrentUser, MessageResponse
from ..services.category_service import CategoryService
from .deps import get_current_user

router = APIRouter()


@router.get("/", response_model=list[CategoryResponse])
def list_categories(
    type: TransactionType | None = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get the user's categories, optionally of one type."""
    return CategoryService(db).list_categories(user.id, type)


@router.get("/{category_id}", response_model=CategoryResponse)
def get_category(
    category_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get a single category by ID."""
    return CategoryService(db).get_category(user.id, category_id)


@router.post("/", response_model=CategoryResponse, status_code=201)
def create_category(
    category: CategoryCreate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new category."""
    return CategoryService(db).create_category(user.id, category.model_dump())


@router.put("/{category_id}", response_model=CategoryResponse)
def update_category(
    category_id: int,
    category: CategoryUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a category."""
    return CategoryService(db).update_category(
        user.id, category_id, category.model_dump(exclude_unset=True)
    )


@router.delete("/{category_id}", response_model=MessageResponse)
def delete_category(
    category_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a category. Fails while any transaction still uses it."""
    CategoryService(db).delete_category(user.id, category_id)
    return MessageResponse(message="Category deleted successfully")
