import math
from datetime import date
from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from ..database import get_db
from ..models import TransactionType
from ..schemas import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    TransactionListResponse,
    Pagination,
    CurrentUser,
    MessageResponse,
)
from ..services.ledger_service import LedgerService, TransactionFilters
from .deps import get_current_user

router = APIRouter()


@router.get("/", response_model=TransactionListResponse)
def list_transactions(
    page: int = Query(1, ge=1),
    limit: int = Query(50, ge=1),
    type: TransactionType | None = Query(None),
    category_id: int | None = Query(None),
    start_date: date | None = Query(None),
    end_date: date | None = Query(None),
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """
    Get one page of the user's transactions, newest first.

    ``pagination.total`` counts every match, not just this page.
    """
    filters = TransactionFilters(
        start_date=start_date,
        end_date=end_date,
        type=type,
        category_id=category_id,
    )
    items, total = LedgerService(db).list_transactions(user.id, filters, page=page, limit=limit)

    return TransactionListResponse(
        transactions=[TransactionResponse.model_validate(tx) for tx in items],
        pagination=Pagination(
            page=page,
            limit=limit,
            total=total,
            pages=math.ceil(total / limit),
        ),
    )


@router.get("/{transaction_id}", response_model=TransactionResponse)
def get_transaction(
    transaction_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Get a single transaction by ID."""
    tx = LedgerService(db).get_transaction(user.id, transaction_id)
    return TransactionResponse.model_validate(tx)


@router.post("/", response_model=TransactionResponse, status_code=201)
def create_transaction(
    transaction: TransactionCreate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Create a new transaction."""
    tx = LedgerService(db).create_transaction(user.id, transaction.model_dump())
    return TransactionResponse.model_validate(tx)


@router.put("/{transaction_id}", response_model=TransactionResponse)
def update_transaction(
    transaction_id: int,
    transaction: TransactionUpdate,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Update a transaction."""
    tx = LedgerService(db).update_transaction(
        user.id, transaction_id, transaction.model_dump(exclude_unset=True)
    )
    return TransactionResponse.model_validate(tx)


@router.delete("/{transaction_id}", response_model=MessageResponse)
def delete_transaction(
    transaction_id: int,
    user: CurrentUser = Depends(get_current_user),
    db: Session = Depends(get_db),
):
    """Delete a transaction."""
    LedgerService(db).delete_transaction(user.id, transaction_id)
    return MessageResponse(message="Transaction deleted successfully")
