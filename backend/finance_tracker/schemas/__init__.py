from .auth import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    AuthResponse,
    CurrentUser,
    MeResponse,
    MessageResponse,
)
from .category import CategoryCreate, CategoryUpdate, CategoryResponse
from .transaction import (
    TransactionCreate,
    TransactionUpdate,
    TransactionResponse,
    Pagination,
    TransactionListResponse,
)
from .report import (
    PeriodSummary,
    CategoryBreakdownRow,
    DailySeriesPoint,
    Period,
    MonthlySummaryResponse,
    TrendPoint,
    TrendsResponse,
)

__all__ = [
    "RegisterRequest",
    "LoginRequest",
    "UserResponse",
    "AuthResponse",
    "CurrentUser",
    "MeResponse",
    "MessageResponse",
    "CategoryCreate",
    "CategoryUpdate",
    "CategoryResponse",
    "TransactionCreate",
    "TransactionUpdate",
    "TransactionResponse",
    "Pagination",
    "TransactionListResponse",
    "PeriodSummary",
    "CategoryBreakdownRow",
    "DailySeriesPoint",
    "Period",
    "MonthlySummaryResponse",
    "TrendPoint",
    "TrendsResponse",
]
