from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from ..config import Settings
from ..database import get_db
from ..schemas import (
    RegisterRequest,
    LoginRequest,
    UserResponse,
    AuthResponse,
    CurrentUser,
    MeResponse,
)
from ..services.auth_service import AuthService
from .deps import get_current_user, get_settings

router = APIRouter()


@router.post("/register", response_model=AuthResponse, status_code=201)
def register(
    body: RegisterRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Create an account with the default categories and return a token."""
    user, token = AuthService(db, settings).register(body.username, body.email, body.password)
    return AuthResponse(
        message="User created successfully",
        token=token,
        user=UserResponse(id=user.id, username=user.username, email=user.email),
    )


@router.post("/login", response_model=AuthResponse)
def login(
    body: LoginRequest,
    db: Session = Depends(get_db),
    settings: Settings = Depends(get_settings),
):
    """Log in with username or email."""
    user, token = AuthService(db, settings).login(body.username, body.password)
    return AuthResponse(
        message="Login successful",
        token=token,
        user=UserResponse(id=user.id, username=user.username, email=user.email),
    )


@router.get("/me", response_model=MeResponse)
def me(user: CurrentUser = Depends(get_current_user)):
    return MeResponse(user=user)
