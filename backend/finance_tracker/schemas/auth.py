from pydantic import BaseModel, EmailStr, Field


class RegisterRequest(BaseModel):
    username: str = Field(min_length=1, max_length=50)
    email: EmailStr
    password: str = Field(min_length=6, max_length=128)


class LoginRequest(BaseModel):
    """``username`` may also be the account's email address."""
    username: str = Field(min_length=1)
    password: str = Field(min_length=1)


class UserResponse(BaseModel):
    id: int
    username: str
    email: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse


class CurrentUser(BaseModel):
    """Identity carried by a verified bearer token."""
    id: int
    username: str


class MeResponse(BaseModel):
    user: CurrentUser


class MessageResponse(BaseModel):
    message: str
