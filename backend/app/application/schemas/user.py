"""Pydantic DTOs for authentication and user accounts."""

from datetime import datetime

from pydantic import EmailStr, Field

from app.domain.entities import UserRole

from .common import CamelModel


class LoginRequest(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=1)


class UserResponse(CamelModel):
    """Public view of a user: the password hash is never included."""

    id: str
    email: str
    name: str
    surname: str
    role: UserRole
    active: bool
    last_access_at: datetime | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class LoginResponse(CamelModel):
    user: UserResponse
    token: str
    token_type: str = "bearer"
    expires_in: int


class UserCreate(CamelModel):
    email: EmailStr
    password: str = Field(..., min_length=8)
    name: str = Field(..., min_length=1, max_length=100)
    surname: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.STANDARD
    active: bool = True


class UserUpdate(CamelModel):
    email: EmailStr | None = None
    name: str | None = Field(None, min_length=1, max_length=100)
    surname: str | None = Field(None, min_length=1, max_length=100)
    role: UserRole | None = None
    active: bool | None = None


class PasswordChange(CamelModel):
    current_password: str = Field(..., min_length=1)
    new_password: str = Field(..., min_length=8)
