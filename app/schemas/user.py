"""User schemas."""
from datetime import datetime

from pydantic import EmailStr, Field

from app.schemas.common import CamelModel


class UserBase(CamelModel):
    """Base user schema."""

    email: EmailStr
    username: str = Field(..., min_length=3, max_length=50)


class UserCreate(UserBase):
    """User creation schema."""

    password: str = Field(..., min_length=1, max_length=128)


class UserLogin(CamelModel):
    """User login schema."""

    email: EmailStr
    password: str


class User(UserBase):
    """User response schema."""

    id: str
    created_at: datetime


class LoginResponse(CamelModel):
    """Token response schema."""

    token: str
    username: str
    email: str
