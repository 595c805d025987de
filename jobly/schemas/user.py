"""User and auth schemas."""

from __future__ import annotations

from pydantic import Field

from .base import CamelModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class TokenRequest(CamelModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=1)


class UserRegister(CamelModel):
    username: str = Field(min_length=1, max_length=25)
    password: str = Field(min_length=5, max_length=20)
    first_name: str = Field(min_length=1, max_length=30)
    last_name: str = Field(min_length=1, max_length=30)
    email: str = Field(min_length=6, max_length=60, pattern=EMAIL_PATTERN)


class UserCreate(UserRegister):
    is_admin: bool = False


class UserUpdate(CamelModel):
    not_nullable = ("password", "first_name", "last_name", "email")

    password: str | None = Field(default=None, min_length=5, max_length=20)
    first_name: str | None = Field(default=None, min_length=1, max_length=30)
    last_name: str | None = Field(default=None, min_length=1, max_length=30)
    email: str | None = Field(default=None, min_length=6, max_length=60, pattern=EMAIL_PATTERN)
