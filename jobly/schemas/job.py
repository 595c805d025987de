"""Job schemas."""

from __future__ import annotations

from pydantic import Field

from .base import CamelModel


class JobCreate(CamelModel):
    title: str = Field(min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)
    company_handle: str = Field(min_length=1, max_length=25)


class JobUpdate(CamelModel):
    not_nullable = ("title",)

    title: str | None = Field(default=None, min_length=1)
    salary: int | None = Field(default=None, ge=0)
    equity: float | None = Field(default=None, ge=0, le=1)
