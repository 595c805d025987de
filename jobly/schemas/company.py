"""Company schemas."""

from __future__ import annotations

from pydantic import Field

from .base import CamelModel


class CompanyCreate(CamelModel):
    handle: str = Field(min_length=1, max_length=25)
    name: str = Field(min_length=1)
    description: str
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: str | None = None


class CompanyUpdate(CamelModel):
    not_nullable = ("name", "description")

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    num_employees: int | None = Field(default=None, ge=0)
    logo_url: str | None = None
