"""Company service - CRUD and filtered listing."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..database import fetch_all, fetch_one
from ..errors import DuplicateError, NotFoundError
from ..sql import build_filter_fragment_companies, build_update_fragment
from . import job_svc

log = logging.getLogger(__name__)

COLUMN_MAP = {
    "numEmployees": "num_employees",
    "logoUrl": "logo_url",
}

_RETURNING = '''handle,
                name,
                description,
                num_employees AS "numEmployees",
                logo_url AS "logoUrl"'''


async def _check_name_free(db: AsyncSession, name: str, handle: str) -> None:
    """Raise DuplicateError if another company already uses ``name``."""
    taken = await fetch_one(
        db, "SELECT handle FROM companies WHERE name = $1 AND handle <> $2", name, handle
    )
    if taken:
        raise DuplicateError(f"Duplicate company name: {name}")


async def create_company(
    db: AsyncSession,
    *,
    handle: str,
    name: str,
    description: str,
    num_employees: int | None = None,
    logo_url: str | None = None,
) -> dict[str, Any]:
    """Create a company. Raises DuplicateError if the handle or name is taken."""
    if await fetch_one(db, "SELECT handle FROM companies WHERE handle = $1", handle):
        raise DuplicateError(f"Duplicate company: {handle}")
    await _check_name_free(db, name, handle)

    company = await fetch_one(
        db,
        f"""INSERT INTO companies
            (handle, name, description, num_employees, logo_url)
            VALUES ($1, $2, $3, $4, $5)
            RETURNING {_RETURNING}""",
        handle, name, description, num_employees, logo_url,
    )
    await db.commit()

    log.info("Created company %s", handle)
    return company


async def list_companies(
    db: AsyncSession, filters: Mapping[str, Any] | None = None
) -> list[dict[str, Any]]:
    """All companies ordered by name, optionally narrowed by
    ``nameLike`` / ``minEmployees`` / ``maxEmployees``."""
    where = build_filter_fragment_companies(filters)
    return await fetch_all(
        db,
        f"""SELECT {_RETURNING}
            FROM companies{where.clause}
            ORDER BY name""",
        *where.values,
    )


async def get_company(db: AsyncSession, handle: str) -> dict[str, Any]:
    """A company with its jobs. Raises NotFoundError."""
    company = await fetch_one(
        db, f"SELECT {_RETURNING} FROM companies WHERE handle = $1", handle
    )
    if not company:
        raise NotFoundError(f"No company: {handle}")

    company["jobs"] = await job_svc.jobs_for_company(db, handle)
    return company


async def update_company(
    db: AsyncSession, handle: str, data: Mapping[str, Any]
) -> dict[str, Any]:
    """Partial update keyed by wire names (``numEmployees``, ``logoUrl``, ...)."""
    update = build_update_fragment(data, COLUMN_MAP)
    handle_idx = len(update.values) + 1

    if data.get("name") is not None:
        await _check_name_free(db, data["name"], handle)

    company = await fetch_one(
        db,
        f"""UPDATE companies
            SET {update.clause}
            WHERE handle = ${handle_idx}
            RETURNING {_RETURNING}""",
        *update.values, handle,
    )
    if not company:
        raise NotFoundError(f"No company: {handle}")
    await db.commit()

    log.info("Updated company %s (%s)", handle, ", ".join(data))
    return company


async def remove_company(db: AsyncSession, handle: str) -> None:
    """Delete a company and, through the FK cascade, its jobs."""
    deleted = await fetch_one(
        db, "DELETE FROM companies WHERE handle = $1 RETURNING handle", handle
    )
    if not deleted:
        raise NotFoundError(f"No company: {handle}")
    await db.commit()
    log.info("Deleted company %s", handle)
