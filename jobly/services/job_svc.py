"""Job service - CRUD and filtered listing."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..database import fetch_all, fetch_one
from ..errors import BadRequestError, NotFoundError
from ..sql import build_filter_fragment_jobs, build_update_fragment

log = logging.getLogger(__name__)

# title, salary and equity share their column names
COLUMN_MAP: dict[str, str] = {}

IMMUTABLE_FIELDS = ("id", "companyHandle")

_RETURNING = '''id,
                title,
                salary,
                equity,
                company_handle AS "companyHandle"'''


async def create_job(
    db: AsyncSession,
    *,
    title: str,
    company_handle: str,
    salary: int | None = None,
    equity: float | None = None,
) -> dict[str, Any]:
    """Create a job for an existing company. Raises NotFoundError otherwise."""
    if not await fetch_one(db, "SELECT handle FROM companies WHERE handle = $1", company_handle):
        raise NotFoundError(f"Company not found: {company_handle}")

    job = await fetch_one(
        db,
        f"""INSERT INTO jobs
            (title, salary, equity, company_handle)
            VALUES ($1, $2, $3, $4)
            RETURNING {_RETURNING}""",
        title, salary, equity, company_handle,
    )
    await db.commit()
    log.info("Created job %s for %s", job["id"], company_handle)
    return job


async def list_jobs(
    db: AsyncSession, filters: Mapping[str, Any] | None = None
) -> list[dict[str, Any]]:
    """All jobs ordered by title, optionally narrowed by
    ``title`` / ``minSalary`` / ``hasEquity``."""
    where = build_filter_fragment_jobs(filters)
    return await fetch_all(
        db,
        f"""SELECT {_RETURNING}
            FROM jobs{where.clause}
            ORDER BY title, id""",
        *where.values,
    )


async def get_job(db: AsyncSession, job_id: int) -> dict[str, Any]:
    job = await fetch_one(db, f"SELECT {_RETURNING} FROM jobs WHERE id = $1", job_id)
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    return job


async def jobs_for_company(db: AsyncSession, handle: str) -> list[dict[str, Any]]:
    return await fetch_all(
        db,
        """SELECT id, title, salary, equity
           FROM jobs
           WHERE company_handle = $1
           ORDER BY id""",
        handle,
    )


async def update_job(
    db: AsyncSession, job_id: int, data: Mapping[str, Any]
) -> dict[str, Any]:
    """Partial update of title / salary / equity.

    The id and owning company never change; asking to is a BadRequestError.
    """
    if any(field in data for field in IMMUTABLE_FIELDS):
        raise BadRequestError("Cannot change id or companyHandle")

    update = build_update_fragment(data, COLUMN_MAP)
    id_idx = len(update.values) + 1
    job = await fetch_one(
        db,
        f"""UPDATE jobs
            SET {update.clause}
            WHERE id = ${id_idx}
            RETURNING {_RETURNING}""",
        *update.values, job_id,
    )
    if not job:
        raise NotFoundError(f"No job: {job_id}")
    await db.commit()
    log.info("Updated job %s (%s)", job_id, ", ".join(data))
    return job


async def remove_job(db: AsyncSession, job_id: int) -> None:
    deleted = await fetch_one(db, "DELETE FROM jobs WHERE id = $1 RETURNING id", job_id)
    if not deleted:
        raise NotFoundError(f"No job: {job_id}")
    await db.commit()
    log.info("Deleted job %s", job_id)
