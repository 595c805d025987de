"""Job routes - anyone may read, admins may write."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.job import JobCreate, JobUpdate
from ..security import require_admin
from ..services import job_svc

router = APIRouter(prefix="/jobs", tags=["jobs"])


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def job_create(body: JobCreate, db: AsyncSession = Depends(get_db)):
    job = await job_svc.create_job(db, **body.model_dump())
    return {"job": job}


@router.get("")
async def job_list(
    db: AsyncSession = Depends(get_db),
    title: str | None = None,
    min_salary: int | None = Query(None, alias="minSalary", ge=0),
    has_equity: bool | None = Query(None, alias="hasEquity"),
):
    filters = {"title": title, "minSalary": min_salary, "hasEquity": has_equity}
    return {"jobs": await job_svc.list_jobs(db, filters)}


@router.get("/{job_id}")
async def job_detail(job_id: int, db: AsyncSession = Depends(get_db)):
    return {"job": await job_svc.get_job(db, job_id)}


@router.patch("/{job_id}", dependencies=[Depends(require_admin)])
async def job_update(job_id: int, body: JobUpdate, db: AsyncSession = Depends(get_db)):
    job = await job_svc.update_job(db, job_id, body.sparse())
    return {"job": job}


@router.delete("/{job_id}", dependencies=[Depends(require_admin)])
async def job_delete(job_id: int, db: AsyncSession = Depends(get_db)):
    await job_svc.remove_job(db, job_id)
    return {"deleted": str(job_id)}
