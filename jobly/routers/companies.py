"""Company routes - anyone may read, admins may write."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.company import CompanyCreate, CompanyUpdate
from ..security import require_admin
from ..services import company_svc

router = APIRouter(prefix="/companies", tags=["companies"])


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def company_create(body: CompanyCreate, db: AsyncSession = Depends(get_db)):
    company = await company_svc.create_company(db, **body.model_dump())
    return {"company": company}


@router.get("")
async def company_list(
    db: AsyncSession = Depends(get_db),
    name_like: str | None = Query(None, alias="nameLike"),
    min_employees: int | None = Query(None, alias="minEmployees", ge=0),
    max_employees: int | None = Query(None, alias="maxEmployees", ge=0),
):
    filters = {
        "nameLike": name_like,
        "minEmployees": min_employees,
        "maxEmployees": max_employees,
    }
    return {"companies": await company_svc.list_companies(db, filters)}


@router.get("/{handle}")
async def company_detail(handle: str, db: AsyncSession = Depends(get_db)):
    return {"company": await company_svc.get_company(db, handle)}


@router.patch("/{handle}", dependencies=[Depends(require_admin)])
async def company_update(
    handle: str, body: CompanyUpdate, db: AsyncSession = Depends(get_db)
):
    company = await company_svc.update_company(db, handle, body.sparse())
    return {"company": company}


@router.delete("/{handle}", dependencies=[Depends(require_admin)])
async def company_delete(handle: str, db: AsyncSession = Depends(get_db)):
    await company_svc.remove_company(db, handle)
    return {"deleted": handle}
