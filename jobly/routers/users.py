"""User routes - admins manage everyone, users manage themselves."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.user import UserCreate, UserUpdate
from ..security import AuthUser, issue_token, require_admin, require_correct_user_or_admin
from ..services import user_svc

router = APIRouter(prefix="/users", tags=["users"])


@router.post("", status_code=201, dependencies=[Depends(require_admin)])
async def user_create(body: UserCreate, db: AsyncSession = Depends(get_db)):
    user = await user_svc.register(db, **body.model_dump())
    token = issue_token(AuthUser(user["username"], user["isAdmin"]))
    return {"user": user, "token": token}


@router.get("", dependencies=[Depends(require_admin)])
async def user_list(db: AsyncSession = Depends(get_db)):
    return {"users": await user_svc.list_users(db)}


@router.get("/{username}", dependencies=[Depends(require_correct_user_or_admin)])
async def user_detail(username: str, db: AsyncSession = Depends(get_db)):
    return {"user": await user_svc.get_user(db, username)}


@router.patch("/{username}", dependencies=[Depends(require_correct_user_or_admin)])
async def user_update(username: str, body: UserUpdate, db: AsyncSession = Depends(get_db)):
    user = await user_svc.update_user(db, username, body.sparse())
    return {"user": user}


@router.delete("/{username}", dependencies=[Depends(require_correct_user_or_admin)])
async def user_delete(username: str, db: AsyncSession = Depends(get_db)):
    await user_svc.remove_user(db, username)
    return {"deleted": username}


@router.post(
    "/{username}/jobs/{job_id}",
    dependencies=[Depends(require_correct_user_or_admin)],
)
async def user_apply(username: str, job_id: int, db: AsyncSession = Depends(get_db)):
    await user_svc.apply_to_job(db, username, job_id)
    return {"applied": job_id}
