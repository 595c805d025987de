"""Auth routes - token exchange and self-registration."""

from __future__ import annotations

from fastapi import APIRouter, Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..database import get_db
from ..schemas.user import TokenRequest, UserRegister
from ..security import AuthUser, issue_token
from ..services import user_svc

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/token")
async def get_token(body: TokenRequest, db: AsyncSession = Depends(get_db)):
    user = await user_svc.authenticate(db, body.username, body.password)
    return {"token": issue_token(AuthUser(user["username"], user["isAdmin"]))}


@router.post("/register", status_code=201)
async def register(body: UserRegister, db: AsyncSession = Depends(get_db)):
    user = await user_svc.register(db, **body.model_dump(), is_admin=False)
    return {"token": issue_token(AuthUser(user["username"], is_admin=False))}
