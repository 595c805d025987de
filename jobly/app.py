"""FastAPI application for Jobly."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .config import settings
from .errors import BadRequestError, JoblyError, NotFoundError, UnauthorizedError

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
log = logging.getLogger(__name__)

STATUS_BY_ERROR: tuple[tuple[type[JoblyError], int], ...] = (
    (BadRequestError, 400),
    (UnauthorizedError, 401),
    (NotFoundError, 404),
)


def status_for(exc: JoblyError) -> int:
    for error_type, status in STATUS_BY_ERROR:
        if isinstance(exc, error_type):
            return status
    return 500


def error_body(status: int, message) -> dict:
    return {"error": {"message": message, "status": status}}


@asynccontextmanager
async def lifespan(app: FastAPI):
    if settings.is_production and settings.uses_dev_secret:
        raise RuntimeError(
            "Refusing to start in production with the development auth secret. "
            "Set JOBLY_AUTH_SECRET before starting."
        )
    # Auto-create tables for SQLite (local dev); PostgreSQL schemas are managed outside the app
    if settings.is_sqlite:
        from .database import engine
        from .models import Base
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
    yield


app = FastAPI(title=settings.app_title, lifespan=lifespan)


@app.exception_handler(JoblyError)
async def jobly_error_handler(request: Request, exc: JoblyError):
    status = status_for(exc)
    log.warning("%s %s -> %s: %s", request.method, request.url.path, status, exc.message)
    return JSONResponse(error_body(status, exc.message), status_code=status)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    messages = [
        f"{'.'.join(str(part) for part in err['loc'])}: {err['msg']}"
        for err in exc.errors()
    ]
    log.warning("%s %s -> 400: %s", request.method, request.url.path, "; ".join(messages))
    return JSONResponse(error_body(400, messages), status_code=400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(error_body(exc.status_code, exc.detail), status_code=exc.status_code)


@app.exception_handler(Exception)
async def general_error_handler(request: Request, exc: Exception):
    log.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(error_body(500, "Internal Server Error"), status_code=500)


# Import and register routers
from .routers import auth, companies, health, jobs, users  # noqa: E402

app.include_router(auth.router)
app.include_router(companies.router)
app.include_router(jobs.router)
app.include_router(users.router)
app.include_router(health.router)
