"""Async test fixtures for Jobly tests using SQLite."""

from __future__ import annotations

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from jobly.config import settings
from jobly.database import enable_sqlite_foreign_keys, get_db
from jobly.models import Base
from jobly.security import AuthUser, issue_token
from jobly.services import company_svc, job_svc, user_svc


@pytest.fixture(scope="session")
def anyio_backend():
    return "asyncio"


@pytest.fixture(autouse=True)
def fast_password_hashing(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(settings, "password_hash_iterations", 1000)


@pytest_asyncio.fixture
async def engine():
    eng = create_async_engine("sqlite+aiosqlite:///:memory:", echo=False)
    enable_sqlite_foreign_keys(eng)
    async with eng.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield eng
    await eng.dispose()


@pytest_asyncio.fixture
async def db(engine):
    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def seeded(db: AsyncSession):
    """Three companies, four jobs, a regular user and an admin."""
    for n in (1, 2, 3):
        await company_svc.create_company(
            db,
            handle=f"c{n}",
            name=f"C{n}",
            description=f"Desc{n}",
            num_employees=n,
            logo_url=f"http://c{n}.img",
        )

    jobs = {}
    for title, salary, equity, handle in (
        ("j1", 50000, 0.1, "c1"),
        ("j2", 60000, 0, "c1"),
        ("j3", 70000, None, "c2"),
        ("Senior Engineer", 90000, 0.05, "c3"),
    ):
        job = await job_svc.create_job(
            db, title=title, salary=salary, equity=equity, company_handle=handle
        )
        jobs[title] = job["id"]

    await user_svc.register(
        db,
        username="u1",
        password="password1",
        first_name="U1F",
        last_name="U1L",
        email="user1@user.com",
    )
    await user_svc.register(
        db,
        username="admin",
        password="password2",
        first_name="AdF",
        last_name="AdL",
        email="admin@user.com",
        is_admin=True,
    )
    return {"jobs": jobs}


@pytest.fixture
def u1_token() -> str:
    return issue_token(AuthUser("u1", is_admin=False))


@pytest.fixture
def admin_token() -> str:
    return issue_token(AuthUser("admin", is_admin=True))


@pytest.fixture
def u1_headers(u1_token: str) -> dict[str, str]:
    return {"authorization": f"Bearer {u1_token}"}


@pytest.fixture
def admin_headers(admin_token: str) -> dict[str, str]:
    return {"authorization": f"Bearer {admin_token}"}


@pytest_asyncio.fixture
async def client(engine):
    """HTTPX async test client against the Jobly app."""
    from jobly.app import app

    session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async def override_get_db():
        async with session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as c:
        yield c

    app.dependency_overrides.clear()
