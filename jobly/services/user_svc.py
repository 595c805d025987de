"""User service - authentication, registration, CRUD, job applications."""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..database import fetch_all, fetch_one
from ..errors import DuplicateError, NotFoundError, UnauthorizedError
from ..security import hash_password, verify_password
from ..sql import build_update_fragment

log = logging.getLogger(__name__)

COLUMN_MAP = {
    "firstName": "first_name",
    "lastName": "last_name",
    "isAdmin": "is_admin",
}

_RETURNING = '''username,
                first_name AS "firstName",
                last_name AS "lastName",
                email,
                is_admin AS "isAdmin"'''


def _user_row(row: dict[str, Any]) -> dict[str, Any]:
    # SQLite hands booleans back as 0/1 from raw queries
    row["isAdmin"] = bool(row["isAdmin"])
    return row


async def authenticate(db: AsyncSession, username: str, password: str) -> dict[str, Any]:
    """Return the user for a valid username/password. Raises UnauthorizedError."""
    row = await fetch_one(
        db, f"SELECT {_RETURNING}, password FROM users WHERE username = $1", username
    )
    if row and verify_password(password, row.pop("password")):
        return _user_row(row)
    log.warning("Failed login for %s", username)
    raise UnauthorizedError("Invalid username/password")


async def register(
    db: AsyncSession,
    *,
    username: str,
    password: str,
    first_name: str,
    last_name: str,
    email: str,
    is_admin: bool = False,
) -> dict[str, Any]:
    """Create a user with a hashed password. Raises DuplicateError."""
    if await fetch_one(db, "SELECT username FROM users WHERE username = $1", username):
        raise DuplicateError(f"Duplicate username: {username}")

    user = await fetch_one(
        db,
        f"""INSERT INTO users
            (username, password, first_name, last_name, email, is_admin)
            VALUES ($1, $2, $3, $4, $5, $6)
            RETURNING {_RETURNING}""",
        username, hash_password(password), first_name, last_name, email, is_admin,
    )
    await db.commit()
    log.info("Registered user %s (admin=%s)", username, is_admin)
    return _user_row(user)


async def list_users(db: AsyncSession) -> list[dict[str, Any]]:
    rows = await fetch_all(db, f"SELECT {_RETURNING} FROM users ORDER BY username")
    return [_user_row(row) for row in rows]


async def get_user(db: AsyncSession, username: str) -> dict[str, Any]:
    """A user with the ids of the jobs they applied to. Raises NotFoundError."""
    user = await fetch_one(db, f"SELECT {_RETURNING} FROM users WHERE username = $1", username)
    if not user:
        raise NotFoundError(f"No user: {username}")

    applications = await fetch_all(
        db,
        "SELECT job_id FROM applications WHERE username = $1 ORDER BY job_id",
        username,
    )
    user["applications"] = [a["job_id"] for a in applications]
    return _user_row(user)


async def update_user(
    db: AsyncSession, username: str, data: Mapping[str, Any]
) -> dict[str, Any]:
    """Partial update keyed by wire names. A new password is stored hashed."""
    data = dict(data)
    if data.get("password"):
        data["password"] = hash_password(data["password"])

    update = build_update_fragment(data, COLUMN_MAP)
    username_idx = len(update.values) + 1
    user = await fetch_one(
        db,
        f"""UPDATE users
            SET {update.clause}
            WHERE username = ${username_idx}
            RETURNING {_RETURNING}""",
        *update.values, username,
    )
    if not user:
        raise NotFoundError(f"No user: {username}")
    await db.commit()
    log.info("Updated user %s (%s)", username, ", ".join(data))
    return _user_row(user)


async def remove_user(db: AsyncSession, username: str) -> None:
    deleted = await fetch_one(
        db, "DELETE FROM users WHERE username = $1 RETURNING username", username
    )
    if not deleted:
        raise NotFoundError(f"No user: {username}")
    await db.commit()
    log.info("Deleted user %s", username)


async def apply_to_job(db: AsyncSession, username: str, job_id: int) -> None:
    """Record an application. Raises NotFoundError / DuplicateError."""
    if not await fetch_one(db, "SELECT id FROM jobs WHERE id = $1", job_id):
        raise NotFoundError(f"No job: {job_id}")
    if not await fetch_one(db, "SELECT username FROM users WHERE username = $1", username):
        raise NotFoundError(f"No user: {username}")
    if await fetch_one(
        db,
        "SELECT job_id FROM applications WHERE username = $1 AND job_id = $2",
        username, job_id,
    ):
        raise DuplicateError(f"Already applied: {username} -> {job_id}")

    await fetch_one(
        db,
        "INSERT INTO applications (username, job_id) VALUES ($1, $2) RETURNING job_id",
        username, job_id,
    )
    await db.commit()
    log.info("User %s applied to job %s", username, job_id)
