"""Async database engine, session factory and positional-bind adapter."""

from __future__ import annotations

import re
from collections.abc import Sequence
from typing import Any

from sqlalchemy import TextClause, event, text
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker, create_async_engine

from .config import settings

_PLACEHOLDER = re.compile(r"\$(\d+)")


def enable_sqlite_foreign_keys(eng: AsyncEngine) -> None:
    """SQLite ignores ON DELETE CASCADE unless the pragma is set per connection."""

    @event.listens_for(eng.sync_engine, "connect")
    def _set_pragma(dbapi_connection, connection_record):
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()


engine = create_async_engine(settings.database_url, echo=settings.echo_sql)
if settings.is_sqlite:
    enable_sqlite_foreign_keys(engine)
async_session_factory = async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)


async def get_db():
    """FastAPI dependency that yields an async session."""
    async with async_session_factory() as session:
        yield session


def bind_positional(sql: str, values: Sequence[Any]) -> tuple[TextClause, dict[str, Any]]:
    """Turn ``$n`` placeholders into named binds SQLAlchemy understands.

    Returns the ``text()`` clause and the parameter dict, ``$n`` binding
    ``values[n - 1]``. Every placeholder must have a value.
    """
    params = {f"p{n}": value for n, value in enumerate(values, 1)}

    def _named(match: re.Match) -> str:
        name = f"p{match.group(1)}"
        if name not in params:
            raise ValueError(f"No value bound for placeholder ${match.group(1)}")
        return f":{name}"

    return text(_PLACEHOLDER.sub(_named, sql)), params


async def fetch_all(db: AsyncSession, sql: str, *values: Any) -> list[dict[str, Any]]:
    """Run a positional query and return the rows as plain dicts."""
    stmt, params = bind_positional(sql, values)
    result = await db.execute(stmt, params)
    return [dict(row) for row in result.mappings().all()]


async def fetch_one(db: AsyncSession, sql: str, *values: Any) -> dict[str, Any] | None:
    rows = await fetch_all(db, sql, *values)
    return rows[0] if rows else None
