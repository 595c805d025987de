"""Jobly CLI - serve the API, create tables, provision admins."""

from __future__ import annotations

import asyncio

import typer
from rich.console import Console

from .config import settings

app = typer.Typer(
    name="jobly",
    help="Jobly jobs & companies API",
    no_args_is_help=True,
)
console = Console()


async def _create_tables() -> None:
    from .database import engine
    from .models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def _create_admin(username: str, password: str, email: str) -> dict:
    from .database import async_session_factory
    from .services import user_svc

    async with async_session_factory() as db:
        return await user_svc.register(
            db,
            username=username,
            password=password,
            first_name="Admin",
            last_name=username,
            email=email,
            is_admin=True,
        )


@app.command("serve")
def serve(
    port: int = typer.Option(3001, "--port", "-p", help="Port to run on"),
    host: str = typer.Option("127.0.0.1", "--host", help="Host to bind to"),
    reload: bool = typer.Option(False, "--reload", help="Reload on code changes"),
):
    """Launch the Jobly API."""
    import uvicorn

    console.print(f"[bold cyan]Starting Jobly at http://{host}:{port}[/bold cyan]")
    uvicorn.run("jobly.app:app", host=host, port=port, reload=reload)


@app.command("init-db")
def init_db():
    """Create all tables on the configured database."""
    asyncio.run(_create_tables())
    console.print(f"[green]Tables created on {settings.database_url}[/green]")


@app.command("create-admin")
def create_admin(
    username: str = typer.Argument(..., help="Admin username"),
    email: str = typer.Option(..., "--email", "-e", help="Admin email"),
    password: str = typer.Option(
        ..., "--password", prompt=True, hide_input=True, confirmation_prompt=True
    ),
):
    """Provision an admin account."""
    from .errors import JoblyError

    try:
        user = asyncio.run(_create_admin(username, password, email))
    except JoblyError as exc:
        console.print(f"[red]{exc.message}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]Admin {user['username']} created[/green]")


if __name__ == "__main__":
    app()
