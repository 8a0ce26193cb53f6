"""
Administrative commands, run instead of serving HTTP.

    python -m online_library set-role user@example.com admin
    python -m online_library clear-db
"""
import asyncio
import logging

import typer
from pydantic import ValidationError
from sqlalchemy.exc import SQLAlchemyError

from online_library.database import db
from online_library.models.enum import UserRole
from online_library.schemas.user import UserCreate, UserOut
from online_library.services.user_service import (
    clear_database,
    create_user,
    set_user_role,
)

logger = logging.getLogger(__name__)

app = typer.Typer(help="Online library administration", no_args_is_help=True)


def _run_db(coro):
    """Run a database coroutine; database failures end the command with a message."""
    try:
        return asyncio.run(coro)
    except SQLAlchemyError as e:
        logger.error(f"❌ Database error: {e}")
        typer.echo(f"Database error: {e.__class__.__name__}. Is the schema created (init-db)?")
        raise typer.Exit(code=1)


def _parse_role(value: str) -> UserRole | None:
    try:
        return UserRole(value.lower())
    except ValueError:
        return None


@app.command("set-role")
def set_role(
    email: str = typer.Argument(..., help="Email of the user"),
    role: str = typer.Argument(..., help="admin or client"),
):
    """Change the role of a user."""
    new_role = _parse_role(role)
    if new_role is None:
        typer.echo(f"Role must be one of: {', '.join(UserRole.values())}.")
        raise typer.Exit(code=1)

    async def _run():
        async with db.async_session_maker() as session:
            return await set_user_role(session, email, new_role)

    user = _run_db(_run())
    if user is None:
        typer.echo(f"User {email} not found.")
        raise typer.Exit(code=1)
    typer.echo(f"Role of user {email} changed to {new_role.value}.")


@app.command("clear-db")
def clear_db():
    """Delete all users, books, authors, genres and favorites. No confirmation."""
    typer.echo("Clearing all users and books...")

    async def _run():
        async with db.async_session_maker() as session:
            return await clear_database(session)

    _run_db(_run())
    typer.echo("Database cleared.")


@app.command("create-user")
def create_user_cmd(
    email: str = typer.Argument(..., help="Email of the new user"),
    password: str = typer.Argument(..., help="Plain password, stored hashed"),
    role: str = typer.Option(UserRole.CLIENT.value, "--role", "-r", help="admin or client"),
):
    """Create a user."""
    new_role = _parse_role(role)
    if new_role is None:
        typer.echo(f"Role must be one of: {', '.join(UserRole.values())}.")
        raise typer.Exit(code=1)
    try:
        data = UserCreate(email=email, password=password, role=new_role)
    except ValidationError as e:
        for error in e.errors():
            typer.echo(f"{'.'.join(str(p) for p in error['loc'])}: {error['msg']}")
        raise typer.Exit(code=1)

    async def _run():
        async with db.async_session_maker() as session:
            return await create_user(session, data.email, data.password, data.role)

    user = _run_db(_run())
    if user is None:
        typer.echo(f"User {data.email} already exists.")
        raise typer.Exit(code=1)
    typer.echo(f"User created: {UserOut.model_validate(user).model_dump_json()}")


@app.command("init-db")
def init_db():
    """Create the database schema."""
    _run_db(db.init_models(db.engine))
    typer.echo("Database schema created.")
