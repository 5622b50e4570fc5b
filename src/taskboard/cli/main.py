"""Taskboard CLI — run the API server and manage the schema.

Usage:
    taskboard serve                 # Run the API with uvicorn
    taskboard serve --reload        # ...with auto-reload for development
    taskboard init-db               # Create tables directly from the models
    taskboard init-db --drop        # Drop everything first (destroys data)

Production databases should be migrated with `alembic upgrade head`;
init-db is for local development and throwaway databases.
"""

from __future__ import annotations

import asyncio

import click

from taskboard.config import settings


@click.group()
@click.version_option(package_name="taskboard")
def cli():
    """Taskboard backend."""


@cli.command()
@click.option("--host", default=None, help="Bind address (default: TASKBOARD_HOST).")
@click.option("--port", default=None, type=int, help="Port (default: TASKBOARD_PORT).")
@click.option("--reload", is_flag=True, help="Restart on code changes.")
def serve(host: str | None, port: int | None, reload: bool):
    """Run the HTTP API."""
    import uvicorn

    uvicorn.run(
        "taskboard.main:app",
        host=host or settings.host,
        port=port or settings.port,
        reload=reload,
    )


@cli.command("init-db")
@click.option("--drop", is_flag=True, help="Drop all tables before creating them.")
def init_db(drop: bool):
    """Create all tables for the configured database."""
    if drop:
        click.confirm("This deletes every user, team and task. Continue?", abort=True)
    asyncio.run(create_schema(drop=drop))
    click.echo(f"Schema ready ({'recreated' if drop else 'created'}).")


async def create_schema(drop: bool = False) -> None:
    from taskboard.db.engine import engine
    from taskboard.db.models import Base

    async with engine.begin() as conn:
        if drop:
            await conn.run_sync(Base.metadata.drop_all)
        await conn.run_sync(Base.metadata.create_all)
    await engine.dispose()


if __name__ == "__main__":
    cli()
