#!/usr/bin/env python3
"""
Database management script for the ContentCast backend.
"""

import asyncio
import sys

import typer
from rich.console import Console
from rich.table import Table

from alembic.config import Config
from alembic import command
from contentcast.core.config import settings
from contentcast.core.database import (
    init_database, close_database, create_tables, drop_tables, check_database
)
from contentcast.core.logging import setup_logging, get_logger

console = Console()
logger = get_logger(__name__)
app = typer.Typer(help="Database management commands")


def _alembic_config() -> Config:
    return Config("alembic.ini")


@app.command()
def init():
    """Create all tables directly from the models."""
    async def _init():
        setup_logging()
        await init_database()
        await create_tables()
        await close_database()
        console.print("✅ Database initialized successfully!")

    asyncio.run(_init())


@app.command()
def migrate(message: str = typer.Option(..., prompt="Migration message")):
    """Create a new autogenerated migration."""
    command.revision(_alembic_config(), message=message, autogenerate=True)
    console.print(f"✅ Migration created: {message}")


@app.command()
def upgrade(revision: str = "head"):
    """Apply migrations."""
    command.upgrade(_alembic_config(), revision)
    console.print(f"✅ Database upgraded to: {revision}")


@app.command()
def downgrade(revision: str):
    """Downgrade database to specific revision."""
    command.downgrade(_alembic_config(), revision)
    console.print(f"⬇️ Database downgraded to: {revision}")


@app.command()
def current():
    """Show current database revision."""
    command.current(_alembic_config())


@app.command()
def history():
    """Show migration history."""
    command.history(_alembic_config())


@app.command()
def drop():
    """Drop all tables."""
    confirm = typer.confirm("Are you sure you want to drop all tables?")
    if not confirm:
        console.print("❌ Operation cancelled")
        return

    async def _drop():
        setup_logging()
        await init_database()
        await drop_tables()
        await close_database()
        console.print("🗑️ All tables dropped!")

    asyncio.run(_drop())


@app.command()
def check():
    """Check database connectivity."""
    async def _check() -> bool:
        setup_logging()
        await init_database()
        try:
            return await check_database()
        finally:
            await close_database()

    if asyncio.run(_check()):
        console.print("✅ Database is healthy!")
    else:
        console.print("❌ Database health check failed!")
        sys.exit(1)


@app.command()
def status():
    """Show database status."""
    table = Table(title="Database Status")
    table.add_column("Component", style="cyan")
    table.add_column("Status", style="green")

    async def _status() -> bool:
        setup_logging()
        await init_database()
        try:
            return await check_database()
        finally:
            await close_database()

    table.add_row("Backend", settings.storage_backend)
    table.add_row("Environment", settings.environment)
    table.add_row("Database", "✅ Connected" if asyncio.run(_status()) else "❌ Disconnected")

    console.print(table)


if __name__ == "__main__":
    app()
