"""Database management CLI commands."""

import typer
from rich.console import Console

from src.authbridge.core.services import DbSessionService
from src.authbridge.runtime.context import get_config

console = Console()

db_app = typer.Typer(help="Manage the identity database")


@db_app.command("init")
def init_db() -> None:
    """Create all tables of the party data model."""
    DbSessionService().create_all()
    console.print(f"[green]✅ Tables created at {get_config().database.url}[/green]")
