"""
BuffetPOS CLI.

Command-line interface for common operations.
"""

import sys
import time
from pathlib import Path

# Add backend to path for imports
sys.path.insert(0, str(Path(__file__).parent))

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="buffet-pos",
    help="BuffetPOS management CLI",
    add_completion=False,
)
console = Console()

API_VERSION = "0.1.0"


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def init_db(
    database_url: str = typer.Option(None, "--database-url", help="Overrides DATABASE_URL"),
):
    """Create all tables."""
    from pos_api.models import Base
    from pos_shared.config.settings import get_settings
    from pos_shared.infrastructure.db import get_engine

    url = database_url or get_settings().database_url
    try:
        Base.metadata.create_all(bind=get_engine(url))
    except Exception as e:
        console.print(f"[red]✗ Database initialization failed: {e}[/red]")
        raise typer.Exit(1)
    console.print("[green]✓ Tables created/verified[/green]")


@app.command()
def create_user(
    email: str = typer.Argument(..., help="Login email"),
    name: str = typer.Option(..., "--name", "-n", help="Display name"),
    role: str = typer.Option("Manager", "--role", "-r", help="Employee or Manager"),
    password: str = typer.Option(
        ..., prompt=True, hide_input=True, confirmation_prompt=True, help="Password"
    ),
    database_url: str = typer.Option(None, "--database-url", help="Overrides DATABASE_URL"),
):
    """Create a staff account with any role (e.g. the first Manager)."""
    from pos_api.services.domain import UserService
    from pos_shared.config.constants import Roles
    from pos_shared.config.settings import get_settings
    from pos_shared.infrastructure.db import get_db_context
    from pos_shared.utils.exceptions import AppError

    if role not in Roles.ALL:
        console.print(f"[yellow]Warning: role '{role}' is not one of {Roles.ALL}[/yellow]")

    settings = get_settings()
    try:
        with get_db_context(database_url or settings.database_url) as db:
            user = UserService(db, settings).create_user(name, email, password, role)
    except AppError as e:
        console.print(f"[red]✗ {e.detail}[/red]")
        raise typer.Exit(1)

    console.print(f"[green]✓ Created {user.role} {user.email} ({user.id})[/green]")


@app.command()
def list_tables(
    database_url: str = typer.Option(None, "--database-url", help="Overrides DATABASE_URL"),
):
    """Show all tables and their occupancy."""
    from pos_api.services.domain import TableService
    from pos_shared.config.settings import get_settings
    from pos_shared.infrastructure.db import get_db_context

    with get_db_context(database_url or get_settings().database_url) as db:
        tables = TableService(db).find_all()

    table = Table(title="Tables")
    table.add_column("Name", style="cyan")
    table.add_column("Capacity", justify="right")
    table.add_column("Status", style="green")
    table.add_column("ID")

    for t in tables:
        status = t.status if t.status == "Free" else f"[red]{t.status}[/red]"
        table.add_row(t.name, str(t.capacity), status, str(t.id))

    console.print(table)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:3000", help="REST API base URL"),
):
    """Check REST API health."""
    import httpx

    table = Table(title="Service Health")
    table.add_column("Check", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    healthy = True
    with httpx.Client(timeout=5.0) as client:
        for name, path in (("REST API", "/health"), ("Database", "/health/detailed")):
            try:
                start = time.time()
                response = client.get(f"{url.rstrip('/')}{path}")
                elapsed = (time.time() - start) * 1000
                if response.status_code == 200:
                    table.add_row(name, "✓ Healthy", f"{elapsed:.0f}ms")
                else:
                    healthy = False
                    table.add_row(name, f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
            except httpx.HTTPError as e:
                healthy = False
                table.add_row(name, f"✗ {type(e).__name__}", "-")

    console.print(table)
    if not healthy:
        raise typer.Exit(1)


@app.command()
def version():
    """Show version information."""
    table = Table(title="BuffetPOS Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", API_VERSION)
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
