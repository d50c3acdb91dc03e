"""
Indostore CLI.

Command-line interface for common operations.
"""

import sys

import typer
from rich.console import Console
from rich.table import Table

app = typer.Typer(
    name="indostore",
    help="Indostore store hierarchy CLI",
    add_completion=False,
)
console = Console()


# =============================================================================
# Database Commands
# =============================================================================

@app.command()
def db_init():
    """Create all database tables."""
    from sqlalchemy.exc import SQLAlchemyError
    from shared.infrastructure.db import engine
    from rest_api.models import Base

    console.print("[blue]Creating tables...[/blue]")
    try:
        Base.metadata.create_all(bind=engine)
    except SQLAlchemyError as e:
        console.print(f"[red]✗ Table creation failed: {e}[/red]")
        raise typer.Exit(1)
    console.print(f"[green]✓ {len(Base.metadata.tables)} tables created/verified[/green]")


@app.command()
def db_seed(
    force: bool = typer.Option(False, "--force", "-f", help="Allow seeding in production"),
):
    """Seed database with a demo province/branch/store hierarchy."""
    from sqlalchemy.exc import SQLAlchemyError
    from shared.config.settings import settings
    from shared.infrastructure.db import get_db_context
    from shared.utils.exceptions import AppException
    from rest_api.seed import seed

    if settings.is_production and not force:
        console.print("[red]Cannot seed production without --force[/red]")
        raise typer.Exit(1)

    with get_db_context() as db:
        try:
            counts = seed(db)
        except (AppException, SQLAlchemyError) as e:
            console.print(f"[red]✗ Seeding failed: {e}[/red]")
            raise typer.Exit(1)

    table = Table(title="Seeded rows")
    table.add_column("Table", style="cyan")
    table.add_column("Created", style="green")
    for name, count in counts.items():
        table.add_row(name, str(count))
    console.print(table)


# =============================================================================
# Auth Commands
# =============================================================================

@app.command()
def issue_token(
    user_id: int = typer.Option(..., "--user-id", help="Subject claim (user id)"),
    email: str = typer.Option(..., "--email", help="Email claim"),
    ttl_minutes: int = typer.Option(None, "--ttl", help="Lifetime in minutes"),
):
    """Print a bearer token signed with the configured JWT secret."""
    from shared.security.auth import sign_jwt

    ttl_seconds = ttl_minutes * 60 if ttl_minutes else None
    token = sign_jwt({"sub": str(user_id), "email": email}, ttl_seconds=ttl_seconds)
    typer.echo(token)


# =============================================================================
# Audit Commands
# =============================================================================

@app.command()
def audit_tail(
    table_name: str = typer.Option(None, "--table", help="Filter by table name"),
    limit: int = typer.Option(20, help="Rows to show"),
):
    """Show the most recent audit log rows."""
    from shared.infrastructure.db import get_db_context
    from rest_api.repositories import get_audit_log_repository

    with get_db_context() as db:
        entries = get_audit_log_repository(db).find(table_name=table_name)[:limit]

        table = Table(title="Audit log")
        table.add_column("When", style="cyan")
        table.add_column("Table")
        table.add_column("Record", justify="right")
        table.add_column("Action", style="yellow")
        table.add_column("User")
        for entry in entries:
            table.add_row(
                entry.timestamp.isoformat(timespec="seconds"),
                entry.table_name,
                str(entry.record_id),
                entry.action,
                entry.user_email or str(entry.user_id or "-"),
            )

    console.print(table)


# =============================================================================
# Health Commands
# =============================================================================

@app.command()
def health(
    url: str = typer.Option("http://localhost:8000/api/health", help="Health endpoint"),
):
    """Check that the REST API answers."""
    import time
    import httpx

    table = Table(title="Service Health")
    table.add_column("Service", style="cyan")
    table.add_column("Status", style="green")
    table.add_column("Response Time", style="yellow")

    try:
        start = time.time()
        response = httpx.get(url, timeout=5.0)
        elapsed = (time.time() - start) * 1000
        if response.status_code == 200:
            table.add_row("REST API", "✓ Healthy", f"{elapsed:.0f}ms")
        else:
            table.add_row("REST API", f"✗ Status {response.status_code}", f"{elapsed:.0f}ms")
    except httpx.HTTPError as e:
        table.add_row("REST API", f"✗ {type(e).__name__}", "-")

    console.print(table)


@app.command()
def version():
    """Show version information."""
    table = Table(title="Indostore Version")
    table.add_column("Component", style="cyan")
    table.add_column("Version", style="green")

    table.add_row("API", "0.1.0")
    table.add_row("Python", sys.version.split()[0])

    console.print(table)


if __name__ == "__main__":
    app()
