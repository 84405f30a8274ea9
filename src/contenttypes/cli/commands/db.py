from __future__ import annotations

import typer

from ...domain import entities  # noqa: F401  # registers tables on Base.metadata
from ...infra.db import Base, get_engine

app = typer.Typer(name="db", help="Database maintenance operations")


@app.command("init")
def init_db(
    database_url: str | None = typer.Option(None, "--database-url", help="Override DATABASE_URL"),
):
    """Create any missing tables on the configured database."""
    try:
        engine = get_engine(database_url)
        Base.metadata.create_all(engine)
    except Exception as e:
        typer.echo(f"Error initializing database: {e}", err=True)
        raise typer.Exit(1)

    typer.echo("Database initialized: " + ", ".join(sorted(Base.metadata.tables)))
