"""
Main CLI application using Typer with router-based command dispatch.

This module provides the command-line interface for contenttypes,
calling application usecases and outputting JSON when requested.

All command groups are registered through the centralized CliRouter.
"""

from __future__ import annotations

import typer

from ..infra.logging import configure_logging
from .commands import content_type, db, media_type, schema
from .router import get_router

app = typer.Typer(help="Content type management CLI")

router = get_router(app)

router.register(
    "content-type",
    content_type.app,
    help_text="Content type definition operations",
)

router.register(
    "media-type",
    media_type.app,
    help_text="Media type definition operations",
)

router.register(
    "schema",
    schema.app,
    help_text="XML schema (DTD) export operations",
)

router.register(
    "db",
    db.app,
    help_text="Database maintenance operations",
)


@app.callback()
def main():
    """contenttypes - content and media type definitions for the CMS."""


def cli():
    """Entry point for the CLI."""
    configure_logging()
    app()


if __name__ == "__main__":
    cli()
