from __future__ import annotations

import typer

from ...infra.uow import session
from ...usecases import content_type_service as _uc_service

app = typer.Typer(name="schema", help="XML schema export operations")


@app.command("dtd")
def show_dtd(
    body_only: bool = typer.Option(False, "--body-only", help="Print only the declarations, without DOCTYPE"),
):
    """Print the simplified DTD describing every content type.

    Set USE_LEGACY_XML_SCHEMA=true to emit the generic node/data schema instead.
    """
    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            text = service.generate_schema_body() if body_only else service.generate_dtd()
        except Exception as e:
            typer.echo(f"Error generating DTD: {e}", err=True)
            raise typer.Exit(1)

    typer.echo(text, nl=not text.endswith("\n"))
