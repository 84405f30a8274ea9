from __future__ import annotations

import json
from pathlib import Path

import typer

from ...domain.entities import ROOT_PARENT_ID, ContentType
from ...infra.exceptions import ValidationError
from ...infra.uow import session
from ...usecases import content_type_service as _uc_service
from ...usecases import type_import as _uc_import
from ...usecases.content_service import ContentService
from ._ops.type_ops import resolve_content_type, type_to_dict

app = typer.Typer(name="content-type", help="Content type definition operations")


def _fail(json_output: bool, code: str, message: str) -> None:
    if json_output:
        typer.echo(json.dumps({"status": "error", "code": code, "message": message}, indent=2))
    else:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _print_type(row: dict) -> None:
    typer.echo(f"  ID: {row['id']}")
    typer.echo(f"  Alias: {row['alias']}")
    typer.echo(f"  Name: {row['name']}")
    typer.echo(f"  Parent: {row['parent_id']}")
    if row.get("description"):
        typer.echo(f"  Description: {row['description']}")
    if row.get("icon"):
        typer.echo(f"  Icon: {row['icon']}")


def _print_list(rows: list[dict], empty_message: str) -> None:
    if not rows:
        typer.echo(empty_message)
        return
    typer.echo("Content types:")
    for row in rows:
        typer.echo(f"  [{row['id']}] {row['alias']}: {row['name']} (parent {row['parent_id']})")
    typer.echo(f"\nTotal: {len(rows)} content types")


@app.command("list")
def list_content_types(
    ids: list[int] | None = typer.Option(None, "--id", help="Only list these ids (repeatable)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List content types, optionally restricted to specific ids.

    Examples:
        contenttypes content-type list
        contenttypes content-type list --id 1 --id 4 --json
    """
    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            rows = [type_to_dict(ct) for ct in service.get_all_content_types(*(ids or []))]
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error listing content types: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", "total": len(rows), "content_types": rows}, indent=2))
    else:
        _print_list(rows, "No content types found")


@app.command("show")
def show_content_type(
    selector: str = typer.Argument(..., help="Content type identifier: id or alias"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show a single content type."""
    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            row = type_to_dict(resolve_content_type(service, selector))
        except ValueError as e:
            _fail(json_output, "CONTENT_TYPE_NOT_FOUND", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error showing content type: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", "content_type": row}, indent=2))
    else:
        typer.echo("Content type:")
        _print_type(row)


@app.command("children")
def list_children(
    parent_id: int = typer.Argument(..., help="Id of the parent content type"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List the content types whose parent is PARENT_ID."""
    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            rows = [type_to_dict(ct) for ct in service.get_content_type_children(parent_id)]
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error listing children: {e}")

    if json_output:
        typer.echo(
            json.dumps(
                {"status": "ok", "parent_id": parent_id, "total": len(rows), "content_types": rows},
                indent=2,
            )
        )
    else:
        _print_list(rows, f"No content types with parent {parent_id}")


@app.command("add")
def add_content_type(
    alias: str = typer.Option(..., "--alias", help="Content type alias (e.g., 'newsItem')"),
    name: str | None = typer.Option(None, "--name", help="Display name (defaults to the alias)"),
    parent_id: int = typer.Option(ROOT_PARENT_ID, "--parent-id", help="Parent content type id"),
    description: str | None = typer.Option(None, "--description", help="Description"),
    icon: str | None = typer.Option(None, "--icon", help="Icon name"),
    sort_order: int = typer.Option(0, "--sort-order", help="Sort order among siblings"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Create a new content type.

    Examples:
        contenttypes content-type add --alias page --name Page
        contenttypes content-type add --alias newsItem --name "News item" --parent-id 1
    """
    with session() as db:
        try:
            if not alias.strip():
                raise ValidationError("alias is required")
            service = _uc_service.build_content_type_service(db)
            content_type = service.save_content_type(
                ContentType(
                    alias=alias.strip(),
                    name=name or alias.strip(),
                    parent_id=parent_id,
                    description=description,
                    icon=icon,
                    sort_order=sort_order,
                )
            )
            row = type_to_dict(content_type)
        except ValidationError as e:
            _fail(json_output, "VALIDATION_ERROR", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error creating content type: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", "content_type": row}, indent=2))
    else:
        typer.echo("Content type created:")
        _print_type(row)


@app.command("update")
def update_content_type(
    selector: str = typer.Argument(..., help="Content type identifier: id or alias"),
    alias: str | None = typer.Option(None, "--alias", help="New alias"),
    name: str | None = typer.Option(None, "--name", help="New display name"),
    parent_id: int | None = typer.Option(None, "--parent-id", help="New parent content type id"),
    description: str | None = typer.Option(None, "--description", help="New description"),
    icon: str | None = typer.Option(None, "--icon", help="New icon name"),
    sort_order: int | None = typer.Option(None, "--sort-order", help="New sort order"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Update fields of an existing content type."""
    with session() as db:
        try:
            if alias is not None and not alias.strip():
                raise ValidationError("alias cannot be empty")
            service = _uc_service.build_content_type_service(db)
            content_type = resolve_content_type(service, selector)
            changes = {
                "alias": alias.strip() if alias else None,
                "name": name,
                "parent_id": parent_id,
                "description": description,
                "icon": icon,
                "sort_order": sort_order,
            }
            for field, value in changes.items():
                if value is not None:
                    setattr(content_type, field, value)
            row = type_to_dict(service.save_content_type(content_type))
        except ValidationError as e:
            _fail(json_output, "VALIDATION_ERROR", str(e))
        except ValueError as e:
            _fail(json_output, "CONTENT_TYPE_NOT_FOUND", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error updating content type: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", "content_type": row}, indent=2))
    else:
        typer.echo("Content type updated:")
        _print_type(row)


@app.command("delete")
def delete_content_types(
    selectors: list[str] = typer.Argument(..., help="Content type identifiers: ids or aliases"),
    yes: bool = typer.Option(False, "--yes", help="Confirm deletion of the types and all their content"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Delete content types together with all content built from them.

    Examples:
        contenttypes content-type delete newsItem --yes
        contenttypes content-type delete 3 4 5 --yes --json
    """
    if not yes:
        _fail(
            json_output,
            "CONFIRMATION_REQUIRED",
            "Deleting a content type deletes all of its content; this requires --yes",
        )

    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            content_types = [resolve_content_type(service, s) for s in selectors]
            # Drop repeats so a type named twice (by id and alias) is deleted once
            content_types = list({ct.id: ct for ct in content_types}.values())
            counter = ContentService(db)
            deleted = [{"id": ct.id, "alias": ct.alias} for ct in content_types]
            content_removed = sum(counter.count_content_of_type(ct.id) for ct in content_types)

            if len(content_types) == 1:
                service.delete_content_type(content_types[0])
            else:
                service.delete_content_types(content_types)
        except ValueError as e:
            _fail(json_output, "CONTENT_TYPE_NOT_FOUND", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error deleting content types: {e}")

    if json_output:
        payload = {
            "status": "ok",
            "deleted": len(deleted),
            "content_removed": content_removed,
            "content_types": deleted,
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        for row in deleted:
            typer.echo(f"Deleted content type '{row['alias']}' (ID {row['id']})")
        typer.echo(f"Content removed: {content_removed}")


@app.command("import")
def import_types(
    path: Path = typer.Argument(..., exists=True, dir_okay=False, readable=True, help="JSON type graph file"),
    user_id: int = typer.Option(-1, "--user-id", help="Id of the user performing the import"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Import content and media type definitions from a JSON file.

    Parents are saved before their children, one commit per type, so children can
    refer to parents by alias.
    """
    with session() as db:
        try:
            try:
                payload = json.loads(path.read_text(encoding="utf-8"))
            except json.JSONDecodeError as e:
                raise ValidationError(f"Invalid JSON in {path}: {e}") from e
            service = _uc_service.build_content_type_service(db)
            result = _uc_import.import_type_definitions(service, payload, user_id=user_id)
        except ValidationError as e:
            _fail(json_output, "VALIDATION_ERROR", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error importing types: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", **result}, indent=2))
    else:
        for row in result["content_types"]:
            typer.echo(f"Saved content type '{row['alias']}' (ID {row['id']})")
        for row in result["media_types"]:
            typer.echo(f"Saved media type '{row['alias']}' (ID {row['id']})")
        typer.echo(f"\nImported: {result['count']} types")
