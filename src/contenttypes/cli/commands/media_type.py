from __future__ import annotations

import json

import typer

from ...domain.entities import ROOT_PARENT_ID, MediaType
from ...infra.exceptions import ValidationError
from ...infra.uow import session
from ...usecases import content_type_service as _uc_service
from ...usecases.media_service import MediaService
from ._ops.type_ops import resolve_media_type, type_to_dict

app = typer.Typer(name="media-type", help="Media type definition operations")


def _fail(json_output: bool, code: str, message: str) -> None:
    if json_output:
        typer.echo(json.dumps({"status": "error", "code": code, "message": message}, indent=2))
    else:
        typer.echo(f"Error: {message}", err=True)
    raise typer.Exit(1)


def _print_list(rows: list[dict], empty_message: str) -> None:
    if not rows:
        typer.echo(empty_message)
        return
    typer.echo("Media types:")
    for row in rows:
        typer.echo(f"  [{row['id']}] {row['alias']}: {row['name']} (parent {row['parent_id']})")
    typer.echo(f"\nTotal: {len(rows)} media types")


@app.command("list")
def list_media_types(
    ids: list[int] | None = typer.Option(None, "--id", help="Only list these ids (repeatable)"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List media types, optionally restricted to specific ids."""
    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            rows = [type_to_dict(mt) for mt in service.get_all_media_types(*(ids or []))]
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error listing media types: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", "total": len(rows), "media_types": rows}, indent=2))
    else:
        _print_list(rows, "No media types found")


@app.command("show")
def show_media_type(
    selector: str = typer.Argument(..., help="Media type identifier: id or alias"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Show a single media type."""
    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            row = type_to_dict(resolve_media_type(service, selector))
        except ValueError as e:
            _fail(json_output, "MEDIA_TYPE_NOT_FOUND", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error showing media type: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", "media_type": row}, indent=2))
    else:
        typer.echo("Media type:")
        typer.echo(f"  ID: {row['id']}")
        typer.echo(f"  Alias: {row['alias']}")
        typer.echo(f"  Name: {row['name']}")
        typer.echo(f"  Parent: {row['parent_id']}")


@app.command("children")
def list_children(
    parent_id: int = typer.Argument(..., help="Id of the parent media type"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """List the media types whose parent is PARENT_ID."""
    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            rows = [type_to_dict(mt) for mt in service.get_media_type_children(parent_id)]
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error listing children: {e}")

    if json_output:
        typer.echo(
            json.dumps(
                {"status": "ok", "parent_id": parent_id, "total": len(rows), "media_types": rows},
                indent=2,
            )
        )
    else:
        _print_list(rows, f"No media types with parent {parent_id}")


@app.command("add")
def add_media_type(
    alias: str = typer.Option(..., "--alias", help="Media type alias (e.g., 'image')"),
    name: str | None = typer.Option(None, "--name", help="Display name (defaults to the alias)"),
    parent_id: int = typer.Option(ROOT_PARENT_ID, "--parent-id", help="Parent media type id"),
    description: str | None = typer.Option(None, "--description", help="Description"),
    icon: str | None = typer.Option(None, "--icon", help="Icon name"),
    sort_order: int = typer.Option(0, "--sort-order", help="Sort order among siblings"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Create a new media type."""
    with session() as db:
        try:
            if not alias.strip():
                raise ValidationError("alias is required")
            service = _uc_service.build_content_type_service(db)
            media_type = service.save_media_type(
                MediaType(
                    alias=alias.strip(),
                    name=name or alias.strip(),
                    parent_id=parent_id,
                    description=description,
                    icon=icon,
                    sort_order=sort_order,
                )
            )
            row = type_to_dict(media_type)
        except ValidationError as e:
            _fail(json_output, "VALIDATION_ERROR", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error creating media type: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", "media_type": row}, indent=2))
    else:
        typer.echo(f"Media type created: '{row['alias']}' (ID {row['id']})")


@app.command("update")
def update_media_type(
    selector: str = typer.Argument(..., help="Media type identifier: id or alias"),
    alias: str | None = typer.Option(None, "--alias", help="New alias"),
    name: str | None = typer.Option(None, "--name", help="New display name"),
    parent_id: int | None = typer.Option(None, "--parent-id", help="New parent media type id"),
    description: str | None = typer.Option(None, "--description", help="New description"),
    icon: str | None = typer.Option(None, "--icon", help="New icon name"),
    sort_order: int | None = typer.Option(None, "--sort-order", help="New sort order"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Update fields of an existing media type."""
    with session() as db:
        try:
            if alias is not None and not alias.strip():
                raise ValidationError("alias cannot be empty")
            service = _uc_service.build_content_type_service(db)
            media_type = resolve_media_type(service, selector)
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
                    setattr(media_type, field, value)
            row = type_to_dict(service.save_media_type(media_type))
        except ValidationError as e:
            _fail(json_output, "VALIDATION_ERROR", str(e))
        except ValueError as e:
            _fail(json_output, "MEDIA_TYPE_NOT_FOUND", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error updating media type: {e}")

    if json_output:
        typer.echo(json.dumps({"status": "ok", "media_type": row}, indent=2))
    else:
        typer.echo(f"Media type updated: '{row['alias']}' (ID {row['id']})")


@app.command("delete")
def delete_media_types(
    selectors: list[str] = typer.Argument(..., help="Media type identifiers: ids or aliases"),
    yes: bool = typer.Option(False, "--yes", help="Confirm deletion of the types and all their media"),
    json_output: bool = typer.Option(False, "--json", help="Output in JSON format"),
):
    """Delete media types together with all media built from them."""
    if not yes:
        _fail(
            json_output,
            "CONFIRMATION_REQUIRED",
            "Deleting a media type deletes all of its media; this requires --yes",
        )

    with session() as db:
        try:
            service = _uc_service.build_content_type_service(db)
            media_types = [resolve_media_type(service, s) for s in selectors]
            media_types = list({mt.id: mt for mt in media_types}.values())
            counter = MediaService(db)
            deleted = [{"id": mt.id, "alias": mt.alias} for mt in media_types]
            media_removed = sum(counter.count_media_of_type(mt.id) for mt in media_types)

            if len(media_types) == 1:
                service.delete_media_type(media_types[0])
            else:
                service.delete_media_types(media_types)
        except ValueError as e:
            _fail(json_output, "MEDIA_TYPE_NOT_FOUND", str(e))
        except Exception as e:
            _fail(json_output, "UNKNOWN_ERROR", f"Error deleting media types: {e}")

    if json_output:
        payload = {
            "status": "ok",
            "deleted": len(deleted),
            "media_removed": media_removed,
            "media_types": deleted,
        }
        typer.echo(json.dumps(payload, indent=2))
    else:
        for row in deleted:
            typer.echo(f"Deleted media type '{row['alias']}' (ID {row['id']})")
        typer.echo(f"Media removed: {media_removed}")
