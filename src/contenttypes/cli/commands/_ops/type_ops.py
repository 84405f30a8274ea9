"""
Type definition command helpers.

This module encapsulates the non-IO logic shared by the content-type and media-type
command groups:
- Selector resolution (numeric id first, then alias)
- Output dictionaries for type definitions

This module MUST NOT read from stdin or write to stdout. All IO stays in the CLI command wrappers.
"""

from __future__ import annotations

from datetime import datetime
from typing import Any

from ....domain.entities import ContentType, MediaType
from ....usecases.content_type_service import ContentTypeService


def _parse_id(selector: str) -> int | None:
    try:
        return int(selector)
    except ValueError:
        return None


def resolve_content_type(service: ContentTypeService, selector: str) -> ContentType:
    """Resolve a content type by id or alias.

    Raises ValueError if no content type matches.
    """
    content_type = None
    type_id = _parse_id(selector)
    if type_id is not None:
        content_type = service.get_content_type(type_id)
    if content_type is None:
        content_type = service.get_content_type_by_alias(selector)
    if content_type is None:
        raise ValueError(f"Content type '{selector}' not found")
    return content_type


def resolve_media_type(service: ContentTypeService, selector: str) -> MediaType:
    """Resolve a media type by id or alias.

    Raises ValueError if no media type matches.
    """
    media_type = None
    type_id = _parse_id(selector)
    if type_id is not None:
        media_type = service.get_media_type(type_id)
    if media_type is None:
        media_type = service.get_media_type_by_alias(selector)
    if media_type is None:
        raise ValueError(f"Media type '{selector}' not found")
    return media_type


def _format_datetime(dt: datetime | None) -> str | None:
    return dt.isoformat() if dt else None


def type_to_dict(type_definition: ContentType | MediaType) -> dict[str, Any]:
    """Convert a type definition entity to an output dictionary."""
    return {
        "id": type_definition.id,
        "alias": type_definition.alias,
        "name": type_definition.name,
        "description": type_definition.description,
        "icon": type_definition.icon,
        "parent_id": type_definition.parent_id,
        "creator_id": type_definition.creator_id,
        "sort_order": type_definition.sort_order,
        "created_at": _format_datetime(type_definition.created_at),
        "updated_at": _format_datetime(type_definition.updated_at),
    }
