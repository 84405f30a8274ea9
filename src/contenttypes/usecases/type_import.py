"""
Bulk import of a type definition graph.

A payload describes content types and media types by alias, with children pointing
at their parent's alias. Parents are saved before children, one commit each, and
every child resolves its parent id only when it is built, so ids assigned during the
import are visible to the types that depend on them.

Payload shape::

    {
        "content_types": [
            {"alias": "page", "name": "Page"},
            {"alias": "newsItem", "name": "News item", "parent": "page"}
        ],
        "media_types": [...]
    }
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, Sequence
from typing import Any

from ..domain.entities import ROOT_PARENT_ID, ContentType, MediaType
from ..infra.exceptions import ValidationError
from .content_type_service import ContentTypeService

_FIELDS = ("name", "description", "icon", "sort_order")
_TEXT_FIELDS = ("name", "description", "icon")


def _check_fields(kind: str, alias: str, item: Mapping[str, Any]) -> None:
    for field in _TEXT_FIELDS:
        value = item.get(field)
        if value is not None and not isinstance(value, str):
            raise ValidationError(f"{kind}: '{field}' of '{alias}' must be a string")
    sort_order = item.get("sort_order")
    if sort_order is not None and (isinstance(sort_order, bool) or not isinstance(sort_order, int)):
        raise ValidationError(f"{kind}: 'sort_order' of '{alias}' must be an integer")


def _order_by_parent(kind: str, items: Sequence[Mapping[str, Any]]) -> list[dict[str, Any]]:
    """Stable topological order: every item follows the item naming it as parent.

    Items come back as copies with ``alias`` and ``parent`` stripped. Parents that
    are not in ``items`` are assumed to already exist and are checked by the caller.
    """
    by_alias: dict[str, dict[str, Any]] = {}
    for item in items:
        if not isinstance(item, Mapping):
            raise ValidationError(f"{kind}: every item must be an object")
        alias = item.get("alias")
        if not isinstance(alias, str) or not alias.strip():
            raise ValidationError(f"{kind}: every item needs a non-empty 'alias'")
        alias = alias.strip()
        if alias in by_alias:
            raise ValidationError(f"{kind}: duplicate alias '{alias}'")
        parent = item.get("parent")
        if parent is not None and (not isinstance(parent, str) or not parent.strip()):
            raise ValidationError(f"{kind}: 'parent' of '{alias}' must be an alias string")
        _check_fields(kind, alias, item)
        normalized = dict(item, alias=alias)
        if parent is not None:
            normalized["parent"] = parent.strip()
        by_alias[alias] = normalized

    ordered: list[dict[str, Any]] = []
    placed: set[str] = set()

    # Walk up from each unplaced item; meeting a link of the current chain again is a cycle
    for alias in by_alias:
        chain: list[str] = []
        on_chain: set[str] = set()
        current = alias
        while current in by_alias and current not in placed:
            if current in on_chain:
                raise ValidationError(f"{kind}: parent cycle involving '{current}'")
            chain.append(current)
            on_chain.add(current)
            current = by_alias[current].get("parent")
        for link in reversed(chain):
            placed.add(link)
            ordered.append(by_alias[link])
    return ordered


def _factories(
    kind: str,
    items: Sequence[Mapping[str, Any]],
    model: type[ContentType] | type[MediaType],
    lookup: Callable[[str], ContentType | MediaType | None],
) -> list[Callable[[], ContentType | MediaType]]:
    ordered = _order_by_parent(kind, items)
    in_payload = {item["alias"] for item in ordered}
    for item in ordered:
        parent = item.get("parent")
        if parent is not None and parent not in in_payload and lookup(parent) is None:
            raise ValidationError(f"{kind}: parent '{parent}' of '{item['alias']}' not found")

    # Types built by this import, so children bind to them rather than to a stored namesake
    built: dict[str, ContentType | MediaType] = {}

    def make(item: Mapping[str, Any]) -> Callable[[], ContentType | MediaType]:
        def build() -> ContentType | MediaType:
            parent = item.get("parent")
            parent_id = ROOT_PARENT_ID
            if parent is not None:
                parent_id = built[parent].id if parent in built else lookup(parent).id
            values = {field: item[field] for field in _FIELDS if item.get(field) is not None}
            values.setdefault("name", item["alias"])
            entity = model(alias=item["alias"], parent_id=parent_id, **values)
            built[item["alias"]] = entity
            return entity

        return build

    return [make(item) for item in ordered]


def import_type_definitions(
    service: ContentTypeService,
    payload: Mapping[str, Any],
    *,
    user_id: int = -1,
) -> dict[str, Any]:
    """Import content and media type definitions from a payload.

    Args:
        service: Content type service bound to the target session
        payload: Mapping with optional ``content_types`` and ``media_types`` lists
        user_id: Id of the user performing the import

    Returns:
        Dictionary with the saved aliases and ids per kind and a total count

    Raises:
        ValidationError: If an alias is missing or duplicated, a field has the wrong
            type, a parent is unknown, or parents form a cycle. Nothing is saved in
            that case.
    """
    if not isinstance(payload, Mapping):
        raise ValidationError("import payload must be an object")

    content_items = payload.get("content_types") or []
    media_items = payload.get("media_types") or []
    if not isinstance(content_items, list) or not isinstance(media_items, list):
        raise ValidationError("'content_types' and 'media_types' must be lists")

    # Validate both kinds before saving anything
    content_factories = _factories(
        "content_types", content_items, ContentType, service.get_content_type_by_alias
    )
    media_factories = _factories(
        "media_types", media_items, MediaType, service.get_media_type_by_alias
    )

    content_types = service.save_content_types_lazily(content_factories, user_id=user_id)
    media_types = service.save_media_types_lazily(media_factories, user_id=user_id)

    return {
        "content_types": [{"id": ct.id, "alias": ct.alias} for ct in content_types],
        "media_types": [{"id": mt.id, "alias": mt.alias} for mt in media_types],
        "count": len(content_types) + len(media_types),
    }


__all__ = ["import_type_definitions"]
