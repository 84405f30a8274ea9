"""
Content type service.

Single entry point for reading, writing and deleting content type and media type
definitions, and for producing the simplified DTD used by the legacy XML export.

Every mutation goes through the repositories and is committed on the Unit of Work
passed in; repository and commit failures propagate to the caller untouched. Only
schema body generation swallows errors, so an export always gets a string back.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable

import structlog
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from ..domain.entities import ContentType, MediaType
from ..domain.interfaces import ContentServiceInterface, MediaServiceInterface
from ..infra.settings import settings
from ..infra.type_repository import ContentTypeRepository, MediaTypeRepository
from ..infra.uow import UnitOfWork
from ..shared.alias import to_safe_alias
from .content_service import ContentService
from .media_service import MediaService

_log = structlog.get_logger(__name__)

# Creator id stamped on every type saved through the lazy bulk path
DEFAULT_CREATOR_ID = 0

DTD_PREAMBLE = "<!DOCTYPE root [ "
DTD_CLOSING = "]>"
LEGACY_SCHEMA_BODY = "<!ELEMENT node ANY> <!ATTLIST node id ID #REQUIRED>  <!ELEMENT data ANY>"


class ContentTypeService:
    """Façade over the content type and media type repositories."""

    def __init__(
        self,
        content_service: ContentServiceInterface,
        media_service: MediaServiceInterface,
        unit_of_work: UnitOfWork,
    ):
        self._content_service = content_service
        self._media_service = media_service
        self._unit_of_work = unit_of_work
        self._content_type_repository = ContentTypeRepository(unit_of_work.session)
        self._media_type_repository = MediaTypeRepository(unit_of_work.session)

    # -- content types ---------------------------------------------------------

    def get_content_type(self, id: int) -> ContentType | None:
        """Get a content type by id, or None if there is none."""
        return self._content_type_repository.get(id)

    def get_content_type_by_alias(self, alias: str) -> ContentType | None:
        """Get the first content type whose alias equals ``alias``.

        Aliases are not unique at the storage level; when several types share one,
        the lowest id wins.
        """
        content_types = self._content_type_repository.get_by_query(ContentType.alias == alias)
        return content_types[0] if content_types else None

    def get_all_content_types(self, *ids: int) -> list[ContentType]:
        """Get all content types, or only those with the given ids."""
        return self._content_type_repository.get_all(ids)

    def get_content_type_children(self, parent_id: int) -> list[ContentType]:
        return self._content_type_repository.get_by_query(ContentType.parent_id == parent_id)

    def save_content_type(self, content_type: ContentType) -> ContentType:
        content_type = self._content_type_repository.add_or_update(content_type)
        self._unit_of_work.commit()
        return content_type

    def save_content_types(self, content_types: Iterable[ContentType]) -> list[ContentType]:
        """Upsert every content type, then commit once."""
        saved = [self._content_type_repository.add_or_update(ct) for ct in content_types]
        self._unit_of_work.commit()
        return saved

    def save_content_types_lazily(
        self,
        factories: Iterable[Callable[[], ContentType]],
        user_id: int = -1,
    ) -> list[ContentType]:
        """Build and save content types one at a time.

        Each factory is called only after every earlier one has been saved and
        committed, so it can refer to ids the store has just assigned (a child type
        looking up its freshly created parent). One commit per type.
        """
        return self._save_lazily(
            factories, self._content_type_repository, "content_type_saved", user_id
        )

    def delete_content_type(self, content_type: ContentType) -> None:
        """Delete a content type and all content built from it."""
        self._content_service.delete_content_of_type(content_type.id)
        self._content_type_repository.delete(content_type)
        self._unit_of_work.commit()

    def delete_content_types(self, content_types: Iterable[ContentType]) -> None:
        """Delete content types and their content.

        All content is removed before any definition; there is no compensation if a
        cascade fails partway.
        """
        content_type_list = list(content_types)
        for content_type in content_type_list:
            self._content_service.delete_content_of_type(content_type.id)
        for content_type in content_type_list:
            self._content_type_repository.delete(content_type)
        self._unit_of_work.commit()

    # -- media types -----------------------------------------------------------

    def get_media_type(self, id: int) -> MediaType | None:
        return self._media_type_repository.get(id)

    def get_media_type_by_alias(self, alias: str) -> MediaType | None:
        media_types = self._media_type_repository.get_by_query(MediaType.alias == alias)
        return media_types[0] if media_types else None

    def get_all_media_types(self, *ids: int) -> list[MediaType]:
        return self._media_type_repository.get_all(ids)

    def get_media_type_children(self, parent_id: int) -> list[MediaType]:
        return self._media_type_repository.get_by_query(MediaType.parent_id == parent_id)

    def save_media_type(self, media_type: MediaType) -> MediaType:
        media_type = self._media_type_repository.add_or_update(media_type)
        self._unit_of_work.commit()
        return media_type

    def save_media_types(self, media_types: Iterable[MediaType]) -> list[MediaType]:
        saved = [self._media_type_repository.add_or_update(mt) for mt in media_types]
        self._unit_of_work.commit()
        return saved

    def save_media_types_lazily(
        self,
        factories: Iterable[Callable[[], MediaType]],
        user_id: int = -1,
    ) -> list[MediaType]:
        return self._save_lazily(factories, self._media_type_repository, "media_type_saved", user_id)

    def delete_media_type(self, media_type: MediaType) -> None:
        self._media_service.delete_media_of_type(media_type.id)
        self._media_type_repository.delete(media_type)
        self._unit_of_work.commit()

    def delete_media_types(self, media_types: Iterable[MediaType]) -> None:
        media_type_list = list(media_types)
        for media_type in media_type_list:
            self._media_service.delete_media_of_type(media_type.id)
        for media_type in media_type_list:
            self._media_type_repository.delete(media_type)
        self._unit_of_work.commit()

    # -- DTD -------------------------------------------------------------------

    def generate_dtd(self) -> str:
        """Generate the complete (simplified) XML DTD."""
        return "".join([DTD_PREAMBLE, "\n", self.generate_schema_body(), DTD_CLOSING])

    def generate_schema_body(self) -> str:
        """Generate the DTD declarations without the DOCTYPE wrapper.

        Never raises: if building the per-type declarations fails, the lines built
        up to that point are returned. A database failure also rolls back the
        session, discarding anything not yet committed on it.
        """
        if settings.use_legacy_xml_schema:
            return LEGACY_SCHEMA_BODY + "\n"

        lines: list[str] = []
        try:
            for content_type in self.get_all_content_types():
                safe_alias = to_safe_alias(content_type.alias)
                if safe_alias is not None:
                    lines.append(f"<!ELEMENT {safe_alias} ANY>\n")
                    lines.append(f"<!ATTLIST {safe_alias} id ID #REQUIRED>\n")
        except Exception as e:
            _log.warning("dtd_schema_body_failed", error=str(e), lines_built=len(lines))
            if isinstance(e, SQLAlchemyError):
                # Leave the shared session usable for the next operation
                self._unit_of_work.rollback()
        return "".join(lines)

    def _save_lazily(self, factories, repository, event: str, user_id: int) -> list:
        saved = []
        for factory in factories:
            entity = factory()
            entity.creator_id = DEFAULT_CREATOR_ID
            entity = repository.add_or_update(entity)
            self._unit_of_work.commit()
            _log.info(event, alias=entity.alias, id=entity.id, user_id=user_id)
            saved.append(entity)
        return saved


def build_content_type_service(db: Session) -> ContentTypeService:
    """Wire a ContentTypeService and its collaborators onto one session."""
    return ContentTypeService(ContentService(db), MediaService(db), UnitOfWork(db))


__all__ = ["ContentTypeService", "build_content_type_service", "DEFAULT_CREATOR_ID"]
