"""
Type definition repositories.

This module provides a thin wrapper around SQLAlchemy operations for ContentType and
MediaType entities, following the Unit of Work pattern used throughout the codebase:
repositories only register changes on the session, the Unit of Work commits them.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any, Generic, TypeVar

from sqlalchemy import inspect, select
from sqlalchemy.orm import Session

from ..domain.entities import ContentType, MediaType, TypeDefinitionMixin

T = TypeVar("T", bound=TypeDefinitionMixin)


class TypeDefinitionRepository(Generic[T]):
    """
    Repository for type definition database operations.

    Results are always ordered by id, so "first match" reads resolve to the
    lowest id when more than one row satisfies a query.
    """

    model: type[T]

    def __init__(self, db: Session):
        """
        Initialize the repository with a database session.

        Args:
            db: SQLAlchemy session instance shared with the Unit of Work
        """
        self.db = db

    def get(self, id: int) -> T | None:
        """
        Find a type definition by its id.

        Args:
            id: Primary key of the definition

        Returns:
            The definition if found, None otherwise
        """
        return self.db.get(self.model, id)

    def get_by_query(self, *criteria: Any) -> list[T]:
        """
        Find every type definition matching the given criteria.

        Args:
            criteria: SQLAlchemy boolean expressions, e.g. ``ContentType.alias == "news"``

        Returns:
            Matching definitions ordered by id
        """
        stmt = select(self.model).where(*criteria).order_by(self.model.id)
        return list(self.db.scalars(stmt))

    def get_all(self, ids: Iterable[int] = ()) -> list[T]:
        """
        Return all type definitions, or only those whose id is in ``ids``.

        An empty ``ids`` means no filtering.
        """
        stmt = select(self.model)
        ids = list(ids)
        if ids:
            stmt = stmt.where(self.model.id.in_(ids))
        return list(self.db.scalars(stmt.order_by(self.model.id)))

    def add_or_update(self, entity: T) -> T:
        """
        Register an insert or update of ``entity``; nothing is committed.

        A transient entity carrying an explicit id is merged so an existing row with
        that id is updated rather than duplicated. The returned instance is the one
        attached to the session.
        """
        state = inspect(entity)
        if state.transient and entity.id is not None:
            return self.db.merge(entity)
        self.db.add(entity)
        return entity

    def delete(self, entity: T) -> None:
        """Register deletion of ``entity``; nothing is committed."""
        self.db.delete(entity)


class ContentTypeRepository(TypeDefinitionRepository[ContentType]):
    model = ContentType


class MediaTypeRepository(TypeDefinitionRepository[MediaType]):
    model = MediaType
