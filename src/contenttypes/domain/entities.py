"""
Domain entities for contenttypes.

Content types and media types are schema definitions: each describes the shape of a
family of content (or media) nodes. Content and Media rows are the instances built
from those definitions; they exist here so that deleting a type can remove the
instances that depend on it.
"""

from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from ..infra.db import Base

# Parent id of a type that sits at the root of the composition tree
ROOT_PARENT_ID = -1


class TypeDefinitionMixin:
    """Columns shared by content type and media type definitions."""

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    # Alias is expected to be unique within its kind but is not constrained
    alias: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    icon: Mapped[str | None] = mapped_column(String(255), nullable=True)
    # Not a foreign key: the service does not validate parent references
    parent_id: Mapped[int] = mapped_column(Integer, nullable=False, default=ROOT_PARENT_ID)
    creator_id: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), onupdate=func.now()
    )


class ContentType(TypeDefinitionMixin, Base):
    """Represents a content type definition."""

    __tablename__ = "content_types"

    def __repr__(self) -> str:
        return f"<ContentType(id={self.id}, alias={self.alias}, parent_id={self.parent_id})>"


class MediaType(TypeDefinitionMixin, Base):
    """Represents a media type definition."""

    __tablename__ = "media_types"

    def __repr__(self) -> str:
        return f"<MediaType(id={self.id}, alias={self.alias}, parent_id={self.parent_id})>"


class Content(Base):
    """A content node built from a content type."""

    __tablename__ = "content"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    content_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("content_types.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<Content(id={self.id}, name={self.name}, content_type_id={self.content_type_id})>"


class Media(Base):
    """A media item built from a media type."""

    __tablename__ = "media"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    media_type_id: Mapped[int] = mapped_column(
        Integer, ForeignKey("media_types.id", ondelete="RESTRICT"), nullable=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), server_default=func.now())

    def __repr__(self) -> str:
        return f"<Media(id={self.id}, name={self.name}, media_type_id={self.media_type_id})>"
