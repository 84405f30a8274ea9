from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..domain.entities import Content
from ..domain.interfaces import ContentServiceInterface


class ContentService(ContentServiceInterface):
    """Content node operations needed by type management."""

    def __init__(self, db: Session):
        self.db = db

    def count_content_of_type(self, content_type_id: int) -> int:
        stmt = select(func.count()).select_from(Content).where(Content.content_type_id == content_type_id)
        return self.db.scalar(stmt) or 0

    def delete_content_of_type(self, content_type_id: int) -> int:
        """Delete all content built from ``content_type_id``. Does not commit."""
        stmt = delete(Content).where(Content.content_type_id == content_type_id)
        result = self.db.execute(stmt.execution_options(synchronize_session="fetch"))
        return result.rowcount or 0


__all__ = ["ContentService"]
