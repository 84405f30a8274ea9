from __future__ import annotations

from sqlalchemy import delete, func, select
from sqlalchemy.orm import Session

from ..domain.entities import Media
from ..domain.interfaces import MediaServiceInterface


class MediaService(MediaServiceInterface):
    """Media item operations needed by type management."""

    def __init__(self, db: Session):
        self.db = db

    def count_media_of_type(self, media_type_id: int) -> int:
        stmt = select(func.count()).select_from(Media).where(Media.media_type_id == media_type_id)
        return self.db.scalar(stmt) or 0

    def delete_media_of_type(self, media_type_id: int) -> int:
        """Delete all media built from ``media_type_id``. Does not commit."""
        stmt = delete(Media).where(Media.media_type_id == media_type_id)
        result = self.db.execute(stmt.execution_options(synchronize_session="fetch"))
        return result.rowcount or 0


__all__ = ["MediaService"]
