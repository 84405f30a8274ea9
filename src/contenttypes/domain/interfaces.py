"""Domain interfaces for the services a type deletion cascades into."""

from abc import ABC, abstractmethod


class ContentServiceInterface(ABC):
    """Interface for the service that owns content nodes."""

    @abstractmethod
    def delete_content_of_type(self, content_type_id: int) -> int:
        """
        Delete every content node built from the given content type.

        Implementations register the deletion with the caller's unit of work and
        must not commit; the caller commits once the type itself is removed.

        Args:
            content_type_id: Id of the content type whose content is removed

        Returns:
            Number of content nodes deleted
        """
        raise NotImplementedError


class MediaServiceInterface(ABC):
    """Interface for the service that owns media items."""

    @abstractmethod
    def delete_media_of_type(self, media_type_id: int) -> int:
        """
        Delete every media item built from the given media type.

        Args:
            media_type_id: Id of the media type whose media is removed

        Returns:
            Number of media items deleted
        """
        raise NotImplementedError
