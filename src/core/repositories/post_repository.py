"""Abstract contract for post persistence."""

from abc import ABC, abstractmethod

from core.models.post import Post


class PostRepository(ABC):
    """Contract for storing and retrieving post records.

    Implementations could be DynamoDB, PostgreSQL, MongoDB, etc.
    The lifecycle manager depends on this interface, not the implementation.
    """

    @abstractmethod
    def create_post(
        self,
        *,
        title: str | None,
        content: str | None,
        image_key: str,
    ) -> Post:
        """Create a post record.

        The repository assigns ``post_id`` and ``created_at``.

        Raises:
            RepositoryError: If creation fails
        """

    @abstractmethod
    def list_posts(self) -> list[Post]:
        """Return every post, oldest first.

        Raises:
            RepositoryError: If the listing fails
        """

    @abstractmethod
    def find_post(self, *, post_id: str) -> Post | None:
        """Fetch a single post.

        Returns:
            The post or None if not found

        Raises:
            RepositoryError: If the lookup fails
        """

    @abstractmethod
    def delete_post(self, *, post_id: str) -> bool:
        """Delete a post record.

        Returns:
            True if a record was removed, False if none existed

        Raises:
            RepositoryError: If deletion fails
        """
