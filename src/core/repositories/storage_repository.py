"""Abstract contract for image object storage."""

from abc import ABC, abstractmethod


class ImageStorageRepository(ABC):
    """Contract for storing, signing and removing image objects.

    Implementations could be S3, GCS, local disk, etc.
    The lifecycle manager depends on this interface, not the implementation.
    """

    @abstractmethod
    def upload_image(
        self,
        *,
        key: str,
        file_data: bytes,
        content_type: str,
    ) -> None:
        """Store an image payload under a caller-chosen key.

        Raises:
            ImageUploadFailedError: If upload fails
        """

    @abstractmethod
    def generate_presigned_get_url(self, *, key: str, expires_in: int) -> str:
        """Mint a read-only, expiring retrieval URL for ``key``.

        Raises:
            PresignedUrlFailedError: If the URL cannot be produced
        """

    @abstractmethod
    def remove_image(self, *, key: str) -> None:
        """Delete image by key. Deleting a missing key succeeds.

        Raises:
            ImageDeletionFailedError: If deletion fails
        """

    @abstractmethod
    def list_image_keys(self, *, prefix: str) -> list[str]:
        """List every stored key under ``prefix``.

        Raises:
            ImageListingFailedError: If listing fails
        """

    @abstractmethod
    def image_exists(self, *, key: str) -> bool:
        """Return whether an object is stored under ``key``.

        Raises:
            StorageError: If the check itself fails
        """
