"""S3-backed implementation of ImageStorageRepository."""

import os

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError

from core.infrastructure.adapters.s3_adapter import S3Adapter, S3AdapterProtocol
from core.models.errors import (
    ImageDeletionFailedError,
    ImageListingFailedError,
    ImageUploadFailedError,
    PresignedUrlFailedError,
    StorageError,
)
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    ENV_APP_RUNTIME,
    LOCALHOST_URL,
    LOCALSTACK_URL,
    SIGNED_URL_TTL_SECONDS,
)

logger = Logger(UTC=True)

# S3 and S3-compatible stores disagree on how a missing key is reported
MISSING_OBJECT_CODES = frozenset({"NoSuchKey", "404", "NotFound"})


def _error_code(exc: ClientError) -> str:
    return str(exc.response.get("Error", {}).get("Code", ""))


class S3ImageStorage(ImageStorageRepository):
    """Image storage implementation backed by Amazon S3."""

    def __init__(self, adapter: S3AdapterProtocol | None = None) -> None:
        """Create storage using the provided S3 adapter."""
        self._s3: S3AdapterProtocol = adapter or S3Adapter()

    def upload_image(
        self,
        *,
        key: str,
        file_data: bytes,
        content_type: str,
    ) -> None:
        """Upload image bytes to S3 under ``key``."""
        logger.debug(
            "Uploading image",
            extra={"key": key, "size": len(file_data), "content_type": content_type},
        )

        try:
            self._s3.put_object(
                key=key,
                body=file_data,
                content_type=content_type,
            )
            logger.info("Image uploaded successfully", extra={"key": key})

        except ClientError as exc:
            logger.error("S3 upload failed", extra={"key": key, "code": _error_code(exc)})
            raise ImageUploadFailedError(
                message="Unable to upload image at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error uploading image")
            raise ImageUploadFailedError(
                message="Unable to upload image at this time",
                details={"key": key},
            ) from exc

    def generate_presigned_get_url(
        self,
        *,
        key: str,
        expires_in: int = SIGNED_URL_TTL_SECONDS,
    ) -> str:
        """Generate a pre-signed S3 URL for reading an image object."""
        logger.debug(
            "Generating pre-signed S3 URL",
            extra={"key": key, "expires_in": expires_in},
        )

        try:
            url: str = self._s3.generate_presigned_url(
                method="get_object",
                params={"Key": key},
                expires_in=expires_in,
            )
        except ClientError as exc:
            logger.error("Failed to generate pre-signed URL", extra={"key": key})
            raise PresignedUrlFailedError(
                message="Unable to generate image access URL",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error generating pre-signed URL")
            raise PresignedUrlFailedError(
                message="Unable to generate image access URL",
                details={"key": key},
            ) from exc

        if os.getenv(ENV_APP_RUNTIME) == "localstack":
            url = self._rewrite_localstack_url(url)

        return url

    def remove_image(self, *, key: str) -> None:
        """Delete an image object from S3; a missing object counts as deleted."""
        logger.debug("Deleting image", extra={"key": key})

        try:
            self._s3.delete_object(key=key)
            logger.info("Image deleted successfully", extra={"key": key})

        except ClientError as exc:
            if _error_code(exc) in MISSING_OBJECT_CODES:
                logger.info("Image already absent", extra={"key": key})
                return

            logger.error("S3 deletion failed", extra={"key": key, "code": _error_code(exc)})
            raise ImageDeletionFailedError(
                message="Unable to delete image at this time",
                details={"key": key},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error deleting image")
            raise ImageDeletionFailedError(
                message="Unable to delete image at this time",
                details={"key": key},
            ) from exc

    def list_image_keys(self, *, prefix: str) -> list[str]:
        """List stored image keys under ``prefix``."""
        try:
            keys = list(self._s3.iter_keys(prefix=prefix))
        except Exception as exc:
            logger.exception("Failed to list images", extra={"prefix": prefix})
            raise ImageListingFailedError(
                message="Unable to list stored images",
                details={"prefix": prefix},
            ) from exc

        logger.debug("Images listed", extra={"prefix": prefix, "count": len(keys)})
        return keys

    def image_exists(self, *, key: str) -> bool:
        """Return whether ``key`` resolves to a stored object."""
        try:
            self._s3.head_object(key=key)
            return True

        except ClientError as exc:
            if _error_code(exc) in MISSING_OBJECT_CODES:
                return False

            logger.error("S3 head_object failed", extra={"key": key})
            raise StorageError(
                message="Unable to check image existence",
                details={"key": key},
            ) from exc

    @staticmethod
    def _rewrite_localstack_url(url: str) -> str:
        """
        Replace internal LocalStack hostname with localhost
        so URLs are accessible from the host machine.
        """
        return url.replace(LOCALSTACK_URL, LOCALHOST_URL, 1)
