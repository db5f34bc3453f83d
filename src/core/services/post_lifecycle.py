"""Post and image lifecycle coordination.

This module keeps post records and their stored images consistent. Images are
stored before the record that references them is created, and removed before
that record is deleted. Posts handed to callers carry a freshly minted,
expiring image URL instead of the storage key.

Each workflow returns ``Ok`` or ``Err``; nothing is retried and no completed
step is rolled back. Partial failures are logged with an ``orphan`` field so
the reconciliation sweep can find them.
"""

from concurrent.futures import ThreadPoolExecutor
from typing import Any

from aws_lambda_powertools import Logger

from core.models.errors import (
    ImageDeletionFailedError,
    ImageUploadFailedError,
    MissingImageError,
    NotFoundError,
    PresignedUrlFailedError,
    RepositoryError,
    StorageError,
)
from core.models.post import ImageUpload, Post, PostView
from core.models.result import Err, Ok, Result
from core.repositories.post_repository import PostRepository
from core.repositories.storage_repository import ImageStorageRepository
from core.utils.constants import (
    DEFAULT_SIGNING_WORKERS,
    ERROR_CODE_POST_NOT_FOUND,
    SIGNED_URL_TTL_SECONDS,
)
from core.utils.keys import build_image_key
from core.utils.mime import guess_content_type

logger = Logger(UTC=True)


def _storage_failure(
    exc: Exception,
    error_cls: type[StorageError],
    message: str,
    details: dict[str, Any],
) -> StorageError:
    """Return ``exc`` if it is already a storage error, else wrap it."""
    if isinstance(exc, StorageError):
        return exc
    wrapped = error_cls(message=message, details=details)
    wrapped.__cause__ = exc
    return wrapped


def _repository_failure(
    exc: Exception,
    message: str,
    details: dict[str, Any],
) -> RepositoryError:
    """Return ``exc`` if it is already a repository error, else wrap it."""
    if isinstance(exc, RepositoryError):
        return exc
    wrapped = RepositoryError(message=message, details=details)
    wrapped.__cause__ = exc
    return wrapped


class PostLifecycleManager:
    """Application service coordinating posts with their stored images.

    This service orchestrates:
    - Composing a post (store image, then create record)
    - Listing posts with per-item tolerant URL signing
    - Reading a single post with mandatory URL signing
    - Deleting a post (remove image, then remove record)
    """

    def __init__(
        self,
        *,
        storage: ImageStorageRepository,
        repository: PostRepository,
        url_ttl_seconds: int = SIGNED_URL_TTL_SECONDS,
        signing_workers: int = DEFAULT_SIGNING_WORKERS,
    ) -> None:
        if signing_workers < 1:
            raise ValueError("signing_workers must be at least 1")

        self.storage = storage
        self.repository = repository
        self.url_ttl_seconds = url_ttl_seconds
        self.signing_workers = signing_workers

    def compose_post(
        self,
        *,
        title: str | None,
        content: str | None,
        image: ImageUpload | None,
    ) -> Result[Post]:
        """Store an image and create the post that references it.

        The compose flow is:
        1. Reject requests without an image payload
        2. Upload the image under a freshly generated key
        3. Create the post record pointing at that key

        If the upload fails no record is created. If record creation fails the
        uploaded object is left behind and reported as an orphan.
        """
        if image is None or not image.data:
            logger.info("Compose rejected: no image payload")
            return Err.from_error(MissingImageError())

        image_key = build_image_key(image.filename, field_name=image.field_name)
        content_type = guess_content_type(image.filename or image_key, image.content_type)

        try:
            self.storage.upload_image(
                key=image_key,
                file_data=image.data,
                content_type=content_type,
            )
        except Exception as exc:
            logger.exception("Compose aborted: image upload failed", extra={"image_key": image_key})
            return Err.from_error(
                _storage_failure(
                    exc,
                    ImageUploadFailedError,
                    "Unable to upload image",
                    {"key": image_key},
                )
            )

        try:
            post = self.repository.create_post(
                title=title,
                content=content,
                image_key=image_key,
            )
        except Exception as exc:
            logger.exception(
                "Compose failed after upload; stored image has no post",
                extra={"image_key": image_key, "orphan": "object"},
            )
            return Err.from_error(
                _repository_failure(exc, "Unable to save post", {"image_key": image_key})
            )

        logger.info(
            "Post composed",
            extra={"post_id": post.post_id, "image_key": image_key, "size": image.size},
        )
        return Ok(post)

    def list_posts(self) -> Result[list[PostView]]:
        """List every post with a signed image URL each.

        A signing failure for one post yields ``image_url=None`` for that post
        only. Output order matches repository order.
        """
        try:
            posts = self.repository.list_posts()
        except Exception as exc:
            logger.exception("Failed to list posts")
            return Err.from_error(_repository_failure(exc, "Unable to list posts", {}))

        if not posts:
            return Ok([])

        workers = min(self.signing_workers, len(posts))
        with ThreadPoolExecutor(max_workers=workers, thread_name_prefix="sign-url") as pool:
            views = list(pool.map(self._view_with_optional_url, posts))

        unsigned = sum(1 for view in views if view.image_url is None)
        logger.info("Posts listed", extra={"count": len(views), "unsigned": unsigned})
        return Ok(views)

    def get_post(self, post_id: str) -> Result[PostView]:
        """Return one post with a signed image URL.

        Unlike listing, a signing failure fails the whole request.
        """
        found = self._find_existing(post_id)
        if isinstance(found, Err):
            return found
        post = found.value

        try:
            image_url = self._sign(post)
        except StorageError as exc:
            logger.exception(
                "Failed to sign image URL",
                extra={"post_id": post_id, "image_key": post.image_key},
            )
            return Err.from_error(exc)

        return Ok(PostView.from_post(post, image_url=image_url))

    def delete_post(self, post_id: str) -> Result[Post]:
        """Delete a post's image, then its record.

        The delete flow is:
        1. Look up the post to obtain its image key
        2. Remove the image; on failure keep the record and stop
        3. Remove the record

        A record removal failure after step 2 leaves a record pointing at a
        missing image; it is reported, not repaired.
        """
        found = self._find_existing(post_id)
        if isinstance(found, Err):
            return found
        post = found.value

        try:
            self.storage.remove_image(key=post.image_key)
        except Exception as exc:
            logger.exception(
                "Delete aborted: image removal failed, post kept",
                extra={"post_id": post_id, "image_key": post.image_key},
            )
            return Err.from_error(
                _storage_failure(
                    exc,
                    ImageDeletionFailedError,
                    "Unable to delete image",
                    {"key": post.image_key},
                )
            )

        try:
            removed = self.repository.delete_post(post_id=post_id)
        except Exception as exc:
            logger.exception(
                "Image removed but post deletion failed",
                extra={"post_id": post_id, "image_key": post.image_key, "orphan": "record"},
            )
            return Err.from_error(
                _repository_failure(exc, "Unable to delete post", {"post_id": post_id})
            )

        if not removed:
            logger.info("Post disappeared during delete", extra={"post_id": post_id})
            return Err.from_error(self._not_found(post_id))

        logger.info("Post deleted", extra={"post_id": post_id, "image_key": post.image_key})
        return Ok(post)

    def _find_existing(self, post_id: str) -> Result[Post]:
        try:
            post = self.repository.find_post(post_id=post_id)
        except Exception as exc:
            logger.exception("Failed to look up post", extra={"post_id": post_id})
            return Err.from_error(
                _repository_failure(exc, "Unable to retrieve post", {"post_id": post_id})
            )

        if post is None:
            logger.info("Post not found", extra={"post_id": post_id})
            return Err.from_error(self._not_found(post_id))

        return Ok(post)

    def _sign(self, post: Post) -> str:
        try:
            return self.storage.generate_presigned_get_url(
                key=post.image_key,
                expires_in=self.url_ttl_seconds,
            )
        except Exception as exc:
            raise _storage_failure(
                exc,
                PresignedUrlFailedError,
                "Unable to generate image access URL",
                {"key": post.image_key},
            )

    def _view_with_optional_url(self, post: Post) -> PostView:
        try:
            image_url: str | None = self._sign(post)
        except Exception:
            logger.warning(
                "Signing failed; returning post without image URL",
                extra={"post_id": post.post_id, "image_key": post.image_key},
                exc_info=True,
            )
            image_url = None

        return PostView.from_post(post, image_url=image_url)

    @staticmethod
    def _not_found(post_id: str) -> NotFoundError:
        return NotFoundError(
            message="Post not found",
            error_code=ERROR_CODE_POST_NOT_FOUND,
            details={"post_id": post_id},
        )
