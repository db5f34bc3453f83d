"""DynamoDB-backed implementation of PostRepository."""

import uuid
from typing import Any

from aws_lambda_powertools import Logger
from botocore.exceptions import ClientError
from pydantic import ValidationError as PydanticValidationError

from core.infrastructure.adapters.dynamodb_adapter import DynamoDBAdapter, DynamoDBAdapterProtocol
from core.models.errors import RepositoryError
from core.models.post import Post
from core.repositories.post_repository import PostRepository
from core.utils.constants import (
    ERROR_CODE_POST_CREATE_FAILED,
    ERROR_CODE_POST_DELETE_FAILED,
    ERROR_CODE_POST_FETCH_FAILED,
    ERROR_CODE_POST_INVALID_FORMAT,
    ERROR_CODE_POST_LIST_FAILED,
)
from core.utils.time import utc_now_iso

Item = dict[str, Any]

logger = Logger(UTC=True)

CONDITIONAL_CHECK_FAILED = "ConditionalCheckFailedException"


def _is_conditional_failure(exc: ClientError) -> bool:
    return exc.response.get("Error", {}).get("Code") == CONDITIONAL_CHECK_FAILED


class DynamoDBPostRepository(PostRepository):
    """DynamoDB-backed post storage with error handling.

    All boto3 errors are caught and translated into
    domain-specific errors with stable semantics.
    """

    def __init__(self, adapter: DynamoDBAdapterProtocol | None = None) -> None:
        """Initialize with DynamoDB adapter."""
        self._db: DynamoDBAdapterProtocol = adapter or DynamoDBAdapter()

    @staticmethod
    def generate_post_id() -> str:
        """Generate a unique post identifier."""
        return f"post_{uuid.uuid4().hex}"

    def create_post(
        self,
        *,
        title: str | None,
        content: str | None,
        image_key: str,
    ) -> Post:
        """Create a post record.

        Raises:
            ValueError: If image_key is empty
            RepositoryError: If creation fails
        """
        if not image_key or not image_key.strip():
            raise ValueError("post must reference a non-empty image_key")

        post = Post(
            post_id=self.generate_post_id(),
            title=title,
            content=content,
            image_key=image_key,
            created_at=utc_now_iso(),
        )

        logger.debug("Creating post", extra={"post_id": post.post_id, "image_key": image_key})

        try:
            self._db.put_item(
                item=post.model_dump(),
                condition_expression="attribute_not_exists(post_id)",
            )

        except ClientError as exc:
            logger.error("DynamoDB put_item failed", extra={"post_id": post.post_id})
            raise RepositoryError(
                message="Unable to save post at this time",
                error_code=ERROR_CODE_POST_CREATE_FAILED,
                details={"post_id": post.post_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error creating post")
            raise RepositoryError(
                message="Unable to save post at this time",
                error_code=ERROR_CODE_POST_CREATE_FAILED,
                details={"post_id": post.post_id},
            ) from exc

        logger.info("Post created", extra={"post_id": post.post_id})
        return post

    def list_posts(self) -> list[Post]:
        """Return every post ordered by creation time, oldest first.

        NOTE:
        - A scan has no defined order, so results are sorted here.
        - Scans are paginated internally until LastEvaluatedKey is exhausted.
        """
        items: list[Item] = []
        scan_kwargs: dict[str, Any] = {}

        try:
            while True:
                response = self._db.scan(**scan_kwargs)
                page_items = response.get("Items", [])

                if not isinstance(page_items, list):
                    raise RepositoryError(
                        message="Invalid scan response from DynamoDB",
                        error_code=ERROR_CODE_POST_LIST_FAILED,
                    )

                items.extend(page_items)

                last_evaluated_key = response.get("LastEvaluatedKey")
                if not last_evaluated_key:
                    break
                scan_kwargs["ExclusiveStartKey"] = last_evaluated_key

        except RepositoryError:
            raise

        except ClientError as exc:
            logger.error("DynamoDB scan failed")
            raise RepositoryError(
                message="Unable to list posts",
                error_code=ERROR_CODE_POST_LIST_FAILED,
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error listing posts")
            raise RepositoryError(
                message="Unable to list posts",
                error_code=ERROR_CODE_POST_LIST_FAILED,
            ) from exc

        posts = [self._to_post(item) for item in items]
        posts.sort(key=lambda post: (post.created_at, post.post_id))

        logger.info("Posts listed", extra={"count": len(posts)})
        return posts

    def find_post(self, *, post_id: str) -> Post | None:
        """Fetch a single post.

        Raises:
            RepositoryError: If fetch fails
        """
        logger.debug("Fetching post", extra={"post_id": post_id})

        try:
            response = self._db.get_item(key={"post_id": post_id})

        except ClientError as exc:
            logger.error("DynamoDB get_item failed", extra={"post_id": post_id})
            raise RepositoryError(
                message="Unable to retrieve post",
                error_code=ERROR_CODE_POST_FETCH_FAILED,
                details={"post_id": post_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error fetching post")
            raise RepositoryError(
                message="Unable to retrieve post",
                error_code=ERROR_CODE_POST_FETCH_FAILED,
                details={"post_id": post_id},
            ) from exc

        item = response.get("Item")
        if item is None:
            return None

        return self._to_post(item)

    def delete_post(self, *, post_id: str) -> bool:
        """Remove a post record.

        Returns:
            False when no record with this id existed

        Raises:
            RepositoryError: If deletion fails
        """
        logger.debug("Removing post", extra={"post_id": post_id})

        try:
            self._db.delete_item(
                key={"post_id": post_id},
                condition_expression="attribute_exists(post_id)",
            )

        except ClientError as exc:
            if _is_conditional_failure(exc):
                logger.info("Post already absent", extra={"post_id": post_id})
                return False

            logger.error("DynamoDB delete_item failed", extra={"post_id": post_id})
            raise RepositoryError(
                message="Unable to delete post",
                error_code=ERROR_CODE_POST_DELETE_FAILED,
                details={"post_id": post_id},
            ) from exc

        except Exception as exc:
            logger.exception("Unexpected error removing post")
            raise RepositoryError(
                message="Unable to delete post",
                error_code=ERROR_CODE_POST_DELETE_FAILED,
                details={"post_id": post_id},
            ) from exc

        logger.info("Post removed", extra={"post_id": post_id})
        return True

    @staticmethod
    def _to_post(item: Any) -> Post:
        """Convert a raw DynamoDB item into a Post."""
        if not isinstance(item, dict):
            raise RepositoryError(
                message="Invalid post record format",
                error_code=ERROR_CODE_POST_INVALID_FORMAT,
            )

        try:
            return Post(**item)
        except PydanticValidationError as exc:
            logger.error("Malformed post record", extra={"post_id": item.get("post_id")})
            raise RepositoryError(
                message="Invalid post record format",
                error_code=ERROR_CODE_POST_INVALID_FORMAT,
                details={"post_id": item.get("post_id")},
            ) from exc
