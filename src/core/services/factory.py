"""Wiring of the lifecycle manager to its AWS-backed dependencies."""

from core.infrastructure.aws.dynamodb_posts import DynamoDBPostRepository
from core.infrastructure.aws.s3_image_storage import S3ImageStorage
from core.services.post_lifecycle import PostLifecycleManager


def create_post_lifecycle_manager() -> PostLifecycleManager:
    """Build a manager backed by S3 and DynamoDB.

    Called once per invocation so each request gets fresh clients.

    Raises:
        RuntimeError: If the bucket or table name is not configured
    """
    return PostLifecycleManager(
        storage=S3ImageStorage(),
        repository=DynamoDBPostRepository(),
    )
