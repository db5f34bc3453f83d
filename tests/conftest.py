"""
Pytest configuration and fixtures for post service tests.
Provides AWS mocking, DynamoDB and S3 fixtures with proper cleanup,
plus in-memory doubles for failure injection.
"""

import os
from collections.abc import Callable
from typing import Any

import boto3
import pytest
from botocore.exceptions import ClientError
from moto import mock_aws

os.environ.setdefault("AWS_REGION", "us-east-1")
os.environ.setdefault("AWS_DEFAULT_REGION", "us-east-1")
os.environ.setdefault("AWS_ACCESS_KEY_ID", "testing")
os.environ.setdefault("AWS_SECRET_ACCESS_KEY", "testing")
os.environ.setdefault("POST_IMAGES_BUCKET_NAME", "post-images-test")
os.environ.setdefault("POSTS_TABLE_NAME", "posts-test")
os.environ.setdefault("POWERTOOLS_TRACE_DISABLED", "true")
os.environ.setdefault("POWERTOOLS_METRICS_NAMESPACE", "PostService")

from core.models.post import Post  # noqa: E402
from core.repositories.post_repository import PostRepository  # noqa: E402
from core.repositories.storage_repository import ImageStorageRepository  # noqa: E402


@pytest.fixture(autouse=True)
def _no_endpoint_override(monkeypatch):
    # moto intercepts default AWS endpoints only
    monkeypatch.delenv("AWS_ENDPOINT_URL", raising=False)
    monkeypatch.delenv("APP_RUNTIME", raising=False)


@pytest.fixture(scope="function")
def aws_mock():
    with mock_aws():
        yield


@pytest.fixture(scope="function")
def dynamodb_resource(aws_mock):
    return boto3.resource("dynamodb", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def dynamodb_table(dynamodb_resource):
    """Create the posts table (``post_id`` hash key) inside the moto context."""
    table = dynamodb_resource.create_table(
        TableName=os.getenv("POSTS_TABLE_NAME"),
        BillingMode="PAY_PER_REQUEST",
        KeySchema=[{"AttributeName": "post_id", "KeyType": "HASH"}],
        AttributeDefinitions=[{"AttributeName": "post_id", "AttributeType": "S"}],
    )
    table.wait_until_exists()
    return table


@pytest.fixture
def dynamodb_put_item(dynamodb_table) -> Callable[[dict[str, Any]], dict[str, Any]]:
    """
    Helper to insert a single item into DynamoDB.

    Usage:
        item = dynamodb_put_item({"post_id": "post_1", ...})
    """

    def _put(item: dict[str, Any]) -> dict[str, Any]:
        dynamodb_table.put_item(Item=item)
        return item

    return _put


@pytest.fixture
def dynamodb_get_item(dynamodb_table) -> Callable[[str], dict[str, Any] | None]:
    def _get(post_id: str) -> dict[str, Any] | None:
        response: dict[str, Any] = dynamodb_table.get_item(Key={"post_id": post_id})
        item: dict[str, Any] | None = response.get("Item")
        return item

    return _get


@pytest.fixture(scope="function")
def s3_client(aws_mock):
    """S3 client for bucket operations."""
    return boto3.client("s3", region_name=os.getenv("AWS_REGION"))


@pytest.fixture(scope="function")
def s3_bucket(s3_client):
    """Create the image bucket inside the moto context."""
    s3_client.create_bucket(Bucket=os.getenv("POST_IMAGES_BUCKET_NAME"))
    return s3_client


@pytest.fixture
def s3_put_object(s3_bucket) -> Callable[..., dict[str, Any]]:
    """
    Helper to upload an object to S3.

    Usage:
        s3_put_object("Images/file_1.png", image_bytes, "image/png")
    """

    def _put(key: str, body: bytes, content_type: str = "application/octet-stream"):
        return s3_bucket.put_object(
            Bucket=os.getenv("POST_IMAGES_BUCKET_NAME"),
            Key=key,
            Body=body,
            ContentType=content_type,
        )

    return _put


@pytest.fixture
def s3_get_object(s3_bucket) -> Callable[[str], bytes]:
    """
    Helper to get an object from S3.

    Usage:
        content = s3_get_object("Images/file_1.png")
    """

    def _get(key: str) -> bytes:
        response: dict[str, Any] = s3_bucket.get_object(
            Bucket=os.getenv("POST_IMAGES_BUCKET_NAME"),
            Key=key,
        )
        data: bytes = response["Body"].read()
        return data

    return _get


@pytest.fixture
def object_exists(s3_bucket) -> Callable[[str], bool]:
    def _exists(key: str) -> bool:
        try:
            s3_bucket.head_object(Bucket=os.getenv("POST_IMAGES_BUCKET_NAME"), Key=key)
            return True
        except ClientError:
            return False

    return _exists


@pytest.fixture
def aws_backend(dynamodb_table, s3_bucket):
    """Bucket and table, both empty."""
    return {"table": dynamodb_table, "s3": s3_bucket}


@pytest.fixture
def sample_image_binary() -> bytes:
    """Sample binary image data (1x1 PNG)."""
    import base64

    png_base64 = "iVBORw0KGgoAAAANSUhEUgAAAAEAAAABCAYAAAAfFcSJAAAADUlEQVR42mNk+M9QDwADhgGAWjR9awAAAABJRU5ErkJggg=="
    return base64.b64decode(png_base64)


@pytest.fixture
def sample_post_item() -> dict[str, Any]:
    return {
        "post_id": "post_1",
        "title": "Hello",
        "content": "World",
        "image_key": "Images/file_1700000000000.png",
        "created_at": "2024-01-01T10:00:00Z",
    }


class InMemoryImageStorage(ImageStorageRepository):
    """Dict-backed storage with per-key failure injection."""

    def __init__(self) -> None:
        self.objects: dict[str, bytes] = {}
        self.content_types: dict[str, str] = {}
        self.fail_upload = False
        self.fail_list = False
        self.fail_sign_keys: set[str] = set()
        self.fail_remove_keys: set[str] = set()
        self.removed: list[str] = []

    def upload_image(self, *, key: str, file_data: bytes, content_type: str) -> None:
        if self.fail_upload:
            raise RuntimeError("upload exploded")
        self.objects[key] = file_data
        self.content_types[key] = content_type

    def generate_presigned_get_url(self, *, key: str, expires_in: int = 3600) -> str:
        if key in self.fail_sign_keys:
            raise RuntimeError("signing exploded")
        return f"https://signed.example/{key}?expires={expires_in}"

    def remove_image(self, *, key: str) -> None:
        if key in self.fail_remove_keys:
            raise RuntimeError("remove exploded")
        # absent keys are not an error
        self.objects.pop(key, None)
        self.removed.append(key)

    def list_image_keys(self, *, prefix: str) -> list[str]:
        if self.fail_list:
            raise RuntimeError("list exploded")
        return sorted(key for key in self.objects if key.startswith(prefix))

    def image_exists(self, *, key: str) -> bool:
        return key in self.objects


class InMemoryPostRepository(PostRepository):
    """Dict-backed post repository with failure injection."""

    def __init__(self) -> None:
        self.posts: dict[str, Post] = {}
        self.fail_create = False
        self.fail_list = False
        self.fail_find = False
        self.fail_delete = False
        self.vanish_on_delete = False
        self._counter = 0

    def create_post(self, *, title: str | None, content: str | None, image_key: str) -> Post:
        if self.fail_create:
            raise RuntimeError("create exploded")
        self._counter += 1
        post = Post(
            post_id=f"post_{self._counter}",
            title=title,
            content=content,
            image_key=image_key,
            created_at=f"2024-01-01T10:00:{self._counter:02d}Z",
        )
        self.posts[post.post_id] = post
        return post

    def list_posts(self) -> list[Post]:
        if self.fail_list:
            raise RuntimeError("scan exploded")
        return sorted(self.posts.values(), key=lambda post: (post.created_at, post.post_id))

    def find_post(self, *, post_id: str) -> Post | None:
        if self.fail_find:
            raise RuntimeError("lookup exploded")
        return self.posts.get(post_id)

    def delete_post(self, *, post_id: str) -> bool:
        if self.fail_delete:
            raise RuntimeError("delete exploded")
        if self.vanish_on_delete:
            self.posts.pop(post_id, None)
            return False
        return self.posts.pop(post_id, None) is not None

    def add(self, post: Post) -> Post:
        self.posts[post.post_id] = post
        return post


@pytest.fixture
def memory_storage() -> InMemoryImageStorage:
    return InMemoryImageStorage()


@pytest.fixture
def memory_repository() -> InMemoryPostRepository:
    return InMemoryPostRepository()
