import base64
import uuid
from collections.abc import Callable
from types import SimpleNamespace
from typing import Any

import pytest


@pytest.fixture
def lambda_context():
    return SimpleNamespace(
        aws_request_id="test-request-id",
        function_name="test-function",
        memory_limit_in_mb=256,
        invoked_function_arn="arn:aws:lambda:us-east-1:000000000000:function:test",
        log_group_name="/aws/lambda/test-function",
        log_stream_name="2024/01/01/[$LATEST]test",
    )


def build_multipart(
    fields: dict[str, str],
    files: dict[str, tuple[str, bytes, str]] | None = None,
) -> tuple[str, bytes]:
    """Encode a multipart/form-data body; returns (content type, body)."""
    boundary = f"----test{uuid.uuid4().hex}"
    chunks: list[bytes] = []

    for name, value in fields.items():
        chunks.append(
            f'--{boundary}\r\nContent-Disposition: form-data; name="{name}"\r\n\r\n'.encode()
            + value.encode("utf-8")
            + b"\r\n"
        )

    for name, (filename, data, content_type) in (files or {}).items():
        chunks.append(
            (
                f"--{boundary}\r\n"
                f'Content-Disposition: form-data; name="{name}"; filename="{filename}"\r\n'
                f"Content-Type: {content_type}\r\n\r\n"
            ).encode()
            + data
            + b"\r\n"
        )

    chunks.append(f"--{boundary}--\r\n".encode())
    return f"multipart/form-data; boundary={boundary}", b"".join(chunks)


@pytest.fixture
def compose_event() -> Callable[..., dict[str, Any]]:
    """
    Build an API Gateway event for POST /compose.

    Usage:
        event = compose_event({"postTitle": "Hello"}, {"file": ("a.png", data, "image/png")})
    """

    def _build(
        fields: dict[str, str] | None = None,
        files: dict[str, tuple[str, bytes, str]] | None = None,
    ) -> dict[str, Any]:
        content_type, body = build_multipart(fields or {}, files)
        return {
            "httpMethod": "POST",
            "path": "/compose",
            "headers": {"content-type": content_type},
            "body": base64.b64encode(body).decode("ascii"),
            "isBase64Encoded": True,
        }

    return _build


@pytest.fixture
def post_event() -> Callable[[str, str], dict[str, Any]]:
    def _build(method: str, post_id: str) -> dict[str, Any]:
        return {
            "httpMethod": method,
            "path": f"/posts/{post_id}",
            "pathParameters": {"postID": post_id},
        }

    return _build


@pytest.fixture
def list_event() -> dict[str, Any]:
    return {"httpMethod": "GET", "path": "/"}
