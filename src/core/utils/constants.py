"""Global constants used throughout the application.

This module centralizes all magic numbers, string literals, and configuration
values that are used across multiple modules. Using constants prevents hardcoding
values and makes it easy to change them globally.
"""

from typing import Final

# ============================================================================
# Error Codes
# ============================================================================


# Validation Errors
ERROR_CODE_VALIDATION_FAILED = "VALIDATION_FAILED"
ERROR_CODE_MISSING_IMAGE = "MISSING_IMAGE"
ERROR_CODE_INVALID_FORM = "INVALID_FORM"

# Not Found Errors
ERROR_CODE_RESOURCE_NOT_FOUND = "NOT_FOUND"
ERROR_CODE_POST_NOT_FOUND = "POST_NOT_FOUND"

# Object Storage Errors
ERROR_CODE_STORAGE = "STORAGE_ERROR"
ERROR_CODE_IMAGE_UPLOAD_FAILED = "IMAGE_UPLOAD_FAILED"
ERROR_CODE_IMAGE_DELETE_FAILED = "IMAGE_DELETE_FAILED"
ERROR_CODE_IMAGE_PRESIGNED_URL_FAILED = "PRESIGNED_URL_FAILED"
ERROR_CODE_IMAGE_LIST_FAILED = "IMAGE_LIST_FAILED"

# Repository / DynamoDB Errors
ERROR_CODE_REPOSITORY = "REPOSITORY_ERROR"
ERROR_CODE_POST_CREATE_FAILED = "POST_CREATE_FAILED"
ERROR_CODE_POST_FETCH_FAILED = "POST_FETCH_FAILED"
ERROR_CODE_POST_DELETE_FAILED = "POST_DELETE_FAILED"
ERROR_CODE_POST_LIST_FAILED = "POST_LIST_FAILED"
ERROR_CODE_POST_INVALID_FORMAT = "POST_INVALID_FORMAT"

# Internal / Unexpected
ERROR_CODE_INTERNAL_ERROR = "INTERNAL_ERROR"


# ============================================================================
# Image Storage
# ============================================================================

# Keys look like ``Images/file_1700000000000.jpg``
IMAGE_KEY_PREFIX: Final[str] = "Images/"
IMAGE_FORM_FIELD: Final[str] = "file"

SIGNED_URL_TTL_SECONDS: Final[int] = 3600
DEFAULT_SIGNING_WORKERS: Final[int] = 8

DEFAULT_IMAGE_CONTENT_TYPE: Final[str] = "application/octet-stream"

MIME_TYPE_EXTENSION_MAP: Final[dict[str, tuple[str, ...]]] = {
    "image/jpeg": ("jpg", "jpeg"),
    "image/png": ("png",),
    "image/gif": ("gif",),
    "image/webp": ("webp",),
    "image/svg+xml": ("svg",),
    "image/bmp": ("bmp",),
    "image/avif": ("avif",),
}

EXTENSION_MIME_TYPE_MAP: Final[dict[str, str]] = {
    ext: mime for mime, extensions in MIME_TYPE_EXTENSION_MAP.items() for ext in extensions
}


# ============================================================================
# Compose Form Fields
# ============================================================================

FORM_FIELD_TITLE: Final[str] = "postTitle"
FORM_FIELD_CONTENT: Final[str] = "postContent"

# ============================================================================
# API Gateway Configuration
# ============================================================================

CORS_ORIGIN = "*"
CORS_METHODS = "GET,POST,DELETE,OPTIONS"
CORS_HEADERS = "Content-Type"
EXPOSE_HEADERS = "Content-Type,Content-Length"
DEFAULT_CONTENT_TYPE = "application/json"
TEXT_CONTENT_TYPE = "text/plain; charset=utf-8"

DELETE_CONFIRMATION_MESSAGE = "Post and image deleted"

# ============================================================================
# Environment Variable Names
# ============================================================================

ENV_AWS_ENDPOINT_URL = "AWS_ENDPOINT_URL"
ENV_AWS_REGION = "AWS_REGION"
ENV_POST_IMAGES_BUCKET_NAME = "POST_IMAGES_BUCKET_NAME"
ENV_POSTS_TABLE_NAME = "POSTS_TABLE_NAME"
ENV_APP_RUNTIME = "APP_RUNTIME"
LOCALSTACK_URL = "http://localstack"
LOCALHOST_URL = "http://localhost"

# Port the local API is served on; seed scripts target it by default
DEFAULT_LOCAL_PORT = 3001
DEFAULT_LOCAL_BASE_URL = f"{LOCALHOST_URL}:{DEFAULT_LOCAL_PORT}"
