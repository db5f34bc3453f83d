"""Explicit workflow outcomes.

Every lifecycle workflow returns either ``Ok(value)`` or ``Err(kind, error)``
so callers branch on the outcome instead of catching exceptions.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Generic, TypeVar, Union

from core.models.errors import (
    MissingImageError,
    NotFoundError,
    PostServiceError,
    RepositoryError,
    StorageError,
)

T = TypeVar("T")


class ErrorKind(str, Enum):
    """Failure taxonomy shared by all workflows."""

    NOT_FOUND = "NotFound"
    UPSTREAM_STORE_FAILURE = "UpstreamStoreFailure"
    UPSTREAM_REPOSITORY_FAILURE = "UpstreamRepositoryFailure"
    MISSING_IMAGE = "MissingImage"

    @classmethod
    def of(cls, error: PostServiceError) -> "ErrorKind":
        """Classify a domain error."""
        if isinstance(error, NotFoundError):
            return cls.NOT_FOUND
        if isinstance(error, MissingImageError):
            return cls.MISSING_IMAGE
        if isinstance(error, StorageError):
            return cls.UPSTREAM_STORE_FAILURE
        if isinstance(error, RepositoryError):
            return cls.UPSTREAM_REPOSITORY_FAILURE
        raise ValueError(f"Unclassified error type: {type(error).__name__}")


@dataclass(frozen=True)
class Ok(Generic[T]):
    """Successful workflow outcome."""

    value: T

    @property
    def is_ok(self) -> bool:
        return True


@dataclass(frozen=True)
class Err:
    """Failed workflow outcome carrying the domain error that caused it."""

    kind: ErrorKind
    error: PostServiceError

    @property
    def is_ok(self) -> bool:
        return False

    @classmethod
    def from_error(cls, error: PostServiceError) -> "Err":
        return cls(kind=ErrorKind.of(error), error=error)


Result = Union[Ok[T], Err]
