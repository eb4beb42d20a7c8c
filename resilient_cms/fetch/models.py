"""Data models for the fetch layer."""

from dataclasses import dataclass
from enum import Enum
from typing import Annotated, Generic, TypeVar

from pydantic import Field

from resilient_cms.data_model import StrictBaseModel


T = TypeVar("T")


class FetchErrorKind(str, Enum):
    """Classification of failures, used for diagnostics only.

    Every kind leads to the same fallback result; the kind decides what is
    logged and counted.
    """

    UNCONFIGURED = "unconfigured"
    NOT_FOUND = "not_found"
    UNAUTHENTICATED = "unauthenticated"
    FORBIDDEN = "forbidden"
    SERVER_ERROR = "server_error"
    HTTP_ERROR = "http_error"
    NETWORK_TIMEOUT = "network_timeout"
    CONNECTION_ERROR = "connection_error"
    PARSE_ERROR = "parse_error"
    FILESYSTEM_ERROR = "filesystem_error"
    UNKNOWN = "unknown"


class FetchError(StrictBaseModel):
    """Typed error from a fetch operation."""

    kind: FetchErrorKind = Field(description="Classification of the error")
    message: Annotated[str, Field(min_length=1, description="Human-readable message")]
    status_code: int | None = Field(
        default=None, description="HTTP status code if available"
    )
    detail: str | None = Field(
        default=None, description="Exception detail or traceback for debug logs"
    )


@dataclass(frozen=True)
class ContentOutcome(Generic[T]):
    """Either a fetched value or the error that prevented it.

    Exactly one of ``value`` and ``error`` is meaningful: a successful
    outcome may still carry a None value (an empty single type).
    """

    value: T | None = None
    error: FetchError | None = None

    @classmethod
    def ok(cls, value: T) -> "ContentOutcome[T]":
        return cls(value=value)

    @classmethod
    def fail(cls, error: FetchError) -> "ContentOutcome[T]":
        return cls(error=error)

    @property
    def is_success(self) -> bool:
        """Check if the fetch succeeded."""
        return self.error is None
