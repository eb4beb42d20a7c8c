"""Result envelopes returned to page-rendering code.

Both envelopes are always well-formed: a failed or skipped fetch produces
an empty collection or a null document, never an exception.
"""

from enum import Enum
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field

from resilient_cms.data_model import ContentModel


T = TypeVar("T", bound=BaseModel)


class Pagination(ContentModel):
    page: int
    page_size: int
    page_count: int
    total: int


class CollectionMeta(ContentModel):
    pagination: Pagination | None = None


class CollectionEnvelope(ContentModel, Generic[T]):
    """Raw ``{"data": [...], "meta": {...}}`` collection payload."""

    data: list[T]
    meta: CollectionMeta = Field(default_factory=CollectionMeta)


class SingletonEnvelope(ContentModel, Generic[T]):
    """Raw ``{"data": {...} | null, "meta": {...}}`` single-type payload."""

    data: T | None
    meta: dict[str, Any] = Field(default_factory=dict)


class CollectionResult(BaseModel, Generic[T]):
    """A page of entities from a collection endpoint.

    Attributes:
        items: Entities in backend order; empty on fallback.
        pagination: Paging information, absent on fallback.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    items: list[T] = Field(default_factory=list)
    pagination: Pagination | None = None

    @classmethod
    def empty(cls) -> "CollectionResult[T]":
        """Create the fallback result."""
        return cls(items=[], pagination=None)

    @classmethod
    def from_envelope(cls, envelope: CollectionEnvelope[T]) -> "CollectionResult[T]":
        """Convert a validated payload into a result.

        Args:
            envelope: Validated collection payload.

        Returns:
            Collection result with the payload's items and pagination.
        """
        return cls(items=list(envelope.data), pagination=envelope.meta.pagination)


class SingletonStatus(str, Enum):
    """Why a singleton result does or does not carry a value.

    - FOUND: the backend returned a document
    - EMPTY: the backend answered but has no document
    - FAILED: the fetch failed and fallback content is in use
    - UNCONFIGURED: no backend URL, nothing was fetched
    """

    FOUND = "found"
    EMPTY = "empty"
    FAILED = "failed"
    UNCONFIGURED = "unconfigured"


class SingletonResult(BaseModel, Generic[T]):
    """A single document from a single-type endpoint.

    ``value`` is None both for an empty backend and for a failed fetch;
    ``status`` tells the two apart for callers that need to.
    """

    model_config = ConfigDict(frozen=True, extra="forbid")

    value: T | None = None
    metadata: dict[str, Any] = Field(default_factory=dict)
    status: SingletonStatus = SingletonStatus.EMPTY

    @classmethod
    def unavailable(cls, status: SingletonStatus) -> "SingletonResult[T]":
        """Create a fallback result with no value.

        Args:
            status: FAILED or UNCONFIGURED.

        Returns:
            Result with a null value and empty metadata.
        """
        return cls(value=None, metadata={}, status=status)

    @classmethod
    def from_envelope(cls, envelope: SingletonEnvelope[T]) -> "SingletonResult[T]":
        """Convert a validated payload into a result.

        Args:
            envelope: Validated single-type payload.

        Returns:
            Result with FOUND or EMPTY status.
        """
        status = (
            SingletonStatus.FOUND
            if envelope.data is not None
            else SingletonStatus.EMPTY
        )
        return cls(value=envelope.data, metadata=dict(envelope.meta), status=status)

    @property
    def found(self) -> bool:
        """Whether a document is present."""
        return self.value is not None
