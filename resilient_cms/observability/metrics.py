"""In-process counters for CMS fetches and image caching."""

from dataclasses import dataclass, field
from typing import ClassVar


@dataclass
class CmsMetrics:
    """Metrics for CMS operations.

    Singleton class that tracks request counts, fallbacks by error kind,
    and image cache activity for a single build or server process.
    """

    requests_total: dict[int, int] = field(default_factory=dict)
    fallbacks_total: dict[str, int] = field(default_factory=dict)
    images_cached_total: int = 0
    images_reused_total: int = 0
    image_fallbacks_total: int = 0
    bytes_written_total: int = 0

    _instance: ClassVar["CmsMetrics | None"] = None

    @classmethod
    def get_instance(cls) -> "CmsMetrics":
        """Get singleton metrics instance."""
        if cls._instance is None:
            cls._instance = cls()
        return cls._instance

    @classmethod
    def reset(cls) -> None:
        """Reset metrics (primarily for testing)."""
        cls._instance = None

    def record_request(self, status_code: int) -> None:
        """Record a completed HTTP request.

        Args:
            status_code: HTTP status code.
        """
        self.requests_total[status_code] = self.requests_total.get(status_code, 0) + 1

    def record_fallback(self, error_kind: str) -> None:
        """Record that a caller received fallback content.

        Args:
            error_kind: Value of the error kind that caused the fallback.
        """
        self.fallbacks_total[error_kind] = self.fallbacks_total.get(error_kind, 0) + 1

    def record_image_cached(self, bytes_written: int) -> None:
        """Record an image written to local storage."""
        self.images_cached_total += 1
        self.bytes_written_total += bytes_written

    def record_image_reused(self) -> None:
        """Record an image served from an earlier download."""
        self.images_reused_total += 1

    def record_image_fallback(self) -> None:
        """Record an image that fell back to its remote URL."""
        self.image_fallbacks_total += 1

    def to_dict(self) -> dict[str, int | dict[str, int] | dict[int, int]]:
        """Convert metrics to dictionary.

        Returns:
            Dictionary of metric name to value.
        """
        return {
            "requests_total": dict(self.requests_total),
            "fallbacks_total": dict(self.fallbacks_total),
            "images_cached_total": self.images_cached_total,
            "images_reused_total": self.images_reused_total,
            "image_fallbacks_total": self.image_fallbacks_total,
            "bytes_written_total": self.bytes_written_total,
        }

    @property
    def fallback_count(self) -> int:
        """Total number of fallbacks across all error kinds."""
        return sum(self.fallbacks_total.values())
