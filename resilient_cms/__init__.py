"""Resilient client for a headless CMS backend.

Fetches structured content and media for site builds and degrades to
empty, well-typed results whenever the backend is unreachable.
"""

from resilient_cms.config import BackendConfig, RuntimeMode, get_backend_config
from resilient_cms.content import (
    CollectionResult,
    Homepage,
    MenuItem,
    SingletonResult,
    SingletonStatus,
)
from resilient_cms.fetch import CmsClient
from resilient_cms.media import ImageCache, resolve_media_url


__version__ = "0.1.0"

__all__ = [
    "BackendConfig",
    "CmsClient",
    "CollectionResult",
    "Homepage",
    "ImageCache",
    "MenuItem",
    "RuntimeMode",
    "SingletonResult",
    "SingletonStatus",
    "get_backend_config",
    "resolve_media_url",
]
