"""Media URL resolution and build-time image mirroring."""

from resilient_cms.media.cache import ImageCache, stored_filename
from resilient_cms.media.urls import extract_filename, is_absolute_url, resolve_media_url


__all__ = [
    "ImageCache",
    "extract_filename",
    "is_absolute_url",
    "resolve_media_url",
    "stored_filename",
]
