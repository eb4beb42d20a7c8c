"""Pure helpers for media URLs."""

import re
from pathlib import PurePosixPath
from urllib.parse import unquote, urlparse

from resilient_cms.config import BackendConfig


_SCHEME_PREFIX = re.compile(r"^[A-Za-z][A-Za-z0-9+.\-]*://")


def is_absolute_url(path: str) -> bool:
    """Check whether a path already carries a URL scheme.

    Args:
        path: Media path or URL.

    Returns:
        True for ``scheme://...`` URLs.
    """
    return bool(_SCHEME_PREFIX.match(path))


def resolve_media_url(path: str | None, config: BackendConfig) -> str | None:
    """Turn a media path into an absolute URL.

    Absolute URLs are returned unchanged, so resolving twice is a no-op.

    Args:
        path: Media path from a CMS entity, possibly relative.
        config: Backend configuration providing the base URL.

    Returns:
        Absolute URL, or None when there is no path or a relative path
        cannot be resolved because no backend is configured.
    """
    if not path:
        return None
    if is_absolute_url(path):
        return path
    if config.base_url is None:
        return None
    if not path.startswith("/"):
        path = f"/{path}"
    return f"{config.base_url}{path}"


def extract_filename(url: str) -> str | None:
    """Extract the final path segment of a URL as a filename.

    Args:
        url: Absolute URL.

    Returns:
        The decoded last segment, or None when it is missing or unsafe.
    """
    segment = urlparse(url).path.rsplit("/", 1)[-1]
    name = PurePosixPath(unquote(segment)).name
    if name in ("", ".", "..") or "\\" in name:
        return None
    return name
