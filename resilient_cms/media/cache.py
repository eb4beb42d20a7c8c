"""Build-time mirroring of CMS images into local static storage.

In production builds each image is downloaded once and written under the
uploads directory so the site keeps its images when the CMS is down. Every
failure falls back to the remote URL; nothing here raises to the caller.
"""

import asyncio
import hashlib
import os
import uuid
from pathlib import Path
from urllib.parse import quote

import httpx
import structlog

from resilient_cms.config import BackendConfig, ImageNaming, get_backend_config
from resilient_cms.config.constants import COMPONENT_MEDIA
from resilient_cms.fetch.constants import HTTP_STATUS_OK_MAX, HTTP_STATUS_OK_MIN
from resilient_cms.fetch.http import client_scope
from resilient_cms.media.urls import extract_filename, resolve_media_url
from resilient_cms.observability.logging import get_logger
from resilient_cms.observability.metrics import CmsMetrics
from resilient_cms.observability.redact import redact_url_credentials


# Hex digits of the source URL digest used by ImageNaming.HASHED
URL_DIGEST_LENGTH = 12


def stored_filename(url: str, filename: str, naming: ImageNaming) -> str:
    """Name under which an image is stored locally.

    Args:
        url: Absolute source URL.
        filename: Final path segment of the source URL.
        naming: Naming strategy.

    Returns:
        Filename inside the uploads directory.
    """
    if naming is ImageNaming.HASHED:
        digest = hashlib.sha256(url.encode("utf-8")).hexdigest()[:URL_DIGEST_LENGTH]
        return f"{digest}-{filename}"
    return filename


def _write_atomically(target: Path, data: bytes) -> None:
    tmp = target.with_name(f".{uuid.uuid4().hex}.tmp")
    try:
        tmp.write_bytes(data)
        os.replace(tmp, target)
    finally:
        tmp.unlink(missing_ok=True)


class ImageCache:
    """Mirrors remote images into the site's uploads directory.

    Outside production mode images are not downloaded; callers get the
    absolute remote URL instead.
    """

    def __init__(
        self,
        config: BackendConfig | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the cache.

        Args:
            config: Backend configuration; the process-wide one if omitted.
            http_client: Shared async client; a short-lived client is opened
                per download if omitted.
        """
        self._config = config if config is not None else get_backend_config()
        self._http_client = http_client
        self._metrics = CmsMetrics.get_instance()
        self._log = get_logger(COMPONENT_MEDIA)
        self._stored: dict[str, str] = {}
        self._owners: dict[str, str] = {}

    async def cache_image(self, path: str | None) -> str | None:
        """Get a displayable URL for a CMS image.

        Args:
            path: Media URL or path from a CMS entity.

        Returns:
            ``<prefix>/<filename>`` after a successful local copy, the
            absolute remote URL on any failure or outside production, or
            None when there is nothing to resolve.
        """
        if not path:
            self._log.debug("image_path_missing")
            return None

        if not self._config.is_production:
            return resolve_media_url(path, self._config)

        try:
            return await self._mirror(path)
        except Exception as e:  # noqa: BLE001
            full_url = resolve_media_url(path, self._config)
            self._metrics.record_image_fallback()
            self._log.warning(
                "image_cache_failed",
                url=redact_url_credentials(full_url),
                error=str(e),
                exc_info=e,
            )
            return full_url

    async def cache_images(self, paths: list[str | None]) -> list[str | None]:
        """Cache several images one after another.

        Concurrent writers of the same filename are not coordinated.

        Args:
            paths: Media URLs or paths.

        Returns:
            Displayable URLs in input order.
        """
        return [await self.cache_image(path) for path in paths]

    async def _mirror(self, path: str) -> str | None:
        full_url = resolve_media_url(path, self._config)
        if full_url is None:
            self._metrics.record_image_fallback()
            self._log.warning(
                "image_unresolvable",
                path=path,
                message="Relative image path but no CMS base URL configured",
            )
            return None

        log = self._log.bind(url=redact_url_credentials(full_url))

        previous = self._stored.get(full_url)
        if previous is not None:
            self._metrics.record_image_reused()
            log.debug("image_already_cached", local_path=previous)
            return previous

        filename = extract_filename(full_url)
        if filename is None:
            self._metrics.record_image_fallback()
            log.warning("image_filename_missing", message="Using remote URL")
            return full_url

        data = await self._download(full_url, log)
        if data is None:
            self._metrics.record_image_fallback()
            return full_url

        name = stored_filename(full_url, filename, self._config.image_naming)
        self._check_collision(name, full_url, log)
        await self._write(name, data)
        self._owners[name] = full_url

        public_path = f"{self._config.uploads_url_prefix.rstrip('/')}/{quote(name)}"
        self._stored[full_url] = public_path
        self._metrics.record_image_cached(len(data))
        log.info("image_cached", filename=name, bytes=len(data), local_path=public_path)
        return public_path

    async def _download(
        self,
        url: str,
        log: structlog.typing.FilteringBoundLogger,
    ) -> bytes | None:
        """Download an image body.

        Returns:
            Body bytes, or None on a non-success status.
        """
        timeout = self._config.image_timeout_seconds
        kwargs: dict[str, float] = {}
        if timeout is not None:
            kwargs["timeout"] = timeout

        async with client_scope(self._http_client, timeout) as client:
            response = await client.get(url, **kwargs)
            body = await response.aread()

        self._metrics.record_request(response.status_code)
        if not HTTP_STATUS_OK_MIN <= response.status_code < HTTP_STATUS_OK_MAX:
            log.warning(
                "image_download_failed",
                status_code=response.status_code,
                message="Using remote URL",
            )
            return None
        return body

    async def _write(self, name: str, data: bytes) -> None:
        directory = self._config.uploads_dir
        await asyncio.to_thread(directory.mkdir, parents=True, exist_ok=True)
        await asyncio.to_thread(_write_atomically, directory / name, data)

    def _check_collision(
        self,
        name: str,
        url: str,
        log: structlog.typing.FilteringBoundLogger,
    ) -> None:
        owner = self._owners.get(name)
        if owner is not None and owner != url:
            log.warning(
                "image_filename_collision",
                filename=name,
                previous_url=redact_url_credentials(owner),
                message="Overwriting image from a different source",
            )
