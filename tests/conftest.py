"""Shared fixtures for the test suite."""

import asyncio
from collections.abc import Awaitable, Callable, Generator
from pathlib import Path
from typing import Any

import httpx
import pytest
import structlog

from resilient_cms.config import BackendConfig, RuntimeMode, get_backend_config
from resilient_cms.observability.metrics import CmsMetrics


BASE_URL = "https://cms.example.com"

ENV_NAMES = (
    "CMS_BASE_URL",
    "PUBLIC_STRAPI_URL",
    "CMS_API_TOKEN",
    "STRAPI_API_TOKEN",
    "CMS_MODE",
    "MODE",
    "CMS_DEBUG",
    "DEBUG",
    "CMS_REQUEST_TIMEOUT_SECONDS",
    "CMS_IMAGE_TIMEOUT_SECONDS",
    "CMS_UPLOADS_DIR",
    "CMS_UPLOADS_URL_PREFIX",
    "CMS_IMAGE_NAMING",
)

Handler = Callable[[httpx.Request], httpx.Response | Awaitable[httpx.Response]]


@pytest.fixture(autouse=True)
def isolated_environment(
    monkeypatch: pytest.MonkeyPatch, tmp_path: Path
) -> Generator[None]:
    """Clear CMS variables, run from an empty directory, reset global state."""
    for name in ENV_NAMES:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.chdir(tmp_path)
    CmsMetrics.reset()
    get_backend_config.cache_clear()
    yield
    CmsMetrics.reset()
    get_backend_config.cache_clear()
    structlog.reset_defaults()


@pytest.fixture
def config() -> BackendConfig:
    """Configured backend in development mode with terse logging."""
    return BackendConfig(base_url=BASE_URL, mode=RuntimeMode.DEVELOPMENT, debug=False)


@pytest.fixture
def unconfigured() -> BackendConfig:
    """Backend without a base URL."""
    return BackendConfig(base_url=None)


@pytest.fixture
def run_with_transport() -> Callable[
    [Handler, Callable[[httpx.AsyncClient], Awaitable[Any]]], Any
]:
    """Run an async operation against an ``httpx.MockTransport``.

    The operation receives an ``AsyncClient`` routed to the handler.
    """

    def _run(
        handler: Handler,
        operation: Callable[[httpx.AsyncClient], Awaitable[Any]],
    ) -> Any:
        async def _main() -> Any:
            transport = httpx.MockTransport(handler)
            async with httpx.AsyncClient(transport=transport) as http:
                return await operation(http)

        return asyncio.run(_main())

    return _run


@pytest.fixture
def menu_payload() -> dict[str, Any]:
    """Collection payload as returned by the menu-items endpoint."""
    return {
        "data": [
            {
                "id": 1,
                "attributes": {
                    "name": "Jollof Rice",
                    "description": "Smoky party rice",
                    "price": 14.5,
                    "isMadeToOrder": False,
                    "image": {
                        "data": {
                            "id": 10,
                            "attributes": {
                                "url": "/uploads/jollof.jpg",
                                "alternativeText": "A plate of jollof rice",
                                "formats": {
                                    "thumbnail": {
                                        "url": "/uploads/thumbnail_jollof.jpg",
                                        "width": 156,
                                        "height": 156,
                                    }
                                },
                            },
                        }
                    },
                    "cuisine": {"data": {"id": 3, "attributes": {"name": "West African"}}},
                    "createdAt": "2024-01-01T00:00:00.000Z",
                    "locale": "en",
                },
            },
            {
                "id": 2,
                "attributes": {
                    "name": "Fried Plantain",
                    "price": 6,
                    "isMadeToOrder": True,
                    "image": {"data": None},
                    "cuisine": {"data": None},
                },
            },
        ],
        "meta": {"pagination": {"page": 1, "pageSize": 25, "pageCount": 1, "total": 2}},
    }


@pytest.fixture
def homepage_payload() -> dict[str, Any]:
    """Single-type payload as returned by the homepage endpoint."""
    return {
        "data": {
            "id": 1,
            "attributes": {
                "heroSection": {
                    "id": 4,
                    "heroTitle": "Home cooking, delivered",
                    "heroSubtitle": "Made to order every day",
                    "heroImage": {
                        "data": {
                            "id": 7,
                            "attributes": {
                                "url": "/uploads/hero.jpg",
                                "alternativeText": "Table of dishes",
                                "width": 1920,
                                "height": 1080,
                            },
                        }
                    },
                    "primaryCtaText": "See the menu",
                    "primaryCtaLink": "/menu",
                },
                "publishedAt": "2024-02-01T10:00:00.000Z",
            },
        },
        "meta": {"locale": "en"},
    }
