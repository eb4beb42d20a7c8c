"""Integration tests against a local HTTP server standing in for the CMS."""

import asyncio
import json
import threading
import time
from collections.abc import Generator
from http.server import BaseHTTPRequestHandler, ThreadingHTTPServer
from pathlib import Path

import pytest

from resilient_cms.config import BackendConfig, RuntimeMode
from resilient_cms.content import MenuItem, SingletonStatus
from resilient_cms.fetch import CmsClient, FetchErrorKind
from resilient_cms.media import ImageCache


IMAGE_BYTES = b"\xff\xd8\xff\xe0local-jpeg-bytes"

MENU_BODY = json.dumps(
    {
        "data": [
            {
                "id": 1,
                "attributes": {
                    "name": "Egusi Soup",
                    "price": 12,
                    "image": {
                        "data": {"id": 9, "attributes": {"url": "/uploads/egusi.jpg"}}
                    },
                },
            }
        ],
        "meta": {"pagination": {"page": 1, "pageSize": 25, "pageCount": 1, "total": 1}},
    }
).encode()

HOMEPAGE_BODY = json.dumps({"data": None, "meta": {}}).encode()


def get_server_url(server: ThreadingHTTPServer) -> str:
    """Get the base URL of a test server."""
    host, port = server.server_address[0], server.server_address[1]
    if isinstance(host, bytes):
        host = host.decode("utf-8")
    return f"http://{host}:{port}"


class FakeCmsHandler(BaseHTTPRequestHandler):
    """HTTP handler serving a tiny CMS with deliberately slow endpoints."""

    authorization: list[str | None] = []

    def log_message(self, format: str, *args: object) -> None:  # noqa: A002
        """Suppress log messages during tests."""

    def do_GET(self) -> None:  # noqa: N802
        """Route GET requests."""
        path = self.path.split("?", 1)[0]
        FakeCmsHandler.authorization.append(self.headers.get("Authorization"))

        try:
            if path == "/api/menu-items":
                self._send(200, MENU_BODY, "application/json")
            elif path == "/api/homepage":
                self._send(200, HOMEPAGE_BODY, "application/json")
            elif path == "/api/slow":
                time.sleep(1.5)
                self._send(200, MENU_BODY, "application/json")
            elif path == "/api/drip":
                self._drip()
            elif path == "/uploads/egusi.jpg":
                self._send(200, IMAGE_BYTES, "image/jpeg")
            else:
                self._send(404, b'{"error": "not found"}', "application/json")
        except (BrokenPipeError, ConnectionResetError):
            # Client gave up first
            pass

    def _send(self, status: int, body: bytes, content_type: str) -> None:
        self.send_response(status)
        self.send_header("Content-Type", content_type)
        self.send_header("Content-Length", str(len(body)))
        self.end_headers()
        self.wfile.write(body)

    def _drip(self) -> None:
        """Send the body one byte at a time, never pausing long."""
        self.send_response(200)
        self.send_header("Content-Type", "application/json")
        self.send_header("Content-Length", str(len(MENU_BODY)))
        self.end_headers()
        for i in range(len(MENU_BODY)):
            self.wfile.write(MENU_BODY[i : i + 1])
            self.wfile.flush()
            time.sleep(0.1)


@pytest.fixture
def cms_server() -> Generator[ThreadingHTTPServer]:
    """Start the local CMS server."""
    FakeCmsHandler.authorization = []
    server = ThreadingHTTPServer(("127.0.0.1", 0), FakeCmsHandler)
    thread = threading.Thread(target=server.serve_forever)
    thread.daemon = True
    thread.start()
    yield server
    server.shutdown()
    server.server_close()


@pytest.fixture
def server_config(cms_server: ThreadingHTTPServer, tmp_path: Path) -> BackendConfig:
    """Configuration pointing at the local server."""
    return BackendConfig(
        base_url=get_server_url(cms_server),
        api_token="integration-token",
        mode=RuntimeMode.PRODUCTION,
        request_timeout_seconds=5.0,
        uploads_dir=tmp_path / "public" / "uploads",
    )


class TestContentFetching:
    """Fetching content over real sockets."""

    def test_collection_with_token(self, server_config: BackendConfig) -> None:
        """Test that a collection is fetched with the bearer token."""
        result = asyncio.run(CmsClient(server_config).fetch_collection("menu-items"))

        assert [item.attributes.name for item in result.items] == ["Egusi Soup"]
        assert FakeCmsHandler.authorization == ["Bearer integration-token"]

    def test_single_empty(self, server_config: BackendConfig) -> None:
        """Test that a null single type gives an EMPTY result."""
        result = asyncio.run(CmsClient(server_config).fetch_single("homepage"))

        assert result.value is None
        assert result.status is SingletonStatus.EMPTY

    def test_missing_endpoint(self, server_config: BackendConfig) -> None:
        """Test that a 404 becomes an empty collection."""
        outcome = asyncio.run(
            CmsClient(server_config).fetch_collection_outcome("no-such-thing")
        )

        assert outcome.error is not None
        assert outcome.error.kind is FetchErrorKind.NOT_FOUND
        assert outcome.error.message == "Endpoint not found: no-such-thing"


class TestDeadline:
    """The request deadline bounds slow backends."""

    def test_slow_response(self, server_config: BackendConfig) -> None:
        """Test that a server slower than the deadline times out."""
        fast = server_config.model_copy(update={"request_timeout_seconds": 0.3})

        started = time.monotonic()
        outcome = asyncio.run(CmsClient(fast).fetch_collection_outcome("slow"))
        elapsed = time.monotonic() - started

        assert outcome.error is not None
        assert outcome.error.kind is FetchErrorKind.NETWORK_TIMEOUT
        assert elapsed < 1.2

    def test_slow_drip_body(self, server_config: BackendConfig) -> None:
        """Test that a steadily trickling body still hits the total deadline."""
        fast = server_config.model_copy(update={"request_timeout_seconds": 0.5})

        started = time.monotonic()
        result = asyncio.run(CmsClient(fast).fetch_collection("drip", MenuItem))
        elapsed = time.monotonic() - started

        assert result.items == []
        assert result.pagination is None
        assert elapsed < 1.5


class TestImageMirroring:
    """Fetching entities and mirroring their images end to end."""

    def test_menu_images_mirrored(self, server_config: BackendConfig) -> None:
        """Test that menu images land in the uploads directory."""

        async def build() -> list[str | None]:
            menu = await CmsClient(server_config).fetch_collection("menu-items")
            cache = ImageCache(server_config)
            return await cache.cache_images([item.image_url for item in menu.items])

        cached = asyncio.run(build())

        assert cached == ["/uploads/egusi.jpg"]
        assert (server_config.uploads_dir / "egusi.jpg").read_bytes() == IMAGE_BYTES
        # Images are public; only the content request carries the token
        assert FakeCmsHandler.authorization == ["Bearer integration-token", None]

    def test_missing_image_falls_back(self, server_config: BackendConfig) -> None:
        """Test that a 404 image keeps its remote URL."""
        cached = asyncio.run(
            ImageCache(server_config).cache_image("/uploads/missing.jpg")
        )

        assert cached == f"{server_config.base_url}/uploads/missing.jpg"
        assert not server_config.uploads_dir.exists()
