"""Shared construction of httpx async clients."""

from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

import httpx


def build_async_client(timeout: float | None = None) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` with the library defaults.

    Args:
        timeout: Timeout in seconds; None keeps the httpx default.

    Returns:
        A new client; the caller owns and must close it.
    """
    if timeout is None:
        return httpx.AsyncClient(follow_redirects=True)
    return httpx.AsyncClient(timeout=httpx.Timeout(timeout), follow_redirects=True)


@asynccontextmanager
async def client_scope(
    client: httpx.AsyncClient | None,
    timeout: float | None = None,
) -> AsyncIterator[httpx.AsyncClient]:
    """Yield an injected client, or a short-lived one closed on exit.

    Injected clients are never closed here.

    Args:
        client: Client supplied by the caller, if any.
        timeout: Timeout for a newly created client.

    Yields:
        Client to issue requests with.
    """
    if client is not None:
        yield client
        return
    async with build_async_client(timeout) as owned:
        yield owned
