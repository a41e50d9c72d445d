"""Async HTTP client factory for the compilation service."""

from __future__ import annotations

import httpx

from texcompile.config import ServiceSettings


def build_async_client(
    settings: ServiceSettings,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create an ``httpx.AsyncClient`` with the service timeout and user agent.

    Connection failures are retried by the transport itself; requests that
    reached the server are never retried here.
    """

    timeout = httpx.Timeout(
        settings.request_timeout_seconds,
        connect=settings.connect_timeout_seconds,
    )
    if transport is None:
        transport = httpx.AsyncHTTPTransport(retries=settings.connect_retries)
    return httpx.AsyncClient(
        timeout=timeout,
        headers={"User-Agent": settings.user_agent},
        transport=transport,
        follow_redirects=True,
    )
