"""In-memory compilation service used by the client tests."""

from __future__ import annotations

from collections.abc import Iterable
from typing import Any

import httpx

BASE_URL = "https://texcompile.test"
PDF_BYTES = b"%PDF-1.7\n%test\n"


def status_payload(status: str, **fields: Any) -> dict[str, Any]:
    return {"success": True, "data": {"status": status, **fields}}


class ScriptedService:
    """In-memory stand-in for the compilation service, replaying canned responses."""

    def __init__(
        self,
        *,
        upload: dict[str, Any] | httpx.Response | None = None,
        statuses: Iterable[dict[str, Any] | httpx.Response] = (),
        download: httpx.Response | None = None,
    ) -> None:
        if upload is None:
            upload = {"success": True, "data": {"taskId": "task-1"}}
        self.upload = upload
        self.statuses = list(statuses)
        if download is None:
            download = httpx.Response(200, content=PDF_BYTES)
        self.download = download
        self.requests: list[httpx.Request] = []

    @property
    def status_requests(self) -> list[httpx.Request]:
        return [r for r in self.requests if r.url.path.startswith("/api/status/")]

    def handler(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        path = request.url.path
        if path == "/api/upload":
            return _as_response(self.upload)
        if path.startswith("/api/status/"):
            return _as_response(self.statuses.pop(0))
        return self.download

    def client(self) -> httpx.AsyncClient:
        return httpx.AsyncClient(transport=httpx.MockTransport(self.handler))


class SleepRecorder:
    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


def _as_response(value: dict[str, Any] | httpx.Response) -> httpx.Response:
    if isinstance(value, httpx.Response):
        return value
    return httpx.Response(200, json=value)
