"""Drive one remote compilation job from upload to downloaded PDF."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from urllib.parse import quote

import httpx

from texcompile.compile.decoder import (
    decode_status_envelope,
    decode_upload_envelope,
    envelope_error_text,
)
from texcompile.compile.errors import (
    CompilationFailedError,
    MissingFieldError,
    PollTimeoutError,
    ProtocolError,
    TransportError,
)
from texcompile.compile.formatting import format_duration
from texcompile.compile.models import CompilationStatus, ProgressEvent, StatusReport
from texcompile.compile.naming import mime_type_for, normalize_download_url
from texcompile.config import PollSettings

UPLOAD_PATH = "/api/upload"
STATUS_PATH = "/api/status/{task_id}"
UPLOAD_FIELD_NAME = "texFile"

logger = logging.getLogger(__name__)

SleepFn = Callable[[float], Awaitable[None]]
ProgressCallback = Callable[[ProgressEvent], None]


class CompileTaskClient:
    """Upload, poll and download against the compilation service.

    Requests are issued strictly one after another.  Any failed request or
    unsuccessful envelope aborts the current operation; only the fixed poll
    cadence repeats requests.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        *,
        base_url: str,
        poll: PollSettings | None = None,
        sleep: SleepFn = asyncio.sleep,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        self._client = client
        self.base_url = base_url.rstrip("/")
        self.poll = poll or PollSettings()
        self._sleep = sleep
        self._on_progress = on_progress

    async def submit(self, contents: bytes, file_name: str) -> str:
        """Upload ``contents`` and return the service task identifier."""

        mime_type = mime_type_for(file_name)
        url = f"{self.base_url}{UPLOAD_PATH}"
        logger.info("Uploading %s (%d bytes) to %s", file_name, len(contents), url)
        response = await self._request(
            "Upload",
            "POST",
            url,
            files={UPLOAD_FIELD_NAME: (file_name, contents, mime_type)},
        )
        envelope = decode_upload_envelope(_json_payload(response, "upload"))
        if not envelope.success:
            raise ProtocolError(message=envelope_error_text(envelope.error, envelope.message))
        if envelope.task_id is None:
            raise MissingFieldError(message="No task ID in upload response", field="taskId")
        logger.info("Upload accepted, task_id=%s", envelope.task_id)
        return envelope.task_id

    async def await_completion(self, task_id: str) -> str:
        """Poll until the job is terminal and return its download reference."""

        max_attempts = self.poll.max_attempts
        for attempt in range(1, max_attempts + 1):
            report = await self._fetch_status(task_id)
            logger.debug(
                "Poll %d/%d for task %s: status=%s",
                attempt,
                max_attempts,
                task_id,
                report.raw_status,
            )
            self._emit(ProgressEvent(attempt=attempt, max_attempts=max_attempts, report=report))

            if report.status.is_terminal:
                return _terminal_download_url(task_id, report)
            if report.status is CompilationStatus.UNKNOWN:
                logger.warning("Task %s reported unknown status %r", task_id, report.raw_status)

            if attempt < max_attempts:
                await self._sleep(self.poll.interval_seconds)

        raise PollTimeoutError(
            message=f"Compilation timeout after {max_attempts} attempts",
            attempts=max_attempts,
        )

    async def retrieve(self, download_url: str) -> bytes:
        """Download the compiled artifact."""

        url = normalize_download_url(download_url, self.base_url)
        logger.info("Downloading artifact from %s", url)
        response = await self._request("Download", "GET", url)
        return response.content

    async def _fetch_status(self, task_id: str) -> StatusReport:
        url = f"{self.base_url}{STATUS_PATH.format(task_id=quote(task_id, safe=''))}"
        response = await self._request("Status check", "GET", url)
        envelope = decode_status_envelope(_json_payload(response, "status"))
        if not envelope.success:
            raise ProtocolError(
                message="Status check returned error: "
                f"{envelope_error_text(envelope.error, envelope.message)}",
            )
        if envelope.report is None:
            raise MissingFieldError(message="No status data in response", field="data")
        return envelope.report

    async def _request(
        self,
        operation: str,
        method: str,
        url: str,
        **kwargs: object,
    ) -> httpx.Response:
        try:
            response = await self._client.request(method, url, **kwargs)  # type: ignore[arg-type]
        except httpx.HTTPError as exc:
            logger.warning("%s request to %s failed: %s", operation, url, exc)
            raise TransportError(message=f"{operation} request failed: {exc}") from exc
        except httpx.InvalidURL as exc:
            raise ProtocolError(message=f"{operation} URL is invalid: {url!r} ({exc})") from exc
        if not response.is_success:
            raise TransportError.from_response(operation, response.status_code, response.text)
        return response

    def _emit(self, event: ProgressEvent) -> None:
        if self._on_progress is not None:
            self._on_progress(event)


def _json_payload(response: httpx.Response, endpoint: str) -> object:
    try:
        return response.json()
    except ValueError as exc:
        raise ProtocolError(message=f"Failed to parse {endpoint} response: {exc}") from exc


def _terminal_download_url(task_id: str, report: StatusReport) -> str:
    if report.status is CompilationStatus.FAILED:
        logger.info("Task %s failed: %s", task_id, report.error_message)
        raise CompilationFailedError.from_report(report.duration_ms, report.error_message)
    if report.download_url is None:
        raise MissingFieldError(
            message="No download URL in completed status",
            field="downloadUrl",
        )
    logger.info("Task %s completed in %s", task_id, format_duration(report.duration_ms))
    return report.download_url
