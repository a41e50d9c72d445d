"""Controller for the compile CLI command."""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from pathlib import Path

import httpx

from texcompile.compile.errors import InputError
from texcompile.compile.formatting import format_duration
from texcompile.compile.lifecycle import CompileTaskClient, SleepFn
from texcompile.compile.models import CompilationStatus, ProgressEvent
from texcompile.compile.naming import derive_output_name
from texcompile.config import Settings
from texcompile.http.transport import build_async_client

logger = logging.getLogger(__name__)

EmitFn = Callable[[str], None]


@dataclass(slots=True)
class CompileCommand:
    """CLI inputs for the compile command."""

    input_path: Path
    output_dir: Path | None = None
    base_url: str | None = None
    poll_interval_seconds: float | None = None
    max_attempts: int | None = None


class CompileCliController:
    """Coordinates reading the input, running the remote job and saving the PDF."""

    def __init__(
        self,
        *,
        transport: httpx.AsyncBaseTransport | None = None,
        sleep: SleepFn = asyncio.sleep,
    ) -> None:
        self._transport = transport
        self._sleep = sleep

    def run(self, command: CompileCommand, emit: EmitFn) -> Path:
        """Compile ``command.input_path`` remotely; return the written PDF path."""

        settings = Settings.from_env().with_overrides(
            base_url=command.base_url,
            poll_interval_seconds=command.poll_interval_seconds,
            max_attempts=command.max_attempts,
        )
        settings.validate()
        return asyncio.run(self._compile_and_download(command, settings, emit))

    async def _compile_and_download(
        self,
        command: CompileCommand,
        settings: Settings,
        emit: EmitFn,
    ) -> Path:
        emit(f"Reading file: {command.input_path}")
        contents = _read_input(command.input_path)
        file_name = command.input_path.name
        output_dir = command.output_dir if command.output_dir is not None else Path.cwd()
        output_path = output_dir / derive_output_name(file_name)

        base_url = settings.service.base_url
        async with build_async_client(settings.service, transport=self._transport) as client:
            task_client = CompileTaskClient(
                client,
                base_url=base_url,
                poll=settings.poll,
                sleep=self._sleep,
                on_progress=lambda event: emit(format_progress(event)),
            )
            emit(f"Uploading file to {base_url}...")
            task_id = await task_client.submit(contents, file_name)
            emit(f"File uploaded. Task ID: {task_id}")

            emit("Waiting for compilation to complete...")
            download_url = await task_client.await_completion(task_id)

            emit(f"Downloading PDF from {download_url}")
            pdf_bytes = await task_client.retrieve(download_url)

        _write_output(output_path, pdf_bytes)
        logger.info("Wrote %d bytes to %s", len(pdf_bytes), output_path)
        emit(f"PDF saved to: {output_path}")
        return output_path


def format_progress(event: ProgressEvent) -> str:
    """Render one status poll as a progress line.

    Non-terminal polls end with the poll counter.
    """

    line = _status_line(event)
    if event.report.status.is_terminal:
        return line
    return f"{line} | Check {event.attempt}/{event.max_attempts}"


def _status_line(event: ProgressEvent) -> str:
    report = event.report
    duration = format_duration(report.duration_ms)
    if report.status is CompilationStatus.QUEUED:
        queue_info = (
            f" (position: {report.queue_position})" if report.queue_position is not None else ""
        )
        return f"Status: Queued{queue_info} | Time in queue: {duration}"
    if report.status is CompilationStatus.PROCESSING:
        return f"Status: Processing... | Time: {duration}"
    if report.status is CompilationStatus.COMPLETED:
        return f"Status: Completed! | Compilation time: {duration}"
    if report.status is CompilationStatus.FAILED:
        return f"Status: Failed | Time: {duration}"
    return f"Status: {report.raw_status} (unknown)"


def _read_input(path: Path) -> bytes:
    try:
        return path.read_bytes()
    except OSError as error:
        raise InputError(message=f"Failed to read file: {path} ({error})") from error


def _write_output(path: Path, contents: bytes) -> None:
    try:
        path.write_bytes(contents)
    except OSError as error:
        raise InputError(message=f"Failed to write PDF file: {path} ({error})") from error
