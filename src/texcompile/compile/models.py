"""Typed records for service envelopes and job status."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class CompilationStatus(str, Enum):
    """Remote job lifecycle states; ``UNKNOWN`` covers any unrecognized wire value."""

    QUEUED = "Queued"
    PROCESSING = "Processing"
    COMPLETED = "Completed"
    FAILED = "Failed"
    UNKNOWN = "Unknown"

    @property
    def is_terminal(self) -> bool:
        return self in _TERMINAL_STATUSES


_TERMINAL_STATUSES = frozenset({CompilationStatus.COMPLETED, CompilationStatus.FAILED})


@dataclass(slots=True, frozen=True)
class StatusReport:
    """One decoded status poll.

    ``raw_status`` keeps the wire value so that ``UNKNOWN`` reports can still
    be shown to the user.  Optional fields are ``None`` when the service
    omitted them.
    """

    status: CompilationStatus
    raw_status: str
    download_url: str | None = None
    error_message: str | None = None
    duration_ms: int | None = None
    queue_position: int | None = None


@dataclass(slots=True, frozen=True)
class UploadEnvelope:
    """Decoded ``/api/upload`` response."""

    success: bool
    task_id: str | None = None
    error: str | None = None
    message: str | None = None


@dataclass(slots=True, frozen=True)
class StatusEnvelope:
    """Decoded ``/api/status/{taskId}`` response."""

    success: bool
    report: StatusReport | None = None
    error: str | None = None
    message: str | None = None


@dataclass(slots=True, frozen=True)
class ProgressEvent:
    """Observation emitted for every status poll."""

    attempt: int
    max_attempts: int
    report: StatusReport
