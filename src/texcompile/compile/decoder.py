"""Decode service JSON envelopes into typed records."""

from __future__ import annotations

from typing import Any

from texcompile.compile.errors import ProtocolError
from texcompile.compile.models import (
    CompilationStatus,
    StatusEnvelope,
    StatusReport,
    UploadEnvelope,
)

UNKNOWN_SERVICE_ERROR = "Unknown error"

_KNOWN_STATUSES = {
    status.value: status for status in CompilationStatus if status is not CompilationStatus.UNKNOWN
}


def decode_status(raw: str) -> CompilationStatus:
    """Map a wire status string to ``CompilationStatus``; unrecognized values are ``UNKNOWN``."""

    return _KNOWN_STATUSES.get(raw, CompilationStatus.UNKNOWN)


def decode_upload_envelope(payload: object) -> UploadEnvelope:
    envelope = _envelope_fields(payload)
    data = envelope["data"]
    task_id = _nullable_string(data.get("taskId")) if data is not None else None
    return UploadEnvelope(
        success=envelope["success"],
        task_id=task_id,
        error=envelope["error"],
        message=envelope["message"],
    )


def decode_status_envelope(payload: object) -> StatusEnvelope:
    envelope = _envelope_fields(payload)
    data = envelope["data"]
    return StatusEnvelope(
        success=envelope["success"],
        report=_decode_status_report(data) if data is not None else None,
        error=envelope["error"],
        message=envelope["message"],
    )


def envelope_error_text(error: str | None, message: str | None) -> str:
    """Pick the failure text of an unsuccessful envelope: ``error``, then ``message``."""

    return error or message or UNKNOWN_SERVICE_ERROR


def _envelope_fields(payload: object) -> dict[str, Any]:
    if not isinstance(payload, dict):
        raise ProtocolError(message="Service response is not a JSON object")
    success = payload.get("success")
    if not isinstance(success, bool):
        raise ProtocolError(message="Service response has no boolean 'success' flag")
    data = payload.get("data")
    if data is not None and not isinstance(data, dict):
        raise ProtocolError(message="Service response 'data' is not a JSON object")
    return {
        "success": success,
        "data": data,
        "error": _nullable_string(payload.get("error")),
        "message": _nullable_string(payload.get("message")),
    }


def _decode_status_report(data: dict[str, Any]) -> StatusReport:
    raw_status = data.get("status")
    if not isinstance(raw_status, str):
        raise ProtocolError(message="Status data has no 'status' string")
    return StatusReport(
        status=decode_status(raw_status),
        raw_status=raw_status,
        download_url=_nullable_string(data.get("downloadUrl")),
        error_message=_nullable_string(data.get("errorMessage")),
        duration_ms=_non_negative_int(data.get("duration")),
        queue_position=_positive_int(data.get("queuePosition")),
    )


def _nullable_string(value: object) -> str | None:
    if not isinstance(value, str):
        return None
    return value or None


def _non_negative_int(value: object) -> int | None:
    # bool is an int subclass; JSON true/false is never a duration
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value >= 0 else None


def _positive_int(value: object) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value if value > 0 else None
