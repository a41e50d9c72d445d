"""Error taxonomy for the compilation client."""

from __future__ import annotations

from dataclasses import dataclass

from texcompile.compile.formatting import format_duration


@dataclass(slots=True)
class CompileClientError(Exception):
    """Base error; every subclass is fatal to one invocation."""

    message: str
    code: str = "client_error"

    def __str__(self) -> str:
        return self.message


@dataclass(slots=True)
class InputError(CompileClientError):
    """Local input cannot be read or its name cannot be used."""

    code: str = "input"


@dataclass(slots=True)
class UnsupportedFileTypeError(CompileClientError):
    """Input file extension is neither ``.tex`` nor ``.zip``."""

    code: str = "unsupported_file_type"


@dataclass(slots=True)
class TransportError(CompileClientError):
    """Non-success HTTP status or network failure talking to the service."""

    code: str = "transport"
    status_code: int | None = None
    body: str = ""

    @classmethod
    def from_response(cls, operation: str, response_status: int, body: str) -> TransportError:
        return cls(
            message=f"{operation} failed with status {response_status}: {body}",
            status_code=response_status,
            body=body,
        )


@dataclass(slots=True)
class ProtocolError(CompileClientError):
    """Service envelope reported failure or could not be decoded."""

    code: str = "protocol"


@dataclass(slots=True)
class MissingFieldError(ProtocolError):
    """Success envelope lacks a field the lifecycle requires."""

    code: str = "missing_field"
    field: str = ""


@dataclass(slots=True)
class CompilationFailedError(CompileClientError):
    """Service reported the job as failed."""

    code: str = "compilation_failed"
    duration_ms: int | None = None
    service_message: str | None = None

    @classmethod
    def from_report(
        cls,
        duration_ms: int | None,
        service_message: str | None,
    ) -> CompilationFailedError:
        detail = service_message or "Unknown error"
        return cls(
            message=f"Compilation failed after {format_duration(duration_ms)}: {detail}",
            duration_ms=duration_ms,
            service_message=service_message,
        )


@dataclass(slots=True)
class PollTimeoutError(CompileClientError):
    """No terminal state observed within the attempt budget."""

    code: str = "poll_timeout"
    attempts: int = 0
