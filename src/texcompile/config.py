"""Runtime configuration for the compilation service client."""

from __future__ import annotations

import os
from dataclasses import dataclass, field, replace
from urllib.parse import urlparse

DEFAULT_BASE_URL = "https://texcompile.ru"
DEFAULT_USER_AGENT = "texcompile-cli/0.1 (+https://texcompile.ru)"


@dataclass(slots=True)
class ServiceSettings:
    """Remote service endpoint and HTTP transport settings."""

    base_url: str = DEFAULT_BASE_URL
    request_timeout_seconds: float = 600.0
    connect_timeout_seconds: float = 10.0
    connect_retries: int = 2
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(slots=True)
class PollSettings:
    """Status polling cadence."""

    interval_seconds: float = 5.0
    max_attempts: int = 120


@dataclass(slots=True)
class Settings:
    """Application settings grouped by concern."""

    service: ServiceSettings = field(default_factory=ServiceSettings)
    poll: PollSettings = field(default_factory=PollSettings)

    @classmethod
    def from_env(cls) -> Settings:
        """Load settings from environment, falling back to the public service defaults."""

        return cls(
            service=ServiceSettings(
                base_url=_normalize_base_url(
                    os.getenv("TEXCOMPILE_BASE_URL", DEFAULT_BASE_URL),
                ),
                request_timeout_seconds=_env_float("TEXCOMPILE_REQUEST_TIMEOUT_SECONDS", 600),
                connect_timeout_seconds=_env_float("TEXCOMPILE_CONNECT_TIMEOUT_SECONDS", 10),
                connect_retries=_env_int("TEXCOMPILE_CONNECT_RETRIES", 2),
                user_agent=os.getenv("TEXCOMPILE_USER_AGENT", DEFAULT_USER_AGENT),
            ),
            poll=PollSettings(
                interval_seconds=_env_float("TEXCOMPILE_POLL_INTERVAL_SECONDS", 5),
                max_attempts=_env_int("TEXCOMPILE_MAX_POLL_ATTEMPTS", 120),
            ),
        )

    def with_overrides(
        self,
        *,
        base_url: str | None = None,
        poll_interval_seconds: float | None = None,
        max_attempts: int | None = None,
    ) -> Settings:
        """Return a copy with CLI-provided values taking precedence over environment."""

        service = self.service
        if base_url is not None:
            service = replace(service, base_url=_normalize_base_url(base_url))
        poll = self.poll
        if poll_interval_seconds is not None:
            poll = replace(poll, interval_seconds=poll_interval_seconds)
        if max_attempts is not None:
            poll = replace(poll, max_attempts=max_attempts)
        return replace(self, service=service, poll=poll)

    def validate(self) -> None:
        """Raise configuration error if any value is out of range."""

        _validate_base_url(self.service.base_url)
        if self.service.request_timeout_seconds <= 0:
            raise ValueError("TEXCOMPILE_REQUEST_TIMEOUT_SECONDS must be > 0.")
        if self.service.connect_timeout_seconds <= 0:
            raise ValueError("TEXCOMPILE_CONNECT_TIMEOUT_SECONDS must be > 0.")
        if self.service.connect_retries < 0:
            raise ValueError("TEXCOMPILE_CONNECT_RETRIES must be >= 0.")
        if self.poll.interval_seconds < 0:
            raise ValueError("TEXCOMPILE_POLL_INTERVAL_SECONDS must be >= 0.")
        if self.poll.max_attempts <= 0:
            raise ValueError("TEXCOMPILE_MAX_POLL_ATTEMPTS must be a positive integer.")


def _normalize_base_url(value: str) -> str:
    return value.strip().rstrip("/")


def _validate_base_url(value: str) -> None:
    parsed = urlparse(value)
    if parsed.scheme not in {"http", "https"} or not parsed.netloc:
        raise ValueError(
            "Invalid service base URL: "
            f"{value!r}. Expected an absolute URL with http:// or https:// scheme.",
        )


def _env_float(name: str, default: float) -> float:
    value = os.getenv(name)
    if value is None:
        return float(default)
    try:
        return float(value)
    except ValueError as error:
        raise ValueError(f"Invalid number for {name}: {value!r}") from error


def _env_int(name: str, default: int) -> int:
    value = os.getenv(name)
    if value is None:
        return default
    try:
        return int(value)
    except ValueError as error:
        raise ValueError(f"Invalid integer for {name}: {value!r}") from error
