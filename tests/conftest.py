"""Shared test fixtures."""

from __future__ import annotations

import pytest
from fakes import SleepRecorder


@pytest.fixture()
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture(autouse=True)
def _clean_env(monkeypatch) -> None:
    for name in (
        "TEXCOMPILE_BASE_URL",
        "TEXCOMPILE_REQUEST_TIMEOUT_SECONDS",
        "TEXCOMPILE_CONNECT_TIMEOUT_SECONDS",
        "TEXCOMPILE_CONNECT_RETRIES",
        "TEXCOMPILE_USER_AGENT",
        "TEXCOMPILE_POLL_INTERVAL_SECONDS",
        "TEXCOMPILE_MAX_POLL_ATTEMPTS",
    ):
        monkeypatch.delenv(name, raising=False)
