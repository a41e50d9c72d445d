from __future__ import annotations

import allure
import pytest

from texcompile.config import DEFAULT_BASE_URL, PollSettings, ServiceSettings, Settings

pytestmark = [
    allure.epic("Remote Compilation"),
    allure.feature("Configuration"),
]


def test_defaults_match_public_service() -> None:
    settings = Settings.from_env()

    assert settings.service.base_url == DEFAULT_BASE_URL
    assert settings.service.request_timeout_seconds == 600.0
    assert settings.poll.interval_seconds == 5.0
    assert settings.poll.max_attempts == 120
    settings.validate()


def test_from_env_reads_overrides(monkeypatch) -> None:
    monkeypatch.setenv("TEXCOMPILE_BASE_URL", "http://localhost:8080/")
    monkeypatch.setenv("TEXCOMPILE_POLL_INTERVAL_SECONDS", "0.5")
    monkeypatch.setenv("TEXCOMPILE_MAX_POLL_ATTEMPTS", "7")
    monkeypatch.setenv("TEXCOMPILE_CONNECT_RETRIES", "0")

    settings = Settings.from_env()

    assert settings.service.base_url == "http://localhost:8080"
    assert settings.service.connect_retries == 0
    assert settings.poll == PollSettings(interval_seconds=0.5, max_attempts=7)


def test_with_overrides_prefers_explicit_values() -> None:
    settings = Settings().with_overrides(
        base_url="https://compile.example.com/",
        max_attempts=3,
    )

    assert settings.service.base_url == "https://compile.example.com"
    assert settings.poll.max_attempts == 3
    assert settings.poll.interval_seconds == 5.0


def test_with_overrides_keeps_values_when_none_given() -> None:
    original = Settings()
    assert original.with_overrides() == original


def test_validate_rejects_non_http_base_url() -> None:
    settings = Settings(service=ServiceSettings(base_url="ftp://texcompile.ru"))

    with pytest.raises(ValueError, match="Invalid service base URL"):
        settings.validate()


@pytest.mark.parametrize(
    ("settings", "match"),
    [
        (Settings(poll=PollSettings(max_attempts=0)), "MAX_POLL_ATTEMPTS"),
        (Settings(poll=PollSettings(interval_seconds=-1)), "POLL_INTERVAL_SECONDS"),
        (Settings(service=ServiceSettings(request_timeout_seconds=0)), "REQUEST_TIMEOUT"),
        (Settings(service=ServiceSettings(connect_retries=-1)), "CONNECT_RETRIES"),
    ],
)
def test_validate_rejects_out_of_range_values(settings: Settings, match: str) -> None:
    with pytest.raises(ValueError, match=match):
        settings.validate()


@pytest.mark.parametrize(
    ("name", "value"),
    [
        ("TEXCOMPILE_POLL_INTERVAL_SECONDS", "abc"),
        ("TEXCOMPILE_REQUEST_TIMEOUT_SECONDS", "ten"),
        ("TEXCOMPILE_MAX_POLL_ATTEMPTS", "1.5"),
        ("TEXCOMPILE_CONNECT_RETRIES", "many"),
    ],
)
def test_from_env_names_variable_with_invalid_number(monkeypatch, name: str, value: str) -> None:
    monkeypatch.setenv(name, value)

    with pytest.raises(ValueError, match=name):
        Settings.from_env()
