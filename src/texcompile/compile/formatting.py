"""Human-readable durations for progress output."""

from __future__ import annotations

UNKNOWN_DURATION = "неизвестно"

_SECONDS_PER_MINUTE = 60
_MINUTES_PER_HOUR = 60


def format_milliseconds(ms: int) -> str:
    """Render ``ms`` as seconds, minutes+seconds, or hours+minutes."""

    seconds = ms // 1000
    if seconds < _SECONDS_PER_MINUTE:
        return f"{seconds} сек."
    minutes, remaining_seconds = divmod(seconds, _SECONDS_PER_MINUTE)
    if minutes < _MINUTES_PER_HOUR:
        return f"{minutes} мин. {remaining_seconds} сек."
    hours, remaining_minutes = divmod(minutes, _MINUTES_PER_HOUR)
    return f"{hours} ч. {remaining_minutes} м."


def format_duration(ms: int | None) -> str:
    if ms is None:
        return UNKNOWN_DURATION
    return format_milliseconds(ms)
