"""UTC-focused helpers for run metadata and record timestamps."""

from __future__ import annotations

from datetime import date, datetime, timezone

from vaketracker.common.errors import ConfigError


def utc_timestamp_iso() -> str:
    return datetime.now(tz=timezone.utc).isoformat(timespec="milliseconds")


def parse_date(value: str | None) -> date | None:
    if not value:
        return None
    try:
        return date.fromisoformat(value)
    except ValueError as exc:
        raise ConfigError(f"Invalid date {value!r}, expected YYYY-MM-DD") from exc


def parse_timestamp(value: object) -> datetime | None:
    """Parse a store timestamp such as ``2025-08-07T14:02:11.123+00:00``.

    Naive values are taken as UTC. Unparseable input yields None.
    """
    if not isinstance(value, str) or not value.strip():
        return None
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed
