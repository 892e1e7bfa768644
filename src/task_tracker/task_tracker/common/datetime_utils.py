from __future__ import annotations

from datetime import datetime, timezone
from typing import Optional

from ..core.constants import DAY_KEY_FORMAT


def now_utc() -> datetime:
    """Current UTC time as a naive datetime (the way it is stored in MySQL).

    Note: Wrapped so tests can patch/mock easier.
    """
    return datetime.now(timezone.utc).replace(tzinfo=None)


def day_key(moment: datetime) -> str:
    """Calendar day bucket used by the time ledger (YYYY-MM-DD)."""
    return moment.strftime(DAY_KEY_FORMAT)


def hours_between(start: datetime, end: datetime) -> float:
    return (end - start).total_seconds() / 3600


def parse_iso_datetime(value: str) -> datetime:
    """Parse a date or datetime string sent by the client.

    Accepts `2026-03-01`, `2026-03-01T09:30` and the JavaScript
    `toISOString()` form with a trailing `Z`. Aware values are converted to
    naive UTC.
    """
    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    parsed = datetime.fromisoformat(text)
    if parsed.tzinfo is not None:
        parsed = parsed.astimezone(timezone.utc).replace(tzinfo=None)
    return parsed


def to_iso(value: Optional[datetime]) -> Optional[str]:
    """Render a naive UTC datetime as `2026-03-01T09:30:00.000Z`."""
    if value is None:
        return None
    return value.isoformat(timespec="milliseconds") + "Z"
