from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta
from typing import Any, Optional

_ISO_DATE = re.compile(r"[0-9]{4}-[0-9]{2}-[0-9]{2}")


def parse_iso_date(value: str) -> date:
    """Parse a strict YYYY-MM-DD string into date."""
    if not _ISO_DATE.fullmatch(value):
        raise ValueError(f"Invalid ISO date: {value!r}")
    return datetime.strptime(value, "%Y-%m-%d").date()


def format_iso_date(value: date) -> str:
    return value.strftime("%Y-%m-%d")


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def normalize_date(value: Any) -> Optional[date]:
    """Accept date, datetime or an ISO string (time part ignored)."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return parse_iso_date(value.strip()[:10])
    raise TypeError(f"Unsupported date value type: {type(value)!r}")


def normalize_time(value: Any) -> Optional[time]:
    """Normalize TIME values across connector implementations.

    mysql-connector can return TIME as:
    - datetime.time
    - datetime.timedelta
    - string (e.g. '08:30:00')
    """

    if value is None or value == "":
        return None

    if isinstance(value, datetime):
        return value.time()

    if isinstance(value, time):
        return value

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds()) % 86400
        hours = total_seconds // 3600
        minutes = (total_seconds % 3600) // 60
        seconds = total_seconds % 60
        return time(hour=hours, minute=minutes, second=seconds)

    if isinstance(value, str):
        parts = value.strip().split(":")
        if len(parts) < 2:
            raise ValueError(f"Invalid time string: {value!r}")
        hours = int(parts[0])
        minutes = int(parts[1])
        seconds = int(parts[2]) if len(parts) >= 3 and parts[2] else 0
        return time(hour=hours, minute=minutes, second=seconds)

    raise TypeError(f"Unsupported TIME value type: {type(value)!r}")


def _naive(value: datetime) -> datetime:
    # Aware values are shifted to local time so they sort against naive DATETIME columns.
    if value.tzinfo is None:
        return value
    return value.astimezone().replace(tzinfo=None)


def normalize_datetime(value: Any) -> Optional[datetime]:
    """Naive local datetime from a datetime, date or ISO string (offsets allowed)."""

    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return _naive(value)
    if isinstance(value, date):
        return datetime.combine(value, time())
    if isinstance(value, str):
        text = value.strip().replace("T", " ")
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return _naive(datetime.fromisoformat(text))
    raise TypeError(f"Unsupported datetime value type: {type(value)!r}")
