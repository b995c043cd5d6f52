from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import MissingParameterError, ValidationError
from .datetime_utils import parse_iso_date


def require_iso_date(value: Optional[str], field_name: str) -> date:
    if value is None or not value.strip():
        raise MissingParameterError(field_name)
    try:
        return parse_iso_date(value.strip())
    except ValueError:
        raise ValidationError(f"{field_name} must be in YYYY-MM-DD format")


def require_date_range(start: date, end: date) -> None:
    if start > end:
        raise ValidationError("startDate must not be after endDate")


def optional_iso_date(value: Optional[str], field_name: str) -> Optional[date]:
    if value is None or not value.strip():
        return None
    return require_iso_date(value, field_name)


def positive_int(value: Optional[str], field_name: str, *, default: int) -> int:
    if value is None or not value.strip():
        return default
    text = value.strip()
    if not (text.isascii() and text.isdigit()) or int(text) < 1:
        raise ValidationError(f"{field_name} must be a positive integer")
    return int(text)
