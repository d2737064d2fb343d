from __future__ import annotations

import re
from datetime import date, time

from ..core.exceptions import InvalidFormatError
from .datetime_utils import parse_iso_date

_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")
_TIME_RE = re.compile(r"^([01]\d|2[0-3]):([0-5]\d)$")


def require_non_empty(value: str | None, field_name: str) -> str:
    if value is None or not str(value).strip():
        raise InvalidFormatError(f"{field_name} is required")
    return str(value).strip()


def require_iso_date(value: str | date | None, field_name: str = "Date") -> date:
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not _DATE_RE.match(value):
        raise InvalidFormatError(f"{field_name} must be in YYYY-MM-DD format")
    try:
        return parse_iso_date(value)
    except ValueError as exc:
        raise InvalidFormatError(f"{field_name} is not a valid calendar date") from exc


def require_hhmm(value: str | time | None, field_name: str) -> time:
    if isinstance(value, time):
        return value.replace(second=0, microsecond=0)
    m = _TIME_RE.match(value) if isinstance(value, str) else None
    if not m:
        raise InvalidFormatError(f"{field_name} must be in HH:mm format (24-hour)")
    return time(hour=int(m.group(1)), minute=int(m.group(2)))
