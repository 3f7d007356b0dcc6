from __future__ import annotations

from datetime import date, datetime
from typing import Union

from ..core.constants import MAX_BREAK_AT, MIN_BREAK_AT
from ..core.enums import Half
from ..core.exceptions import ValidationError

DateLike = Union[date, str]


def require_date(value: DateLike, field_name: str = "date") -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        return datetime.strptime(str(value or "").strip(), "%Y-%m-%d").date()
    except ValueError:
        raise ValidationError(f"Invalid {field_name} format. Use YYYY-MM-DD")


def require_date_range(start: DateLike, end: DateLike) -> tuple[date, date]:
    start_d = require_date(start, "start date")
    end_d = require_date(end, "end date")
    if start_d > end_d:
        raise ValidationError("Start date must be before or equal to end date")
    return start_d, end_d


def require_int(value, field_name: str) -> int:
    try:
        return int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field_name} must be an integer")


def require_break_at(value) -> int:
    break_at = require_int(value, "breakAt")
    if not MIN_BREAK_AT <= break_at <= MAX_BREAK_AT:
        raise ValidationError(f"breakAt must be between {MIN_BREAK_AT} and {MAX_BREAK_AT}")
    return break_at


def require_year(value) -> int:
    year = require_int(value, "year")
    if not 1900 <= year <= 9999:
        raise ValidationError("year is out of range")
    return year


def require_month(value) -> int:
    month = require_int(value, "month")
    if not 1 <= month <= 12:
        raise ValidationError("month must be between 1 and 12")
    return month


def require_half(value) -> Half:
    half = require_int(value, "half")
    try:
        return Half(half)
    except ValueError:
        raise ValidationError("half must be 1 or 2")


def require_school_id(value) -> str:
    school_id = str(value or "").strip()
    if not school_id:
        raise ValidationError("school id is required")
    return school_id
