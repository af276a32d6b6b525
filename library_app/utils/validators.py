from __future__ import annotations

from datetime import date, datetime
from typing import Any, Iterable

from library_app.errors import ValidationError


def require(data: dict, fields: Iterable[str]) -> None:
    missing = [f for f in fields if data.get(f) in (None, "")]
    if missing:
        raise ValidationError(f"Missing required field(s): {', '.join(missing)}")


def parse_int(value: Any, field: str, *, optional: bool = False, minimum: int | None = None) -> int | None:
    if value is None or value == "":
        if optional:
            return None
        raise ValidationError(f"{field} is required")
    # bool is an int subclass; "true" is not a count
    if isinstance(value, bool):
        raise ValidationError(f"{field} must be an integer")
    if isinstance(value, float) and not value.is_integer():
        raise ValidationError(f"{field} must be an integer")
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValidationError(f"{field} must be an integer")
    if minimum is not None and number < minimum:
        raise ValidationError(f"{field} must be >= {minimum}")
    return number


def parse_date(value: Any, field: str, *, optional: bool = False) -> date | None:
    if value is None or value == "":
        if optional:
            return None
        raise ValidationError(f"{field} is required")
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    try:
        # accepts "2024-01-01" and full ISO timestamps
        return datetime.fromisoformat(str(value).strip()).date()
    except ValueError:
        raise ValidationError(f"{field} must be an ISO date (YYYY-MM-DD)")


def clean_str(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def iso(value) -> str | None:
    return value.isoformat() if value is not None else None
