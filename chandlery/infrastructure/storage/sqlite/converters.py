"""Column conversions shared by the SQLite stores."""

from datetime import UTC, date, datetime
from decimal import Decimal, InvalidOperation
from typing import Any


def decimal_to_db(value: Decimal | None) -> str | None:
    """Canonical fixed-point text, so no precision is lost in REAL columns."""
    if value is None:
        return None
    return format(value, "f")


def decimal_from_db(value: Any) -> Decimal:
    if value is None or value == "":
        return Decimal("0")
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"Corrupt decimal column value: {value!r}") from None


def datetime_to_db(value: datetime) -> str:
    if value.tzinfo is None:
        value = value.replace(tzinfo=UTC)
    return value.astimezone(UTC).isoformat(timespec="microseconds")


def datetime_from_db(value: Any) -> datetime:
    """Parse stored timestamps; SQLite's datetime('now') has no zone and is UTC."""
    if not value:
        raise ValueError(f"Missing timestamp column value: {value!r}")
    try:
        parsed = datetime.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"Corrupt timestamp column value: {value!r}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def date_to_db(value: date | None) -> str | None:
    return value.isoformat() if value else None


def date_from_db(value: Any) -> date | None:
    if value is None or value == "":
        return None
    try:
        return date.fromisoformat(str(value))
    except ValueError:
        raise ValueError(f"Corrupt date column value: {value!r}") from None
