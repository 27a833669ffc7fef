"""Field converters shared by the ``from_dict`` constructors."""

from __future__ import annotations

from datetime import datetime, timezone
from typing import Any


def parse_timestamp(value: Any) -> datetime:
    """Parse an ISO-8601 string (``Z`` = UTC) or epoch milliseconds."""
    if isinstance(value, datetime):
        return _aware(value)
    if isinstance(value, bool):
        raise TypeError(f"Invalid timestamp: {value!r}")
    if isinstance(value, (int, float)):
        return datetime.fromtimestamp(value / 1000, tz=timezone.utc)
    if isinstance(value, str):
        text = value.strip()
        if text.endswith("Z"):
            text = text[:-1] + "+00:00"
        return _aware(datetime.fromisoformat(text))
    raise TypeError(f"Invalid timestamp: {value!r}")


def _aware(value: datetime) -> datetime:
    # naive backend timestamps are UTC
    return value if value.tzinfo is not None else value.replace(tzinfo=timezone.utc)


def to_float(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Expected a number, got {value!r}")
    return float(value)


def opt_float(value: Any) -> float | None:
    return None if value is None else to_float(value)


def opt_str(value: Any) -> str | None:
    return None if value is None else str(value)


def str_tuple(value: Any) -> tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str) or not isinstance(value, (list, tuple)):
        raise TypeError(f"Expected a list of strings, got {value!r}")
    return tuple(str(v) for v in value)


def record_list(value: Any) -> list[dict[str, Any]]:
    if value is None:
        return []
    if not isinstance(value, list):
        raise TypeError(f"Expected a list of records, got {type(value).__name__}")
    return value
