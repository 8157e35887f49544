"""Primitive type coercion for decoded payload values.

Each coercer accepts the loosely typed JSON value found under a wire key and
either returns the declared Python type or raises ``ValueError`` naming the
attribute path.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date, datetime, timezone

_TRUE_STRINGS = frozenset({"true", "t", "yes", "y", "1", "on"})
_FALSE_STRINGS = frozenset({"false", "f", "no", "n", "0", "off"})


def _mismatch(expected: str, value: object, path: str) -> ValueError:
    return ValueError(f"{path}: expected {expected}, got {type(value).__name__} {value!r}")


def _coerce_string(value: object, path: str) -> str:
    if isinstance(value, str):
        return value
    if isinstance(value, bool):
        return str(value).lower()
    if isinstance(value, (int, float)):
        return str(value)
    raise _mismatch("string", value, path)


def _coerce_integer(value: object, path: str) -> int:
    # bool is an int subclass; reject it explicitly
    if isinstance(value, int) and not isinstance(value, bool):
        return value
    if isinstance(value, float) and value.is_integer():
        return int(value)
    if isinstance(value, str):
        try:
            return int(value.strip())
        except ValueError:
            pass
    raise _mismatch("integer", value, path)


def _coerce_float(value: object, path: str) -> float:
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            pass
    raise _mismatch("number", value, path)


def _coerce_boolean(value: object, path: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, (int, float)):
        return bool(value)
    if isinstance(value, str):
        word = value.strip().lower()
        if word in _TRUE_STRINGS:
            return True
        if word in _FALSE_STRINGS:
            return False
    raise _mismatch("boolean", value, path)


def _coerce_timestamp(value: object, path: str) -> datetime:
    """Accept an RFC 3339 string or a unix epoch number (UTC)."""
    if isinstance(value, datetime):
        return value
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        try:
            return datetime.fromtimestamp(value, tz=timezone.utc)
        except (OSError, OverflowError, ValueError) as exc:
            raise _mismatch("timestamp", value, path) from exc
    if isinstance(value, str):
        try:
            # RFC 3339 allows lowercase "t" and "z"
            return datetime.fromisoformat(value.strip().upper())
        except ValueError as exc:
            raise _mismatch("ISO 8601 timestamp", value, path) from exc
    raise _mismatch("timestamp", value, path)


def _coerce_date(value: object, path: str) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        try:
            return date.fromisoformat(value.strip())
        except ValueError as exc:
            raise _mismatch("ISO 8601 date", value, path) from exc
    raise _mismatch("date", value, path)


PRIMITIVE_COERCERS: dict[type, Callable[[object, str], object]] = {
    str: _coerce_string,
    int: _coerce_integer,
    float: _coerce_float,
    bool: _coerce_boolean,
    datetime: _coerce_timestamp,
    date: _coerce_date,
}


def coerce_primitive(python_type: type, value: object, path: str) -> object:
    coercer = PRIMITIVE_COERCERS.get(python_type)
    if coercer is None:
        return value
    return coercer(value, path)
