"""JSON encoding for request bodies and ``Model.to_json``."""

from __future__ import annotations

import base64
import datetime
import decimal
from enum import Enum


def _decimal_value(value: decimal.Decimal) -> object:
    if value == value.to_integral_value():
        return int(value)
    as_float = float(value)
    # Keep the exact digits when a float would round them.
    if decimal.Decimal(str(as_float)) != value:
        return str(value)
    return as_float


def json_default(obj: object) -> object:
    """``default=`` hook for ``json.dumps``.

    Records are emitted in wire form, timestamps as ISO 8601 and enum members
    as their wire value. Anything else unknown falls back to ``str()``.
    """
    to_dict = getattr(obj, "to_dict", None)
    if callable(to_dict):
        return to_dict()
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, (datetime.date, datetime.datetime)):
        return obj.isoformat()
    if isinstance(obj, decimal.Decimal):
        return _decimal_value(obj)
    if isinstance(obj, bytes):
        return base64.b64encode(obj).decode("ascii")
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    return str(obj)
