"""Schema-driven conversion between JSON-like payloads and model records.

Decoding never fails on payload content: absent keys, shape mismatches and
values that cannot be coerced to the declared type leave the attribute unset.
An explicit ``null`` is kept as an explicit ``None`` so that encoding the record
again emits the key with a null value.
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from enum import Enum
from typing import Any, TypeVar

from pydantic import BaseModel

from cloud_sdk.model._coercion import coerce_primitive
from cloud_sdk.model.schema import TypeSpec, build_schema

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

_MAX_DECODE_DEPTH = 30


class _Skip:
    def __repr__(self) -> str:
        return "<skip>"


_SKIP: Any = _Skip()


def decode(data: object, model_cls: type[ModelT], depth: int = 0) -> ModelT | None:
    """Build a ``model_cls`` record from a wire-keyed mapping.

    Returns ``None`` when ``data`` is not a mapping.
    """
    if not isinstance(data, Mapping):
        return None

    values: dict[str, object] = {}
    for spec in build_schema(model_cls):
        if spec.wire_key not in data:
            continue
        raw = data[spec.wire_key]
        if raw is None:
            values[spec.name] = None
            continue
        decoded = _decode_value(spec.type, raw, f"{model_cls.__name__}.{spec.name}", depth)
        if decoded is _SKIP:
            continue
        values[spec.name] = decoded

    return model_cls.model_construct(_fields_set=set(values), **values)


def _decode_value(type_spec: TypeSpec, value: object, path: str, depth: int) -> object:
    if depth >= _MAX_DECODE_DEPTH:
        logger.debug("Maximum decode depth reached at '%s'", path)
        return _SKIP

    if type_spec.kind == "primitive":
        try:
            return coerce_primitive(type_spec.python_type, value, path)
        except ValueError as exc:
            logger.debug("Skipping '%s': %s", path, exc)
            return _SKIP

    if type_spec.kind == "enum":
        return type_spec.python_type.coerce(value, field_name=path)

    if type_spec.kind == "model":
        if not isinstance(value, Mapping):
            logger.debug("Skipping '%s': expected an object, got %s", path, type(value).__name__)
            return _SKIP
        return decode(value, type_spec.python_type, depth + 1)

    if type_spec.kind == "list":
        if not isinstance(value, (list, tuple)):
            logger.debug("Skipping '%s': expected a list, got %s", path, type(value).__name__)
            return _SKIP
        return [
            _decode_item(type_spec.item, item, f"{path}[{index}]", depth + 1)
            for index, item in enumerate(value)
        ]

    if type_spec.kind == "dict":
        if not isinstance(value, Mapping):
            logger.debug("Skipping '%s': expected a map, got %s", path, type(value).__name__)
            return _SKIP
        return {
            str(key): _decode_item(type_spec.item, item, f"{path}.{key}", depth + 1)
            for key, item in value.items()
        }

    return value


def _decode_item(type_spec: TypeSpec | None, value: object, path: str, depth: int) -> object:
    if value is None or type_spec is None:
        return value
    decoded = _decode_value(type_spec, value, path, depth)
    return None if decoded is _SKIP else decoded


def encode(record: BaseModel) -> dict[str, object]:
    """Return the wire-keyed mapping for ``record``.

    Attributes that were never assigned are omitted; attributes assigned
    ``None`` are emitted as ``None``.
    """
    fields_set = record.model_fields_set
    result: dict[str, object] = {}
    for spec in build_schema(type(record)):
        if spec.name not in fields_set:
            continue
        result[spec.wire_key] = _encode_value(getattr(record, spec.name))
    return result


def _encode_value(value: object) -> object:
    if isinstance(value, BaseModel):
        return encode(value)
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, (list, tuple)):
        return [_encode_value(item) for item in value]
    if isinstance(value, Mapping):
        return {key: _encode_value(item) for key, item in value.items()}
    return value


def freeze(value: object) -> object:
    """Convert nested lists and dicts into hashable equivalents."""
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    if isinstance(value, Mapping):
        return frozenset((key, freeze(item)) for key, item in value.items())
    if isinstance(value, set):
        return frozenset(freeze(item) for item in value)
    return value
