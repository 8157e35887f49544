"""Per-record schema descriptors derived from model field declarations."""

from __future__ import annotations

import types
from dataclasses import dataclass
from datetime import date, datetime
from functools import lru_cache
from typing import Any, Literal, Union, get_args, get_origin

from pydantic import BaseModel

from cloud_sdk.model.enums import WireEnum

TypeKind = Literal["primitive", "enum", "model", "list", "dict", "any"]

PRIMITIVE_TYPES: tuple[type, ...] = (str, int, float, bool, datetime, date)


@dataclass(frozen=True)
class TypeSpec:
    kind: TypeKind
    python_type: Any = None
    item: TypeSpec | None = None

    def describe(self) -> str:
        if self.kind == "list":
            return f"list[{self.item.describe() if self.item else 'Any'}]"
        if self.kind == "dict":
            return f"dict[str, {self.item.describe() if self.item else 'Any'}]"
        if self.python_type is None:
            return "Any"
        return self.python_type.__name__


ANY = TypeSpec(kind="any")


@dataclass(frozen=True)
class FieldSpec:
    name: str
    wire_key: str
    type: TypeSpec

    @property
    def has_alias(self) -> bool:
        return self.wire_key != self.name


def type_spec_for(annotation: Any) -> TypeSpec:
    """Translate a resolved field annotation into a ``TypeSpec``.

    ``X | None`` is unwrapped to ``X``; optionality is tracked by the record,
    not the type. Unions of several concrete types fall back to ``any``.
    """
    origin = get_origin(annotation)
    if origin is Union or origin is types.UnionType:
        args = [arg for arg in get_args(annotation) if arg is not type(None)]
        if len(args) == 1:
            return type_spec_for(args[0])
        return ANY

    if origin is list:
        args = get_args(annotation)
        return TypeSpec(kind="list", python_type=list, item=type_spec_for(args[0]) if args else ANY)

    if origin is dict:
        args = get_args(annotation)
        return TypeSpec(
            kind="dict",
            python_type=dict,
            item=type_spec_for(args[1]) if len(args) == 2 else ANY,
        )

    if annotation is Any or annotation is object or not isinstance(annotation, type):
        return ANY
    if issubclass(annotation, WireEnum):
        return TypeSpec(kind="enum", python_type=annotation)
    if issubclass(annotation, BaseModel):
        return TypeSpec(kind="model", python_type=annotation)
    if annotation in PRIMITIVE_TYPES:
        return TypeSpec(kind="primitive", python_type=annotation)
    return ANY


@lru_cache(maxsize=None)
def build_schema(model_cls: type[BaseModel]) -> tuple[FieldSpec, ...]:
    """Return the field specs of ``model_cls`` in declaration order."""
    if not model_cls.__pydantic_complete__:
        model_cls.model_rebuild()

    return tuple(
        FieldSpec(name=name, wire_key=info.alias or name, type=type_spec_for(info.annotation))
        for name, info in model_cls.model_fields.items()
    )
