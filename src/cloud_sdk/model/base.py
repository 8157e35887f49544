"""Base class for every service record."""

from __future__ import annotations

import json
from collections.abc import Mapping
from functools import lru_cache
from typing import Any, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from cloud_sdk.model.codec import decode, encode, freeze
from cloud_sdk.model.schema import FieldSpec, build_schema
from cloud_sdk.utils.serialization import json_default


def wire(key: str, **kwargs: Any) -> Any:
    """Declare an optional attribute carried under the wire key ``key``."""
    return Field(default=None, alias=key, **kwargs)


@lru_cache(maxsize=None)
def _specs_by_name(model_cls: type[BaseModel]) -> dict[str, FieldSpec]:
    return {spec.name: spec for spec in build_schema(model_cls)}


class Model(BaseModel):
    """A record mirroring a service JSON schema.

    Attributes may be passed to the constructor under their snake_case name or
    their wire key, but not both. Every attribute tracks whether it has been
    assigned, so ``to_dict()`` can tell "never set" apart from "set to None".
    Equality and hashing are structural over all declared attributes.
    """

    model_config = ConfigDict(
        populate_by_name=True,
        validate_assignment=True,
        extra="ignore",
    )

    @model_validator(mode="before")
    @classmethod
    def _reject_conflicting_keys(cls, data: Any) -> Any:
        if isinstance(data, Mapping):
            for spec in build_schema(cls):
                if spec.has_alias and spec.wire_key in data and spec.name in data:
                    raise ValueError(f"You cannot provide both {spec.wire_key} and {spec.name}")
        return data

    @field_validator("*", mode="before")
    @classmethod
    def _coerce_enum_values(cls, value: Any, info: ValidationInfo) -> Any:
        spec = _specs_by_name(cls).get(info.field_name or "")
        if spec is None or value is None:
            return value
        if spec.type.kind == "enum":
            return spec.type.python_type.coerce(value, field_name=spec.name)
        item = spec.type.item
        if spec.type.kind == "list" and item is not None and item.kind == "enum":
            if isinstance(value, (list, tuple)):
                return [item.python_type.coerce(entry, field_name=spec.name) for entry in value]
        return value

    @classmethod
    def from_dict(cls, data: object) -> Self | None:
        return decode(data, cls)

    @classmethod
    def field_specs(cls) -> tuple[FieldSpec, ...]:
        return build_schema(cls)

    @classmethod
    def attribute_map(cls) -> dict[str, str]:
        """Attribute mapping from local name to wire key."""
        return {spec.name: spec.wire_key for spec in build_schema(cls)}

    def to_dict(self) -> dict[str, object]:
        return encode(self)

    def to_json(self, **kwargs: Any) -> str:
        return json.dumps(self.to_dict(), default=json_default, **kwargs)

    def is_set(self, name: str) -> bool:
        if name not in type(self).model_fields:
            raise AttributeError(f"{type(self).__name__} has no attribute '{name}'")
        return name in self.model_fields_set

    def _attribute_values(self) -> tuple[object, ...]:
        return tuple(getattr(self, spec.name) for spec in build_schema(type(self)))

    def __eq__(self, other: object) -> bool:
        if self is other:
            return True
        if not isinstance(other, Model):
            return NotImplemented
        return type(self) is type(other) and self._attribute_values() == other._attribute_values()

    def __hash__(self) -> int:
        return hash(freeze(self._attribute_values()))
