"""Generic record machinery shared by every service model."""

from cloud_sdk.model.base import Model, wire
from cloud_sdk.model.codec import decode, encode
from cloud_sdk.model.enums import UNKNOWN_ENUM_VALUE, WireEnum
from cloud_sdk.model.schema import FieldSpec, TypeSpec, build_schema, type_spec_for

__all__ = [
    "UNKNOWN_ENUM_VALUE",
    "FieldSpec",
    "Model",
    "TypeSpec",
    "WireEnum",
    "build_schema",
    "decode",
    "encode",
    "type_spec_for",
    "wire",
]
