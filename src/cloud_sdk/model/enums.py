"""Closed enumerations that tolerate values added by newer service versions."""

from __future__ import annotations

import logging
from enum import Enum

logger = logging.getLogger(__name__)

UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class WireEnum(str, Enum):
    """Base class for enumerations carried on the wire as strings.

    Subclasses must declare an ``UNKNOWN_ENUM_VALUE`` member. It is what an
    unrecognized wire value turns into, so a payload from a newer service build
    still decodes.
    """

    def __str__(self) -> str:
        return self.value

    @classmethod
    def coerce(cls, value: object, field_name: str | None = None) -> WireEnum | None:
        if value is None or isinstance(value, cls):
            return value  # type: ignore[return-value]
        if isinstance(value, Enum):
            value = value.value
        try:
            return cls(value)
        except ValueError:
            logger.debug(
                "Unknown value for '%s' [%s]. Mapping to '%s'",
                field_name or cls.__name__,
                value,
                UNKNOWN_ENUM_VALUE,
            )
            return cls.unknown()

    @classmethod
    def unknown(cls) -> WireEnum:
        return cls(UNKNOWN_ENUM_VALUE)

    @classmethod
    def known_values(cls) -> tuple[str, ...]:
        return tuple(member.value for member in cls if member.value != UNKNOWN_ENUM_VALUE)
