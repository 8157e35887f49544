"""Service call results."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

WORK_REQUEST_ID_HEADER = "opc-work-request-id"
REQUEST_ID_HEADER = "opc-request-id"
NEXT_PAGE_HEADER = "opc-next-page"


@dataclass
class Response:
    status: int
    headers: Mapping[str, str] = field(default_factory=dict)
    data: Any = None
    request_id: str | None = None

    def header(self, name: str) -> str | None:
        target = name.lower()
        for key, value in self.headers.items():
            if key.lower() == target:
                return value
        return None

    @property
    def work_request_id(self) -> str | None:
        return self.header(WORK_REQUEST_ID_HEADER)

    @property
    def next_page(self) -> str | None:
        return self.header(NEXT_PAGE_HEADER)
