from __future__ import annotations

import os
from collections.abc import Iterator

import pytest

from cloud_sdk.config import _load_settings_cached
from cloud_sdk.execution.http_client import clear_client_cache


def pytest_sessionstart(session: pytest.Session) -> None:
    # Clients built without an explicit endpoint need a region.
    os.environ.setdefault("SDK_REGION", "us-phoenix-1")


@pytest.fixture(autouse=True)
def _fresh_settings() -> Iterator[None]:
    _load_settings_cached.cache_clear()
    yield
    _load_settings_cached.cache_clear()
    clear_client_cache()
