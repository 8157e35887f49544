"""Convenience methods that chain Object Storage calls with waiters."""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from cloud_sdk.object_storage.client import ObjectStorageClient
from cloud_sdk.object_storage.models import CopyObjectDetails
from cloud_sdk.response import Response
from cloud_sdk.waiter import wait_for_state

logger = logging.getLogger(__name__)

DEFAULT_MAX_INTERVAL_SECONDS = 30
DEFAULT_MAX_WAIT_SECONDS = 1200

_WAITER_OPTIONS = frozenset(
    {"max_interval_seconds", "max_wait_seconds", "initial_interval_seconds", "cancel_event"}
)


def _waiter_options(waiter_kwargs: Mapping[str, Any] | None) -> dict[str, Any]:
    options = dict(waiter_kwargs or {})
    unknown = set(options) - _WAITER_OPTIONS
    if unknown:
        raise TypeError(f"Unsupported waiter options: {sorted(unknown)}")
    options.setdefault("max_interval_seconds", DEFAULT_MAX_INTERVAL_SECONDS)
    options.setdefault("max_wait_seconds", DEFAULT_MAX_WAIT_SECONDS)
    return options


class ObjectStorageClientCompositeOperations:
    """Wraps an ``ObjectStorageClient`` with submit-and-wait methods.

    Instead of starting an operation and then polling its work request by hand,
    call one method here and get back the work request once it reaches one of
    the requested states.
    """

    def __init__(self, client: ObjectStorageClient | None = None) -> None:
        self.client = client if client is not None else ObjectStorageClient()

    def copy_object_and_wait_for_state(
        self,
        namespace_name: str,
        bucket_name: str,
        copy_object_details: CopyObjectDetails,
        wait_for_states: Iterable[str] = (),
        operation_kwargs: Mapping[str, Any] | None = None,
        waiter_kwargs: Mapping[str, Any] | None = None,
    ) -> Response:
        """Copy an object and wait for its work request to reach a state.

        Args:
            wait_for_states: Work request statuses to wait for, e.g.
                ``["COMPLETED", "FAILED"]``. When empty, the copy response is
                returned without waiting.
            operation_kwargs: Extra keyword arguments for ``copy_object``.
            waiter_kwargs: ``max_interval_seconds`` (default 30),
                ``max_wait_seconds`` (default 1200), ``initial_interval_seconds``
                and ``cancel_event``.

        Returns:
            The ``get_work_request`` response whose status matched, or the
            ``copy_object`` response when no states were requested.

        Raises:
            CompositeOperationError: the copy or the wait failed; the copy
                response is in ``partial_results`` when it succeeded.
        """
        options = _waiter_options(waiter_kwargs)
        states = list(wait_for_states)
        logger.debug(
            "copy_object %s/%s, waiting for %s", namespace_name, bucket_name, states or "nothing"
        )
        return wait_for_state(
            lambda: self.client.copy_object(
                namespace_name,
                bucket_name,
                copy_object_details,
                **dict(operation_kwargs or {}),
            ),
            self.client.get_work_request,
            states,
            **options,
        )
