"""Waiters that turn fire-and-poll operations into a single blocking call.

``wait_until`` polls a status read until a predicate holds or the wait budget is
spent. ``wait_for_state`` chains a submission with such a wait on the
submission's work request and reports any failure as a
``CompositeOperationError`` carrying the results obtained so far.
"""

from __future__ import annotations

import asyncio
import logging
import threading
import time
from collections.abc import Awaitable, Callable, Iterable, Mapping
from typing import Any, TypeVar

from cloud_sdk.config import load_settings
from cloud_sdk.errors import (
    CompositeOperationError,
    MaximumWaitTimeExceededError,
    WaitCancelledError,
)
from cloud_sdk.response import Response

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _resolve_budget(
    max_interval_seconds: float | None,
    max_wait_seconds: float | None,
    initial_interval_seconds: float | None,
) -> tuple[float, float, float]:
    """Fill unset budgets from the waiter settings and reject invalid ones."""
    settings = load_settings().waiter
    max_interval = (
        settings.max_interval_seconds if max_interval_seconds is None else max_interval_seconds
    )
    max_wait = settings.max_wait_seconds if max_wait_seconds is None else max_wait_seconds
    initial = (
        settings.initial_interval_seconds
        if initial_interval_seconds is None
        else initial_interval_seconds
    )
    if max_interval <= 0:
        raise ValueError("max_interval_seconds must be positive")
    if max_wait < 0:
        raise ValueError("max_wait_seconds must not be negative")
    return max_interval, max_wait, initial


class _Backoff:
    """Capped exponential delays bounded by an overall wait budget."""

    def __init__(
        self,
        max_interval_seconds: float | None,
        max_wait_seconds: float | None,
        initial_interval_seconds: float | None,
    ) -> None:
        self.max_interval, self.max_wait, initial = _resolve_budget(
            max_interval_seconds, max_wait_seconds, initial_interval_seconds
        )
        self.interval = min(initial, self.max_interval)
        self.started = time.monotonic()
        self.attempts = 0

    def elapsed(self) -> float:
        return time.monotonic() - self.started

    def next_delay(self) -> float | None:
        """Return how long to sleep before the next poll, or None once out of budget."""
        remaining = self.max_wait - self.elapsed()
        if remaining <= 0:
            return None
        delay = min(self.interval, remaining)
        self.interval = min(self.interval * 2, self.max_interval)
        return delay


def wait_until(
    fetch: Callable[[], T],
    predicate: Callable[[T], bool],
    *,
    max_interval_seconds: float | None = None,
    max_wait_seconds: float | None = None,
    initial_interval_seconds: float | None = None,
    cancel_event: threading.Event | None = None,
) -> T:
    """Call ``fetch`` until ``predicate`` accepts its result.

    Unset budgets fall back to the configured waiter settings. Errors raised by
    ``fetch`` or ``predicate`` propagate unchanged.
    """
    backoff = _Backoff(max_interval_seconds, max_wait_seconds, initial_interval_seconds)
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise WaitCancelledError(f"Wait cancelled after {backoff.attempts} attempt(s)")

        result = fetch()
        backoff.attempts += 1
        if predicate(result):
            logger.debug("Wait condition met after %d attempt(s)", backoff.attempts)
            return result

        delay = backoff.next_delay()
        if delay is None:
            raise MaximumWaitTimeExceededError(backoff.elapsed(), last_result=result)

        if cancel_event is not None:
            if cancel_event.wait(delay):
                raise WaitCancelledError(f"Wait cancelled after {backoff.attempts} attempt(s)")
        else:
            time.sleep(delay)


async def wait_until_async(
    fetch: Callable[[], Awaitable[T]],
    predicate: Callable[[T], bool],
    *,
    max_interval_seconds: float | None = None,
    max_wait_seconds: float | None = None,
    initial_interval_seconds: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> T:
    """Coroutine counterpart of ``wait_until``."""
    backoff = _Backoff(max_interval_seconds, max_wait_seconds, initial_interval_seconds)
    while True:
        if cancel_event is not None and cancel_event.is_set():
            raise WaitCancelledError(f"Wait cancelled after {backoff.attempts} attempt(s)")

        result = await fetch()
        backoff.attempts += 1
        if predicate(result):
            logger.debug("Wait condition met after %d attempt(s)", backoff.attempts)
            return result

        delay = backoff.next_delay()
        if delay is None:
            raise MaximumWaitTimeExceededError(backoff.elapsed(), last_result=result)

        if cancel_event is not None:
            try:
                await asyncio.wait_for(cancel_event.wait(), timeout=delay)
            except TimeoutError:
                continue
            raise WaitCancelledError(f"Wait cancelled after {backoff.attempts} attempt(s)")
        await asyncio.sleep(delay)


def work_request_id_of(result: Any) -> str | None:
    if isinstance(result, Response):
        return result.work_request_id
    return getattr(result, "work_request_id", None)


def status_of(result: Any) -> object:
    data = result.data if isinstance(result, Response) else result
    if isinstance(data, Mapping):
        return data.get("status")
    return getattr(data, "status", None)


def _normalize_states(states: Iterable[object]) -> frozenset[str]:
    return frozenset(str(state).lower() for state in states)


def _status_matcher(
    targets: frozenset[str],
    read_status: Callable[[Any], object],
) -> Callable[[Any], bool]:
    def matches(result: Any) -> bool:
        status = read_status(result)
        return status is not None and str(status).lower() in targets

    return matches


def _require_handle(submission: Any, tracking_handle: Callable[[Any], Any]) -> Any:
    handle = tracking_handle(submission)
    if handle is None:
        raise ValueError("Submission result does not carry a tracking handle")
    return handle


def wait_for_state(
    submit: Callable[[], Any],
    fetch_status: Callable[[Any], Any],
    target_states: Iterable[object],
    *,
    tracking_handle: Callable[[Any], Any] = work_request_id_of,
    read_status: Callable[[Any], object] = status_of,
    max_interval_seconds: float | None = None,
    max_wait_seconds: float | None = None,
    initial_interval_seconds: float | None = None,
    cancel_event: threading.Event | None = None,
) -> Any:
    """Submit an operation and block until its status reaches a target state.

    Returns the submission result untouched when ``target_states`` is empty,
    otherwise the first status snapshot whose status matches one of
    ``target_states`` (case-insensitively).

    Raises:
        ValueError: the wait budgets are invalid; nothing is submitted.
        CompositeOperationError: submission, polling or the wait itself failed.
            ``partial_results`` holds the submission result once there is one.
    """
    _resolve_budget(max_interval_seconds, max_wait_seconds, initial_interval_seconds)

    try:
        submission = submit()
    except Exception as exc:
        raise CompositeOperationError(partial_results=[], cause=exc) from exc

    targets = _normalize_states(target_states)
    if not targets:
        return submission

    try:
        handle = _require_handle(submission, tracking_handle)
        logger.debug("Waiting for %s to reach %s", handle, sorted(targets))
        return wait_until(
            lambda: fetch_status(handle),
            _status_matcher(targets, read_status),
            max_interval_seconds=max_interval_seconds,
            max_wait_seconds=max_wait_seconds,
            initial_interval_seconds=initial_interval_seconds,
            cancel_event=cancel_event,
        )
    except Exception as exc:
        logger.warning("Waiting for %s failed: %s", sorted(targets), exc)
        raise CompositeOperationError(partial_results=[submission], cause=exc) from exc


async def wait_for_state_async(
    submit: Callable[[], Awaitable[Any]],
    fetch_status: Callable[[Any], Awaitable[Any]],
    target_states: Iterable[object],
    *,
    tracking_handle: Callable[[Any], Any] = work_request_id_of,
    read_status: Callable[[Any], object] = status_of,
    max_interval_seconds: float | None = None,
    max_wait_seconds: float | None = None,
    initial_interval_seconds: float | None = None,
    cancel_event: asyncio.Event | None = None,
) -> Any:
    """Coroutine counterpart of ``wait_for_state``."""
    _resolve_budget(max_interval_seconds, max_wait_seconds, initial_interval_seconds)

    try:
        submission = await submit()
    except Exception as exc:
        raise CompositeOperationError(partial_results=[], cause=exc) from exc

    targets = _normalize_states(target_states)
    if not targets:
        return submission

    try:
        handle = _require_handle(submission, tracking_handle)
        logger.debug("Waiting for %s to reach %s", handle, sorted(targets))
        return await wait_until_async(
            lambda: fetch_status(handle),
            _status_matcher(targets, read_status),
            max_interval_seconds=max_interval_seconds,
            max_wait_seconds=max_wait_seconds,
            initial_interval_seconds=initial_interval_seconds,
            cancel_event=cancel_event,
        )
    except Exception as exc:
        logger.warning("Waiting for %s failed: %s", sorted(targets), exc)
        raise CompositeOperationError(partial_results=[submission], cause=exc) from exc
