"""Exceptions raised by the SDK."""

from __future__ import annotations

from typing import Any


class ServiceError(Exception):
    """Raised when a service call returns a non-success status or cannot be sent.

    A ``status`` of 0 means the request never produced an HTTP response.
    """

    def __init__(
        self,
        status: int,
        code: str,
        message: str,
        request_id: str | None = None,
    ) -> None:
        super().__init__(f"{status} {code}: {message}")
        self.status = status
        self.code = code
        self.message = message
        self.request_id = request_id


class CompositeOperationError(RuntimeError):
    """A chained operation failed part-way through.

    ``partial_results`` holds whatever already succeeded (for example the
    response of the submitted operation) so callers can inspect it.
    """

    def __init__(
        self,
        partial_results: list[Any] | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.partial_results: list[Any] = list(partial_results or [])
        self.cause = cause
        detail = f": {cause}" if cause is not None else ""
        super().__init__(
            f"Composite operation failed with {len(self.partial_results)} partial result(s){detail}"
        )


class MaximumWaitTimeExceededError(TimeoutError):
    """Raised when a waiter runs out of its wait budget."""

    def __init__(self, elapsed_seconds: float, last_result: Any = None) -> None:
        super().__init__(f"Maximum wait time exceeded after {elapsed_seconds:.3f}s")
        self.elapsed_seconds = elapsed_seconds
        self.last_result = last_result


class WaitCancelledError(RuntimeError):
    """Raised when a waiter's cancellation event is set."""
