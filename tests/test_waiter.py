from __future__ import annotations

import threading
import time
from types import SimpleNamespace
from unittest.mock import MagicMock, patch

import pytest

from cloud_sdk.errors import (
    CompositeOperationError,
    MaximumWaitTimeExceededError,
    ServiceError,
    WaitCancelledError,
)
from cloud_sdk.object_storage.models import WorkRequest, WorkRequestStatus
from cloud_sdk.response import Response
from cloud_sdk.waiter import status_of, wait_for_state, wait_until, work_request_id_of


def _submission(handle: str | None = "H") -> Response:
    headers = {"opc-work-request-id": handle} if handle is not None else {}
    return Response(status=202, headers=headers)


def _snapshot(status: str) -> Response:
    return Response(status=200, data=SimpleNamespace(status=status))


def test_wait_for_state_returns_matching_snapshot_after_two_fetches() -> None:
    submission = _submission()
    fetch_status = MagicMock(side_effect=[_snapshot("CREATING"), _snapshot("ACTIVE")])

    result = wait_for_state(
        lambda: submission,
        fetch_status,
        {"ACTIVE"},
        initial_interval_seconds=0.001,
        max_interval_seconds=0.01,
        max_wait_seconds=5,
    )

    assert result.data.status == "ACTIVE"
    assert fetch_status.call_count == 2
    fetch_status.assert_called_with("H")


def test_wait_for_state_compares_statuses_case_insensitively() -> None:
    fetch_status = MagicMock(return_value=_snapshot("Active"))

    result = wait_for_state(lambda: _submission(), fetch_status, ["active"], max_wait_seconds=1)

    assert result.data.status == "Active"
    fetch_status.assert_called_once_with("H")


def test_wait_for_state_accepts_enum_statuses_and_targets() -> None:
    snapshot = Response(status=200, data=WorkRequest(status="COMPLETED"))

    result = wait_for_state(
        lambda: _submission(),
        lambda handle: snapshot,
        [WorkRequestStatus.COMPLETED, WorkRequestStatus.FAILED],
        max_wait_seconds=1,
    )

    assert result is snapshot


def test_wait_for_state_times_out_with_submission_as_partial_result() -> None:
    submission = _submission()
    fetch_status = MagicMock(return_value=_snapshot("CREATING"))

    started = time.monotonic()
    with pytest.raises(CompositeOperationError) as exc_info:
        wait_for_state(
            lambda: submission,
            fetch_status,
            {"ACTIVE"},
            max_interval_seconds=0.01,
            max_wait_seconds=0.1,
        )
    elapsed = time.monotonic() - started

    assert 0.09 <= elapsed < 0.5
    assert exc_info.value.partial_results == [submission]
    assert isinstance(exc_info.value.cause, MaximumWaitTimeExceededError)
    assert exc_info.value.__cause__ is exc_info.value.cause
    assert exc_info.value.cause.last_result.data.status == "CREATING"


def test_wait_for_state_without_targets_returns_submission_without_polling() -> None:
    submission = _submission()
    fetch_status = MagicMock()

    assert wait_for_state(lambda: submission, fetch_status, set()) is submission
    fetch_status.assert_not_called()


def test_submission_failure_has_no_partial_results() -> None:
    failure = ServiceError(409, "Conflict", "bucket busy")
    fetch_status = MagicMock()

    def submit() -> Response:
        raise failure

    with pytest.raises(CompositeOperationError) as exc_info:
        wait_for_state(submit, fetch_status, {"ACTIVE"})

    assert exc_info.value.partial_results == []
    assert exc_info.value.cause is failure
    fetch_status.assert_not_called()


def test_polling_failure_aborts_wait_with_submission_as_partial_result() -> None:
    submission = _submission()
    failure = ServiceError(500, "InternalError", "boom")
    fetch_status = MagicMock(side_effect=failure)

    with pytest.raises(CompositeOperationError) as exc_info:
        wait_for_state(lambda: submission, fetch_status, {"ACTIVE"}, max_wait_seconds=5)

    assert exc_info.value.partial_results == [submission]
    assert exc_info.value.cause is failure
    assert fetch_status.call_count == 1


def test_missing_tracking_handle_is_reported_as_composite_error() -> None:
    submission = _submission(handle=None)

    with pytest.raises(CompositeOperationError) as exc_info:
        wait_for_state(lambda: submission, MagicMock(), {"ACTIVE"})

    assert exc_info.value.partial_results == [submission]
    assert isinstance(exc_info.value.cause, ValueError)


def test_custom_handle_and_status_readers() -> None:
    statuses = iter(["pending", "done"])

    result = wait_for_state(
        lambda: {"jobId": "job-7"},
        lambda handle: {"job": handle, "state": next(statuses)},
        ["DONE"],
        tracking_handle=lambda submission: submission["jobId"],
        read_status=lambda snapshot: snapshot["state"],
        initial_interval_seconds=0.001,
        max_wait_seconds=5,
    )

    assert result == {"job": "job-7", "state": "done"}


def test_cancelled_wait_is_reported_as_composite_error() -> None:
    cancel = threading.Event()
    cancel.set()
    fetch_status = MagicMock()

    with pytest.raises(CompositeOperationError) as exc_info:
        wait_for_state(lambda: _submission(), fetch_status, {"ACTIVE"}, cancel_event=cancel)

    assert isinstance(exc_info.value.cause, WaitCancelledError)
    fetch_status.assert_not_called()


def test_cancel_event_interrupts_sleep() -> None:
    cancel = threading.Event()
    fetch = MagicMock(return_value="CREATING")
    timer = threading.Timer(0.05, cancel.set)
    timer.start()

    started = time.monotonic()
    with pytest.raises(WaitCancelledError):
        wait_until(
            fetch,
            lambda status: status == "ACTIVE",
            initial_interval_seconds=5,
            max_interval_seconds=5,
            max_wait_seconds=30,
            cancel_event=cancel,
        )
    timer.cancel()

    assert time.monotonic() - started < 2
    assert fetch.call_count == 1


@patch("cloud_sdk.waiter.time.sleep")
def test_wait_until_uses_capped_exponential_backoff(mock_sleep: MagicMock) -> None:
    results = iter([False, False, False, False, True])

    assert wait_until(
        lambda: next(results),
        bool,
        initial_interval_seconds=1,
        max_interval_seconds=4,
        max_wait_seconds=600,
    )

    assert [call.args[0] for call in mock_sleep.call_args_list] == [1, 2, 4, 4]


@patch("cloud_sdk.waiter.time.sleep")
def test_wait_until_initial_interval_is_capped_by_ceiling(mock_sleep: MagicMock) -> None:
    results = iter([False, True])

    wait_until(
        lambda: next(results),
        bool,
        initial_interval_seconds=10,
        max_interval_seconds=3,
        max_wait_seconds=600,
    )

    mock_sleep.assert_called_once_with(3)


def test_wait_until_defaults_come_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("WAITER_MAX_WAIT_SECONDS", "0")
    fetch = MagicMock(return_value="CREATING")

    with pytest.raises(MaximumWaitTimeExceededError):
        wait_until(fetch, lambda status: status == "ACTIVE")

    fetch.assert_called_once()


def test_wait_until_rejects_invalid_budgets() -> None:
    with pytest.raises(ValueError):
        wait_until(MagicMock(), bool, max_interval_seconds=0)
    with pytest.raises(ValueError):
        wait_until(MagicMock(), bool, max_wait_seconds=-1)


def test_status_and_handle_readers() -> None:
    assert status_of(Response(status=200, data={"status": "DONE"})) == "DONE"
    assert status_of(Response(status=200, data=None)) is None
    assert status_of(SimpleNamespace(status="RAW")) == "RAW"
    assert work_request_id_of(Response(status=202, headers={"Opc-Work-Request-Id": "wr"})) == "wr"
    assert work_request_id_of(SimpleNamespace(work_request_id="wr-2")) == "wr-2"


@pytest.mark.parametrize("options", [{"max_interval_seconds": 0}, {"max_wait_seconds": -1}])
def test_invalid_budgets_are_rejected_before_submitting(options: dict[str, float]) -> None:
    submit = MagicMock(return_value=_submission())
    fetch_status = MagicMock()

    with pytest.raises(ValueError):
        wait_for_state(submit, fetch_status, {"ACTIVE"}, **options)

    assert submit.call_count == 0
    fetch_status.assert_not_called()
