from __future__ import annotations

import logging
from unittest.mock import MagicMock

import httpx
import pytest

from cloud_sdk import logging_utils
from cloud_sdk.errors import CompositeOperationError, MaximumWaitTimeExceededError, ServiceError
from cloud_sdk.object_storage import (
    ObjectStorageClient,
    ObjectStorageClientCompositeOperations,
)
from cloud_sdk.object_storage.models import CopyObjectDetails, WorkRequestStatus
from cloud_sdk.response import Response

FAST_WAITER = {"initial_interval_seconds": 0.001, "max_interval_seconds": 0.01}


def _details() -> CopyObjectDetails:
    return CopyObjectDetails(
        source_object_name="report.csv",
        destination_region="us-ashburn-1",
        destination_namespace="ns",
        destination_bucket="backup",
        destination_object_name="report.csv",
    )


class _FakeService:
    """Answers copyObject with a work request and reports it through a fixed status sequence."""

    def __init__(self, statuses: list[str]) -> None:
        self.statuses = list(statuses)
        self.paths: list[str] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.paths.append(request.url.path)
        if request.url.path.endswith("/actions/copyObject"):
            return httpx.Response(202, headers={"opc-work-request-id": "wr-1"})
        status = self.statuses.pop(0) if len(self.statuses) > 1 else self.statuses[0]
        return httpx.Response(200, json={"id": "wr-1", "status": status})


def _operations(service: _FakeService) -> ObjectStorageClientCompositeOperations:
    client = ObjectStorageClient(
        service_endpoint="https://objectstorage.test.example.com",
        transport=httpx.MockTransport(service),
    )
    return ObjectStorageClientCompositeOperations(client)


def test_copy_object_waits_for_completed_work_request() -> None:
    service = _FakeService(["ACCEPTED", "IN_PROGRESS", "COMPLETED"])

    response = _operations(service).copy_object_and_wait_for_state(
        "ns",
        "bucket",
        _details(),
        wait_for_states=["COMPLETED", "FAILED"],
        waiter_kwargs=FAST_WAITER,
    )

    assert response.data.status is WorkRequestStatus.COMPLETED
    assert service.paths == [
        "/n/ns/b/bucket/actions/copyObject",
        "/workRequests/wr-1",
        "/workRequests/wr-1",
        "/workRequests/wr-1",
    ]


def test_failed_status_is_returned_when_requested() -> None:
    service = _FakeService(["FAILED"])

    response = _operations(service).copy_object_and_wait_for_state(
        "ns", "bucket", _details(), wait_for_states=["completed", "failed"]
    )

    assert response.data.status is WorkRequestStatus.FAILED


def test_no_states_returns_copy_response() -> None:
    service = _FakeService(["COMPLETED"])

    response = _operations(service).copy_object_and_wait_for_state("ns", "bucket", _details())

    assert response.status == 202
    assert response.work_request_id == "wr-1"
    assert service.paths == ["/n/ns/b/bucket/actions/copyObject"]


def test_timeout_keeps_copy_response_as_partial_result() -> None:
    service = _FakeService(["IN_PROGRESS"])

    with pytest.raises(CompositeOperationError) as exc_info:
        _operations(service).copy_object_and_wait_for_state(
            "ns",
            "bucket",
            _details(),
            wait_for_states=["COMPLETED"],
            waiter_kwargs={**FAST_WAITER, "max_wait_seconds": 0.05},
        )

    (copy_response,) = exc_info.value.partial_results
    assert copy_response.work_request_id == "wr-1"
    assert isinstance(exc_info.value.cause, MaximumWaitTimeExceededError)


def test_copy_failure_has_no_partial_results() -> None:
    def handler(request: httpx.Request) -> httpx.Response:
        return httpx.Response(409, json={"code": "Conflict", "message": "busy"})

    client = ObjectStorageClient(
        service_endpoint="https://objectstorage.test.example.com",
        transport=httpx.MockTransport(handler),
    )

    with pytest.raises(CompositeOperationError) as exc_info:
        ObjectStorageClientCompositeOperations(client).copy_object_and_wait_for_state(
            "ns", "bucket", _details(), wait_for_states=["COMPLETED"]
        )

    assert exc_info.value.partial_results == []
    assert isinstance(exc_info.value.cause, ServiceError)
    assert exc_info.value.cause.status == 409


def test_operation_and_waiter_kwargs_are_forwarded() -> None:
    client = MagicMock(spec=ObjectStorageClient)
    client.copy_object.return_value = Response(status=202, headers={"opc-work-request-id": "wr-9"})
    client.get_work_request.return_value = Response(status=200, data={"status": "COMPLETED"})

    ObjectStorageClientCompositeOperations(client).copy_object_and_wait_for_state(
        "ns",
        "bucket",
        _details(),
        wait_for_states=["COMPLETED"],
        operation_kwargs={"opc_client_request_id": "client-1"},
        waiter_kwargs={"max_wait_seconds": 5},
    )

    client.copy_object.assert_called_once_with(
        "ns", "bucket", _details(), opc_client_request_id="client-1"
    )
    client.get_work_request.assert_called_once_with("wr-9")


def test_unknown_waiter_option_is_rejected() -> None:
    client = MagicMock(spec=ObjectStorageClient)

    with pytest.raises(TypeError, match="max_attempts"):
        ObjectStorageClientCompositeOperations(client).copy_object_and_wait_for_state(
            "ns",
            "bucket",
            _details(),
            wait_for_states=["COMPLETED"],
            waiter_kwargs={"max_attempts": 3},
        )

    client.copy_object.assert_not_called()


def test_default_client_is_built_from_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("SDK_REGION", "us-sanjose-1")

    operations = ObjectStorageClientCompositeOperations()

    assert operations.client.endpoint == "https://objectstorage.us-sanjose-1.oraclecloud.com"


def test_constructing_operations_leaves_logging_alone(monkeypatch: pytest.MonkeyPatch) -> None:
    sdk_logger = logging.getLogger("cloud_sdk")
    monkeypatch.setattr(logging_utils, "_logging_configured", False)
    handlers = list(sdk_logger.handlers)
    level = sdk_logger.level

    ObjectStorageClientCompositeOperations(MagicMock(spec=ObjectStorageClient))

    assert sdk_logger.handlers == handlers
    assert sdk_logger.level == level
