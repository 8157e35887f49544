"""Object Storage service client."""

from __future__ import annotations

from urllib.parse import quote

from cloud_sdk.execution.http_client import BaseClient
from cloud_sdk.object_storage.models import CopyObjectDetails, WorkRequest
from cloud_sdk.response import Response


def _require(value: object, name: str) -> None:
    if value is None or value == "":
        raise ValueError(f"Parameter {name} must be specified")


def _segment(value: str) -> str:
    return quote(value, safe="")


class ObjectStorageClient(BaseClient):
    service = "objectstorage"

    def copy_object(
        self,
        namespace_name: str,
        bucket_name: str,
        copy_object_details: CopyObjectDetails,
        *,
        opc_client_request_id: str | None = None,
    ) -> Response:
        """Start an asynchronous copy of an object.

        The returned response carries the work request id in its
        ``opc-work-request-id`` header.
        """
        _require(namespace_name, "namespace_name")
        _require(bucket_name, "bucket_name")
        _require(copy_object_details, "copy_object_details")

        path = f"/n/{_segment(namespace_name)}/b/{_segment(bucket_name)}/actions/copyObject"
        return self.call_api(
            "POST",
            path,
            json_body=copy_object_details,
            headers={"opc-client-request-id": opc_client_request_id},
        )

    def get_work_request(
        self,
        work_request_id: str,
        *,
        opc_client_request_id: str | None = None,
    ) -> Response:
        _require(work_request_id, "work_request_id")

        return self.call_api(
            "GET",
            f"/workRequests/{_segment(work_request_id)}",
            headers={"opc-client-request-id": opc_client_request_id},
            response_type=WorkRequest,
        )
