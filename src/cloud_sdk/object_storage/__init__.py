"""Object Storage client, composite operations and models."""

from cloud_sdk.object_storage.client import ObjectStorageClient
from cloud_sdk.object_storage.composite_operations import ObjectStorageClientCompositeOperations
from cloud_sdk.object_storage.models import (
    CopyObjectDetails,
    WorkRequest,
    WorkRequestOperationType,
    WorkRequestResource,
    WorkRequestResourceActionType,
    WorkRequestStatus,
)

__all__ = [
    "CopyObjectDetails",
    "ObjectStorageClient",
    "ObjectStorageClientCompositeOperations",
    "WorkRequest",
    "WorkRequestOperationType",
    "WorkRequestResource",
    "WorkRequestResourceActionType",
    "WorkRequestStatus",
]
