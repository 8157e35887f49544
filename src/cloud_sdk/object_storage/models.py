"""Object Storage models."""

from __future__ import annotations

from datetime import datetime

from cloud_sdk.model import Model, WireEnum, wire


class CopyObjectDetails(Model):
    """The source and destination of an object to be copied."""

    source_object_name: str | None = wire("sourceObjectName")
    source_object_if_match_e_tag: str | None = wire("sourceObjectIfMatchETag")
    source_version_id: str | None = wire("sourceVersionId")
    destination_region: str | None = wire("destinationRegion")
    destination_namespace: str | None = wire("destinationNamespace")
    destination_bucket: str | None = wire("destinationBucket")
    destination_object_name: str | None = wire("destinationObjectName")
    destination_object_if_match_e_tag: str | None = wire("destinationObjectIfMatchETag")
    destination_object_if_none_match_e_tag: str | None = wire("destinationObjectIfNoneMatchETag")
    destination_object_metadata: dict[str, str] | None = wire(
        "destinationObjectMetadata",
        description="Metadata for the destination object; keys must start with 'opc-meta-'.",
    )


class WorkRequestResourceActionType(WireEnum):
    CREATED = "CREATED"
    UPDATED = "UPDATED"
    DELETED = "DELETED"
    RELATED = "RELATED"
    IN_PROGRESS = "IN_PROGRESS"
    READ = "READ"
    WRITTEN = "WRITTEN"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class WorkRequestResource(Model):
    action_type: WorkRequestResourceActionType | None = wire("actionType")
    entity_type: str | None = wire("entityType")
    identifier: str | None = None
    entity_uri: str | None = wire("entityUri")
    metadata: dict[str, str] | None = None


class WorkRequestOperationType(WireEnum):
    COPY_OBJECT = "COPY_OBJECT"
    REENCRYPT = "REENCRYPT"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class WorkRequestStatus(WireEnum):
    ACCEPTED = "ACCEPTED"
    IN_PROGRESS = "IN_PROGRESS"
    FAILED = "FAILED"
    COMPLETED = "COMPLETED"
    CANCELING = "CANCELING"
    CANCELED = "CANCELED"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class WorkRequest(Model):
    """A long-running asynchronous Object Storage operation."""

    operation_type: WorkRequestOperationType | None = wire("operationType")
    status: WorkRequestStatus | None = None
    id: str | None = None
    compartment_id: str | None = wire("compartmentId")
    resources: list[WorkRequestResource] | None = None
    time_accepted: datetime | None = wire("timeAccepted")
    time_started: datetime | None = wire("timeStarted")
    time_finished: datetime | None = wire("timeFinished")
    percent_complete: float | None = wire("percentComplete")
