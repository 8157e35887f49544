"""Web application acceleration and security models."""

from __future__ import annotations

from datetime import datetime

from cloud_sdk.model import Model, WireEnum, wire


class WorkRequestOperationTypes(WireEnum):
    CREATE_WAAS_POLICY = "CREATE_WAAS_POLICY"
    UPDATE_WAAS_POLICY = "UPDATE_WAAS_POLICY"
    DELETE_WAAS_POLICY = "DELETE_WAAS_POLICY"
    PURGE_WAAS_POLICY_CACHE = "PURGE_WAAS_POLICY_CACHE"
    CREATE_CUSTOM_PROTECTION_RULE = "CREATE_CUSTOM_PROTECTION_RULE"
    UPDATE_CUSTOM_PROTECTION_RULE = "UPDATE_CUSTOM_PROTECTION_RULE"
    DELETE_CUSTOM_PROTECTION_RULE = "DELETE_CUSTOM_PROTECTION_RULE"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class WorkRequestStatusValues(WireEnum):
    ACCEPTED = "ACCEPTED"
    IN_PROGRESS = "IN_PROGRESS"
    FAILED = "FAILED"
    SUCCEEDED = "SUCCEEDED"
    CANCELING = "CANCELING"
    CANCELED = "CANCELED"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class WorkRequestSummary(Model):
    id: str | None = None
    operation_type: WorkRequestOperationTypes | None = wire("operationType")
    status: WorkRequestStatusValues | None = None
    compartment_id: str | None = wire("compartmentId")
    percent_complete: int | None = wire("percentComplete")
    time_accepted: datetime | None = wire("timeAccepted")
    time_started: datetime | None = wire("timeStarted")
    time_finished: datetime | None = wire("timeFinished")
