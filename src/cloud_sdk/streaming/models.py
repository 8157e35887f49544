"""Streaming models."""

from __future__ import annotations

from cloud_sdk.model import Model, WireEnum, wire


class ArchiverStartPosition(WireEnum):
    LATEST = "LATEST"
    TRIM_HORIZON = "TRIM_HORIZON"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class UpdateArchiverDetails(Model):
    """The update stream archiver parameters."""

    bucket_name: str | None = wire("bucketName")
    use_existing_bucket: bool | None = wire(
        "useExistingBucket",
        description="The flag to create a new bucket or use existing one.",
    )
    start_position: ArchiverStartPosition | None = wire("startPosition")
    batch_rollover_size_in_mbs: int | None = wire("batchRolloverSizeInMBs")
    batch_rollover_time_in_seconds: int | None = wire("batchRolloverTimeInSeconds")
