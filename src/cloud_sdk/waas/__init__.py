"""Web application acceleration and security models."""

from cloud_sdk.waas.models import (
    WorkRequestOperationTypes,
    WorkRequestStatusValues,
    WorkRequestSummary,
)

__all__ = ["WorkRequestOperationTypes", "WorkRequestStatusValues", "WorkRequestSummary"]
