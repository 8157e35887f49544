"""Streaming service models."""

from cloud_sdk.streaming.models import ArchiverStartPosition, UpdateArchiverDetails

__all__ = ["ArchiverStartPosition", "UpdateArchiverDetails"]
