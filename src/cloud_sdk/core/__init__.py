"""Networking service models."""

from cloud_sdk.core.models import ServiceIdRequestDetails, UpdateServiceGatewayDetails

__all__ = ["ServiceIdRequestDetails", "UpdateServiceGatewayDetails"]
