"""Networking models."""

from __future__ import annotations

from typing import Any

from cloud_sdk.model import Model, wire


class ServiceIdRequestDetails(Model):
    service_id: str | None = wire(
        "serviceId",
        description="The OCID of the Service.",
    )


class UpdateServiceGatewayDetails(Model):
    """Details for updating a service gateway.

    Sending an empty ``services`` list disables all services; omitting the
    attribute keeps the existing list intact.
    """

    block_traffic: bool | None = wire(
        "blockTraffic",
        description="Whether the service gateway blocks all traffic through it.",
    )
    defined_tags: dict[str, dict[str, Any]] | None = wire("definedTags")
    display_name: str | None = wire("displayName")
    freeform_tags: dict[str, str] | None = wire("freeformTags")
    route_table_id: str | None = wire(
        "routeTableId",
        description="The OCID of the route table the service gateway will use.",
    )
    services: list[ServiceIdRequestDetails] | None = None
