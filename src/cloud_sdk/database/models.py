"""Database models."""

from __future__ import annotations

from cloud_sdk.model import Model, WireEnum, wire


class IormLifecycleState(WireEnum):
    BOOTSTRAPPING = "BOOTSTRAPPING"
    ENABLED = "ENABLED"
    DISABLED = "DISABLED"
    UPDATING = "UPDATING"
    FAILED = "FAILED"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class IormObjective(WireEnum):
    LOW_LATENCY = "LOW_LATENCY"
    HIGH_THROUGHPUT = "HIGH_THROUGHPUT"
    BALANCED = "BALANCED"
    AUTO = "AUTO"
    BASIC = "BASIC"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class DbIormConfig(Model):
    """IORM setting for a single database."""

    db_name: str | None = wire("dbName")
    share: int | None = None
    flash_cache_limit: str | None = wire("flashCacheLimit")


class ExadataIormConfig(Model):
    """IORM settings of an Exadata DB system."""

    lifecycle_state: IormLifecycleState | None = wire(
        "lifecycleState",
        description="The current config state of IORM settings for this Exadata system.",
    )
    lifecycle_details: str | None = wire("lifecycleDetails")
    objective: IormObjective | None = None
    db_plans: list[DbIormConfig] | None = wire("dbPlans")
