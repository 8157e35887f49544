"""Identity models."""

from __future__ import annotations

from datetime import datetime

from cloud_sdk.model import Model, WireEnum, wire


class MfaTotpDeviceLifecycleState(WireEnum):
    CREATING = "CREATING"
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    DELETING = "DELETING"
    DELETED = "DELETED"
    UNKNOWN_ENUM_VALUE = "UNKNOWN_ENUM_VALUE"


class MfaTotpDevice(Model):
    """A registered time-based one-time password device of a user.

    After creation the device must move from CREATING to ACTIVE before use.
    ``inactive_status`` is a bit field: 1 suspended, 2 disabled, 4 blocked,
    8 locked.
    """

    id: str | None = None
    seed: str | None = None
    user_id: str | None = wire("userId")
    time_created: datetime | None = wire("timeCreated")
    time_expires: datetime | None = wire(
        "timeExpires",
        description="When the device expires. Null if it never expires.",
    )
    lifecycle_state: MfaTotpDeviceLifecycleState | None = wire("lifecycleState")
    inactive_status: int | None = wire("inactiveStatus")
    is_activated: bool | None = wire("isActivated")
