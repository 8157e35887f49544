"""Identity service models."""

from cloud_sdk.identity.models import MfaTotpDevice, MfaTotpDeviceLifecycleState

__all__ = ["MfaTotpDevice", "MfaTotpDeviceLifecycleState"]
