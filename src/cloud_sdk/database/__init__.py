"""Database service models."""

from cloud_sdk.database.models import (
    DbIormConfig,
    ExadataIormConfig,
    IormLifecycleState,
    IormObjective,
)

__all__ = ["DbIormConfig", "ExadataIormConfig", "IormLifecycleState", "IormObjective"]
