"""Models handed from the tracking loop to consumers."""

from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

from nearsky.models.aircraft import TrackedAircraft


class CycleStatus(str, Enum):
    """Outcome of a single refresh cycle."""

    IDLE = "idle"
    TRACKING = "tracking"
    NO_AIRCRAFT = "no_aircraft"
    FEED_ERROR = "feed_error"


def _utcnow() -> datetime:
    return datetime.now(tz=timezone.utc)


class CycleResult(BaseModel):
    """Immutable result of one refresh cycle."""

    status: CycleStatus = Field(..., description="Outcome of the cycle")
    aircraft: TrackedAircraft = Field(..., description="Current closest aircraft")
    alert_triggered: bool = Field(
        default=False, description="True only on the cycle the proximity alert fired"
    )
    alert_active: bool = Field(
        default=False, description="True while the aircraft stays inside the alert radius"
    )
    error: Optional[str] = Field(
        default=None, description="Feed failure message for feed_error cycles"
    )
    completed_at: datetime = Field(default_factory=_utcnow)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def idle(cls) -> "CycleResult":
        return cls(status=CycleStatus.IDLE, aircraft=TrackedAircraft.waiting())


__all__ = ["CycleResult", "CycleStatus"]
