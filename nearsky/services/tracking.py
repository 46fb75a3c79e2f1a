"""Closest-aircraft state and the debounced proximity alert."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
import logging
from typing import Optional

from nearsky.models.aircraft import EnrichmentRecord, TrackedAircraft
from nearsky.models.tracking import CycleResult, CycleStatus
from nearsky.services.selector import Selection

logger = logging.getLogger("nearsky.tracking")

PROXIMITY_ALERT_KM = 5.0


class TrackingPhase(str, Enum):
    IDLE = "idle"
    TRACKING = "tracking"


@dataclass(frozen=True)
class AlertState:
    """Whether the proximity alert has fired for the current approach."""

    armed: bool = False
    last_distance_km: Optional[float] = None


class TrackingState:
    """Own the current closest aircraft and decide when the alert fires.

    The alert fires once when the tracked distance drops below the radius.
    It stays quiet while the aircraft remains inside and re-arms only after a
    cycle at or beyond the radius, or a cycle with no aircraft at all.
    """

    def __init__(self, alert_radius_km: float = PROXIMITY_ALERT_KM) -> None:
        self.alert_radius_km = alert_radius_km
        self.phase = TrackingPhase.IDLE
        self.current = TrackedAircraft.waiting()
        self.alert = AlertState()

    def record_failure(self, error: Exception | str) -> CycleResult:
        """Report a failed feed poll without touching the tracked aircraft."""

        return CycleResult(
            status=CycleStatus.FEED_ERROR,
            aircraft=self.current,
            alert_active=self.alert.armed,
            error=str(error),
        )

    def apply(
        self, selection: Selection | None, enrichment: EnrichmentRecord | None = None
    ) -> CycleResult:
        """Fold one successful feed poll into the state."""

        self.phase = TrackingPhase.TRACKING

        if selection is None:
            self.current = TrackedAircraft.no_aircraft()
            self.alert = AlertState(armed=False, last_distance_km=None)
            return CycleResult(status=CycleStatus.NO_AIRCRAFT, aircraft=self.current)

        self.current = TrackedAircraft.from_parts(
            selection.snapshot,
            distance_km=selection.distance_km,
            bearing_deg=selection.bearing_deg,
            enrichment=enrichment,
        )
        triggered = self._evaluate_alert(selection.distance_km)
        return CycleResult(
            status=CycleStatus.TRACKING,
            aircraft=self.current,
            alert_triggered=triggered,
            alert_active=self.alert.armed,
        )

    def _evaluate_alert(self, distance: float) -> bool:
        triggered = False
        if distance < self.alert_radius_km:
            if not self.alert.armed:
                triggered = True
            armed = True
        else:
            if self.alert.armed:
                logger.debug("Aircraft left the %.1f km alert radius", self.alert_radius_km)
            armed = False
        self.alert = AlertState(armed=armed, last_distance_km=distance)
        return triggered


__all__ = ["AlertState", "PROXIMITY_ALERT_KM", "TrackingPhase", "TrackingState"]
