"""Pick the aircraft closest to the observer."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterable, Optional

from nearsky.geodesy import distance_km, initial_bearing_deg
from nearsky.models.aircraft import AircraftSnapshot
from nearsky.models.geo import Coordinate


@dataclass(frozen=True)
class Selection:
    """The winning feed entry with its distance and bearing from the observer."""

    snapshot: AircraftSnapshot
    distance_km: float
    bearing_deg: float


def select_closest(
    snapshots: Iterable[AircraftSnapshot], observer: Coordinate
) -> Optional[Selection]:
    """Return the minimum-distance aircraft, or None if none has a position.

    Equidistant aircraft resolve to whichever the feed listed first.
    """

    best: AircraftSnapshot | None = None
    best_distance = 0.0
    for snapshot in snapshots:
        if snapshot.position is None:
            continue
        dist = distance_km(observer, snapshot.position)
        if best is None or dist < best_distance:
            best = snapshot
            best_distance = dist

    if best is None or best.position is None:
        return None

    return Selection(
        snapshot=best,
        distance_km=best_distance,
        bearing_deg=initial_bearing_deg(observer, best.position),
    )


__all__ = ["Selection", "select_closest"]
