"""Great-circle helpers used to rank and orient aircraft."""

from __future__ import annotations

import math
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from nearsky.models.geo import Coordinate

EARTH_RADIUS_KM = 6371.0

COMPASS_LABELS = (
    "N", "NNE", "NE", "ENE", "E", "ESE", "SE", "SSE",
    "S", "SSW", "SW", "WSW", "W", "WNW", "NW", "NNW",
)
_SECTOR_DEG = 360.0 / len(COMPASS_LABELS)


def distance_km(a: Coordinate, b: Coordinate) -> float:
    """Haversine distance between two coordinates in kilometers."""

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlat = lat2 - lat1
    dlon = math.radians(b.longitude - a.longitude)

    h = math.sin(dlat / 2) ** 2 + math.cos(lat1) * math.cos(lat2) * math.sin(dlon / 2) ** 2
    h = min(h, 1.0)
    c = 2 * math.atan2(math.sqrt(h), math.sqrt(1 - h))
    return EARTH_RADIUS_KM * c


def initial_bearing_deg(a: Coordinate, b: Coordinate) -> float:
    """Forward azimuth from ``a`` to ``b``, clockwise from north in [0, 360)."""

    lat1 = math.radians(a.latitude)
    lat2 = math.radians(b.latitude)
    dlon = math.radians(b.longitude - a.longitude)

    y = math.sin(dlon) * math.cos(lat2)
    x = math.cos(lat1) * math.sin(lat2) - math.sin(lat1) * math.cos(lat2) * math.cos(dlon)
    bearing = math.degrees(math.atan2(y, x)) % 360.0
    # -0.0 % 360 and tiny negatives can round up to exactly 360.0
    return 0.0 if bearing >= 360.0 else bearing


def compass_label(track_deg: float) -> str:
    """Bucket a track angle into one of 16 compass points."""

    # round half up, not half to even
    index = math.floor(track_deg / _SECTOR_DEG + 0.5) % len(COMPASS_LABELS)
    return COMPASS_LABELS[index]


__all__ = [
    "COMPASS_LABELS",
    "EARTH_RADIUS_KM",
    "compass_label",
    "distance_km",
    "initial_bearing_deg",
]
