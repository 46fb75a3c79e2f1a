"""Pydantic models for the NearSky tracker."""

from .aircraft import (
    NO_AIRCRAFT_DISTANCE_KM,
    UNKNOWN,
    AircraftSnapshot,
    EnrichmentRecord,
    TrackedAircraft,
)
from .geo import Coordinate
from .tracking import CycleResult, CycleStatus

__all__ = [
    "AircraftSnapshot",
    "Coordinate",
    "CycleResult",
    "CycleStatus",
    "EnrichmentRecord",
    "NO_AIRCRAFT_DISTANCE_KM",
    "TrackedAircraft",
    "UNKNOWN",
]
