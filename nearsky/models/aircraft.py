"""Models for aircraft read from the feed and the tracked closest aircraft."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field

from nearsky.geodesy import compass_label
from nearsky.models.geo import Coordinate
from nearsky.squawk import describe_squawk

UNKNOWN = "N/A"
NO_AIRCRAFT_DISTANCE_KM = 999999.9
WAITING_LABEL = "Waiting for data..."
NO_AIRCRAFT_LABEL = "No aircraft in range"


class AircraftSnapshot(BaseModel):
    """One aircraft entry from a single feed poll."""

    hex: str = Field(default=UNKNOWN, description="ICAO 24-bit address in hex")
    flight: str = Field(default=UNKNOWN, description="Callsign")
    squawk: str = Field(default=UNKNOWN, description="Transponder squawk code")
    position: Optional[Coordinate] = Field(
        default=None, description="Reported position, if any"
    )
    altitude_ft: int = Field(default=0, description="Barometric altitude in feet")
    ground_speed_kts: float = Field(default=0.0, description="Ground speed in knots")
    track_deg: float = Field(default=0.0, description="Track over ground in degrees")
    vertical_rate_fpm: int = Field(
        default=0, description="Barometric vertical rate in feet per minute"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")


class EnrichmentRecord(BaseModel):
    """Registry details for an aircraft."""

    registration: str = Field(default=UNKNOWN, description="Tail number")
    aircraft_type: str = Field(default=UNKNOWN, description="ICAO type designator")
    operator: str = Field(default=UNKNOWN, description="Owner or operator name")

    model_config = ConfigDict(frozen=True, extra="ignore")


class TrackedAircraft(BaseModel):
    """Display-ready view of the closest aircraft, or a placeholder."""

    present: bool = Field(
        default=False, description="False for the waiting and no-aircraft placeholders"
    )
    hex: str = ""
    flight: str = ""
    squawk: str = ""
    latitude: float = 0.0
    longitude: float = 0.0
    altitude_ft: int = 0
    ground_speed_kts: float = 0.0
    track_deg: float = 0.0
    vertical_rate_fpm: int = 0
    distance_km: float = Field(
        default=NO_AIRCRAFT_DISTANCE_KM, description="Distance from the observer"
    )
    bearing_deg: float = Field(
        default=0.0, description="Bearing from the observer to the aircraft"
    )
    registration: str = ""
    aircraft_type: str = ""
    operator: str = ""

    model_config = ConfigDict(frozen=True, extra="ignore")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def track_direction(self) -> str:
        return compass_label(self.track_deg)

    @computed_field  # type: ignore[prop-decorator]
    @property
    def squawk_description(self) -> str:
        return describe_squawk(self.squawk)

    @classmethod
    def waiting(cls) -> "TrackedAircraft":
        """Placeholder shown before the first successful feed poll."""

        return cls(flight=WAITING_LABEL)

    @classmethod
    def no_aircraft(cls) -> "TrackedAircraft":
        return cls(flight=NO_AIRCRAFT_LABEL)

    @classmethod
    def from_parts(
        cls,
        snapshot: AircraftSnapshot,
        *,
        distance_km: float,
        bearing_deg: float,
        enrichment: EnrichmentRecord | None = None,
    ) -> "TrackedAircraft":
        """Merge a feed entry, its geometry, and registry details."""

        enrichment = enrichment or EnrichmentRecord()
        position = snapshot.position
        return cls(
            present=True,
            hex=snapshot.hex,
            flight=snapshot.flight,
            squawk=snapshot.squawk,
            latitude=position.latitude if position else 0.0,
            longitude=position.longitude if position else 0.0,
            altitude_ft=snapshot.altitude_ft,
            ground_speed_kts=snapshot.ground_speed_kts,
            track_deg=snapshot.track_deg,
            vertical_rate_fpm=snapshot.vertical_rate_fpm,
            distance_km=distance_km,
            bearing_deg=bearing_deg,
            registration=enrichment.registration,
            aircraft_type=enrichment.aircraft_type,
            operator=enrichment.operator,
        )


__all__ = [
    "AircraftSnapshot",
    "EnrichmentRecord",
    "NO_AIRCRAFT_DISTANCE_KM",
    "NO_AIRCRAFT_LABEL",
    "TrackedAircraft",
    "UNKNOWN",
    "WAITING_LABEL",
]
