"""Geographic primitives."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class Coordinate(BaseModel):
    """A latitude/longitude pair in decimal degrees."""

    latitude: float = Field(..., ge=-90.0, le=90.0, description="Latitude in decimal degrees")
    longitude: float = Field(
        ..., ge=-180.0, le=180.0, description="Longitude in decimal degrees"
    )

    model_config = ConfigDict(frozen=True, extra="ignore")


__all__ = ["Coordinate"]
