"""Feed ingestor for a local dump1090 receiver's aircraft.json."""

from __future__ import annotations

import logging
import math
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from nearsky.config import settings
from nearsky.errors import DecodeError, NetworkError
from nearsky.models.aircraft import UNKNOWN, AircraftSnapshot
from nearsky.models.geo import Coordinate

logger = logging.getLogger("nearsky.ingestors.feed")

# Longest accepted values; dump1090 prefixes non-ICAO addresses with "~"
MAX_HEX_LEN = 10
MAX_FLIGHT_LEN = 16
MAX_SQUAWK_LEN = 4


def _as_number(value: Any) -> float | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return float(value)


def _as_int(value: Any) -> int:
    number = _as_number(value)
    return int(number) if number is not None else 0


def _as_float(value: Any) -> float:
    number = _as_number(value)
    return number if number is not None else 0.0


def _as_text(entry: dict, field: str, max_len: int) -> str:
    value = entry.get(field)
    if not isinstance(value, str) or not value.strip():
        return UNKNOWN
    text = value.strip()
    if len(text) > max_len:
        raise DecodeError(f"{field} {text!r} is longer than {max_len} characters")
    return text


def _parse_position(entry: dict) -> Coordinate | None:
    lat = _as_number(entry.get("lat"))
    lon = _as_number(entry.get("lon"))
    if lat is None or lon is None:
        return None
    try:
        return Coordinate(latitude=lat, longitude=lon)
    except ValidationError:
        logger.debug("Discarding out-of-range position %s, %s", lat, lon)
        return None


def parse_aircraft_entry(entry: Any) -> Optional[AircraftSnapshot]:
    """Decode one aircraft.json entry.

    Returns None for entries that are not objects or carry no usable
    position. Missing or non-numeric numbers become 0 and missing strings
    become ``UNKNOWN``. Raises DecodeError when a text field is too long to
    be a real identifier, callsign, or squawk.
    """

    if not isinstance(entry, dict):
        return None

    position = _parse_position(entry)
    if position is None:
        return None

    return AircraftSnapshot(
        hex=_as_text(entry, "hex", MAX_HEX_LEN),
        flight=_as_text(entry, "flight", MAX_FLIGHT_LEN),
        squawk=_as_text(entry, "squawk", MAX_SQUAWK_LEN),
        position=position,
        altitude_ft=_as_int(entry.get("alt_baro")),
        ground_speed_kts=_as_float(entry.get("gs")),
        track_deg=_as_float(entry.get("track")),
        vertical_rate_fpm=_as_int(entry.get("baro_rate")),
    )


class FeedClient:
    """Poll the receiver's JSON aircraft list."""

    def __init__(
        self,
        *,
        url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.url = url or settings.feed_url
        self.timeout = timeout or settings.feed_timeout
        self.transport = transport

    async def fetch_snapshot(self) -> list[AircraftSnapshot]:
        """Return every positioned aircraft currently in the feed.

        Raises NetworkError on transport, timeout, or HTTP status failures and
        DecodeError when the body is not JSON or lacks an ``aircraft`` array.
        """

        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(self.url)
                response.raise_for_status()
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Feed request timed out: {exc}", url=self.url) from exc
        except httpx.HTTPStatusError as exc:
            raise NetworkError(
                f"Feed returned HTTP {exc.response.status_code}", url=self.url
            ) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"Feed request failed: {exc}", url=self.url) from exc
        except httpx.InvalidURL as exc:
            raise NetworkError(f"Feed URL is invalid: {exc}", url=self.url) from exc

        try:
            payload = response.json()
        except (ValueError, RecursionError) as exc:
            raise DecodeError(f"Feed body is not valid JSON: {exc}", url=self.url) from exc

        raw_aircraft = payload.get("aircraft") if isinstance(payload, dict) else None
        if not isinstance(raw_aircraft, list):
            raise DecodeError("Feed payload has no aircraft array", url=self.url)

        snapshots: list[AircraftSnapshot] = []
        unpositioned = 0
        for entry in raw_aircraft:
            try:
                snapshot = parse_aircraft_entry(entry)
            except DecodeError as exc:
                logger.warning("Skipping malformed aircraft entry: %s", exc)
                continue
            if snapshot is None:
                unpositioned += 1
                continue
            snapshots.append(snapshot)

        logger.debug(
            "Feed listed %s aircraft, %s with position", len(raw_aircraft), len(snapshots)
        )
        if unpositioned:
            logger.debug("Ignored %s aircraft without position", unpositioned)
        return snapshots


__all__ = ["FeedClient", "parse_aircraft_entry"]
