"""Configuration settings for the NearSky tracker."""

from __future__ import annotations

import dataclasses
import logging
import os
from dataclasses import dataclass
from pathlib import Path

from nearsky.models.geo import Coordinate

logger = logging.getLogger("nearsky.config")


def _get_bool(env_var: str, default: bool = False) -> bool:
    """Parse an environment variable into a boolean with a default."""

    value = os.getenv(env_var)
    if value is None:
        return default

    return value.lower() in {"1", "true", "yes", "on"}


@dataclass
class Settings:
    """Application configuration loaded from environment variables."""

    nearsky_env: str = os.getenv("NEARSKY_ENV", "local")
    log_level: str = os.getenv("NEARSKY_LOG_LEVEL", "INFO")

    # Observer location (defaults to central London)
    observer_lat: float = float(os.getenv("NEARSKY_OBSERVER_LAT", "51.5074"))
    observer_lon: float = float(os.getenv("NEARSKY_OBSERVER_LON", "-0.1278"))

    # dump1090 feed
    feed_host: str = os.getenv("NEARSKY_FEED_HOST", "127.0.0.1")
    feed_port: int = int(os.getenv("NEARSKY_FEED_PORT", "8080"))
    feed_path: str = os.getenv("NEARSKY_FEED_PATH", "/dump1090-fa/data/aircraft.json")
    feed_timeout: float = float(os.getenv("NEARSKY_FEED_TIMEOUT", "10.0"))

    # Registry enrichment
    enable_enrichment: bool = _get_bool("NEARSKY_ENABLE_ENRICHMENT", default=True)
    enrichment_base_url: str = os.getenv(
        "NEARSKY_ENRICHMENT_BASE_URL", "https://api.adsb.lol/v2/hex"
    )
    enrichment_timeout: float = float(os.getenv("NEARSKY_ENRICHMENT_TIMEOUT", "10.0"))

    # Tracking loop
    enable_tracker: bool = _get_bool("NEARSKY_ENABLE_TRACKER", default=True)
    refresh_interval_s: float = float(os.getenv("NEARSKY_REFRESH_INTERVAL_S", "5.0"))
    proximity_alert_km: float = float(os.getenv("NEARSKY_PROXIMITY_ALERT_KM", "5.0"))

    location_conf: str = os.getenv("NEARSKY_LOCATION_CONF", "location.conf")

    # HTTP server
    api_host: str = os.getenv("NEARSKY_API_HOST", "127.0.0.1")
    api_port: int = int(os.getenv("NEARSKY_API_PORT", "8000"))

    @property
    def feed_url(self) -> str:
        path = self.feed_path if self.feed_path.startswith("/") else f"/{self.feed_path}"
        return f"http://{self.feed_host}:{self.feed_port}{path}"

    @property
    def observer(self) -> Coordinate:
        return Coordinate(latitude=self.observer_lat, longitude=self.observer_lon)


# Keys understood in the receiver's location.conf and the settings they map to
_LOCATION_CONF_KEYS = {
    "server_ip": ("feed_host", str),
    "lat": ("observer_lat", float),
    "lon": ("observer_lon", float),
}


def load_location_conf(path: str | os.PathLike[str], base: Settings | None = None) -> Settings:
    """Overlay a ``key=value`` location.conf file on top of ``base`` settings.

    Unknown keys and malformed lines are skipped. A missing file leaves the
    settings unchanged. The input settings object is never modified.
    """

    base = base or settings
    conf_path = Path(path)
    if not conf_path.is_file():
        logger.info("%s not found; using default location settings", conf_path)
        return base

    overrides: dict[str, object] = {}
    for lineno, raw_line in enumerate(conf_path.read_text().splitlines(), start=1):
        line = raw_line.strip()
        if not line or line.startswith("#") or "=" not in line:
            continue
        key, _, value = line.partition("=")
        key = key.strip()
        value = value.strip()
        if key not in _LOCATION_CONF_KEYS or not value:
            continue
        field_name, convert = _LOCATION_CONF_KEYS[key]
        try:
            overrides[field_name] = convert(value)
        except ValueError:
            logger.warning("Ignoring invalid %s=%r on line %s of %s", key, value, lineno, conf_path)

    logger.info("Loaded settings from %s", conf_path)
    return dataclasses.replace(base, **overrides)


settings = Settings()

__all__ = ["settings", "Settings", "load_location_conf"]
