from __future__ import annotations

import asyncio
import contextlib
import logging
import time

import uvicorn
from fastapi import FastAPI, Request

from nearsky.api import api_router
from nearsky.config import settings, load_location_conf
from nearsky.ingestors import EnrichmentClient, FeedClient
from nearsky.models.aircraft import TrackedAircraft
from nearsky.services import ResultMailbox, Tracker

logging.basicConfig(
    level=settings.log_level.upper(),
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger("nearsky")


def _log_proximity_alert(aircraft: TrackedAircraft) -> None:
    logger.warning(
        "!!! PROXIMITY ALERT !!! %s %s (%s) %.2f km bearing %.0f",
        aircraft.flight,
        aircraft.registration,
        aircraft.aircraft_type,
        aircraft.distance_km,
        aircraft.bearing_deg,
    )


def build_tracker(mailbox: ResultMailbox) -> Tracker:
    """Wire a tracker from settings overlaid with the receiver's location.conf."""

    config = load_location_conf(settings.location_conf, settings)
    return Tracker(
        observer=config.observer,
        feed_client=FeedClient(url=config.feed_url, timeout=config.feed_timeout),
        enrichment_client=EnrichmentClient(
            base_url=config.enrichment_base_url, timeout=config.enrichment_timeout
        ),
        mailbox=mailbox,
        refresh_interval_s=config.refresh_interval_s,
        alert_radius_km=config.proximity_alert_km,
        enable_enrichment=config.enable_enrichment,
        on_alert=_log_proximity_alert,
    )


@contextlib.asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application startup and shutdown lifecycle."""

    app.state.mailbox = ResultMailbox()

    if settings.enable_tracker:
        tracker = build_tracker(app.state.mailbox)
        app.state.tracker = tracker
        app.state.tracker_task = asyncio.create_task(tracker.run())
        logger.info(
            "Tracker started for observer %.4f, %.4f polling %s every %.1fs",
            tracker.observer.latitude,
            tracker.observer.longitude,
            tracker.feed_client.url,
            tracker.refresh_interval_s,
        )

    try:
        yield
    finally:
        # Cancelling the worker abandons any in-flight request
        task = getattr(app.state, "tracker_task", None)
        if task:
            task.cancel()
            with contextlib.suppress(asyncio.CancelledError):
                await task


app = FastAPI(title="NearSky Tracker", lifespan=lifespan)

@app.middleware("http")
async def log_requests(request: Request, call_next):
    """Log basic request information for observability."""

    start_time = time.time()
    response = await call_next(request)
    duration_ms = (time.time() - start_time) * 1000
    logger.info(
        "HTTP %s %s -> %s (%.2f ms)",
        request.method,
        request.url.path,
        response.status_code,
        duration_ms,
    )
    return response


app.include_router(api_router)


@app.get("/", summary="Root")
def read_root() -> dict[str, str]:
    """Basic root endpoint for quick verification."""

    return {"message": "NearSky tracker is running"}


def run() -> None:
    """Serve the tracker API with uvicorn (``nearsky`` console script)."""

    uvicorn.run(
        app,
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )


if __name__ == "__main__":
    run()
