"""Refresh cycle and periodic worker for closest-aircraft tracking."""

from __future__ import annotations

import asyncio
import inspect
import logging
from typing import Awaitable, Callable, Optional, Union

from nearsky.config import settings
from nearsky.errors import FetchError
from nearsky.ingestors import EnrichmentClient, FeedClient
from nearsky.models.aircraft import TrackedAircraft
from nearsky.models.geo import Coordinate
from nearsky.models.tracking import CycleResult, CycleStatus
from nearsky.services.mailbox import ResultMailbox
from nearsky.services.selector import select_closest
from nearsky.services.tracking import TrackingState
from nearsky.squawk import describe_squawk, is_emergency

logger = logging.getLogger("nearsky.tracker")

AlertCallback = Callable[[TrackedAircraft], Union[None, Awaitable[None]]]


class Tracker:
    """Poll the feed, track the closest aircraft, and post results."""

    def __init__(
        self,
        *,
        observer: Optional[Coordinate] = None,
        feed_client: Optional[FeedClient] = None,
        enrichment_client: Optional[EnrichmentClient] = None,
        mailbox: Optional[ResultMailbox] = None,
        refresh_interval_s: float | None = None,
        alert_radius_km: float | None = None,
        enable_enrichment: bool | None = None,
        on_alert: Optional[AlertCallback] = None,
    ) -> None:
        self.observer = observer or settings.observer
        self.feed_client = feed_client or FeedClient()
        self.enrichment_client = enrichment_client or EnrichmentClient()
        self.mailbox = mailbox or ResultMailbox()
        self.refresh_interval_s = (
            settings.refresh_interval_s if refresh_interval_s is None else refresh_interval_s
        )
        self.state = TrackingState(
            settings.proximity_alert_km if alert_radius_km is None else alert_radius_km
        )
        self.enable_enrichment = (
            settings.enable_enrichment if enable_enrichment is None else enable_enrichment
        )
        self.on_alert = on_alert
        self._in_flight = False

    @property
    def current(self) -> TrackedAircraft:
        return self.state.current

    async def refresh(self) -> CycleResult | None:
        """Run one refresh cycle and post its result to the mailbox.

        Returns None without doing anything if a cycle is already running.
        """

        if self._in_flight:
            logger.debug("Refresh skipped; previous cycle still running")
            return None

        self._in_flight = True
        try:
            result = await self._run_cycle()
        finally:
            self._in_flight = False

        self.mailbox.put(result)
        if result.alert_triggered:
            await self._notify_alert(result.aircraft)
        return result

    async def _run_cycle(self) -> CycleResult:
        try:
            snapshots = await self.feed_client.fetch_snapshot()
        except FetchError as exc:
            logger.warning("Feed unavailable, keeping last known aircraft: %s", exc)
            return self.state.record_failure(exc)

        selection = select_closest(snapshots, self.observer)
        enrichment = None
        if selection is not None and self.enable_enrichment:
            enrichment = await self.enrichment_client.fetch_enrichment(
                selection.snapshot.hex
            )

        result = self.state.apply(selection, enrichment)
        aircraft = result.aircraft
        if result.status is CycleStatus.NO_AIRCRAFT:
            logger.debug("No positioned aircraft among %s feed entries", len(snapshots))
        else:
            logger.debug(
                "Closest aircraft %s (%s) at %.2f km bearing %.0f",
                aircraft.flight,
                aircraft.hex,
                aircraft.distance_km,
                aircraft.bearing_deg,
            )
            if is_emergency(aircraft.squawk):
                logger.warning(
                    "Aircraft %s squawking %s (%s)",
                    aircraft.hex,
                    aircraft.squawk,
                    describe_squawk(aircraft.squawk),
                )
        return result

    async def _notify_alert(self, aircraft: TrackedAircraft) -> None:
        logger.info(
            "Proximity alert: %s (%s) at %.2f km",
            aircraft.flight,
            aircraft.hex,
            aircraft.distance_km,
        )
        if self.on_alert is None:
            return
        try:
            outcome = self.on_alert(aircraft)
            if inspect.isawaitable(outcome):
                await outcome
        except Exception as exc:  # pragma: no cover - defensive logging
            logger.warning("Alert callback failed: %s", exc)

    async def run(self, max_cycles: int | None = None) -> None:
        """Refresh on a fixed period until cancelled.

        The period is measured from the start of each cycle; a cycle that
        overruns is followed immediately by the next one.
        """

        loop = asyncio.get_running_loop()
        cycles = 0
        while True:
            started = loop.time()
            try:
                await self.refresh()
            except asyncio.CancelledError:
                logger.info("Tracker cancelled")
                raise
            except Exception as exc:  # pragma: no cover - defensive logging
                logger.exception("Refresh cycle failed: %s", exc)

            cycles += 1
            if max_cycles is not None and cycles >= max_cycles:
                return

            elapsed = loop.time() - started
            await asyncio.sleep(max(self.refresh_interval_s - elapsed, 0.0))


__all__ = ["AlertCallback", "Tracker"]
