"""Registry lookups that attach registration, type and operator to an aircraft."""

from __future__ import annotations

import logging
import re
from typing import Any

import httpx

from nearsky.config import settings
from nearsky.errors import DecodeError, FetchError, NetworkError, NotFoundError
from nearsky.models.aircraft import UNKNOWN, EnrichmentRecord

logger = logging.getLogger("nearsky.ingestors.enrichment")

# ICAO addresses are hex; dump1090 marks non-ICAO addresses with a leading "~"
_IDENTIFIER_RE = re.compile(r"~?[0-9a-fA-F]+")


def _field(info: dict, key: str) -> str:
    value = info.get(key)
    if isinstance(value, str) and value.strip():
        return value.strip()
    return UNKNOWN


def parse_registry_payload(payload: Any, *, url: str | None = None) -> EnrichmentRecord:
    """Extract the first ``ac`` entry of an adsb.lol style response."""

    if not isinstance(payload, dict):
        raise DecodeError("Registry payload is not an object", url=url)

    entries = payload.get("ac")
    if entries is None or entries == []:
        raise NotFoundError("Registry has no record", url=url)
    if not isinstance(entries, list) or not isinstance(entries[0], dict):
        raise DecodeError("Registry ac field is not a list of objects", url=url)

    info = entries[0]
    return EnrichmentRecord(
        registration=_field(info, "r"),
        aircraft_type=_field(info, "t"),
        operator=_field(info, "ownOp"),
    )


class EnrichmentClient:
    """Look up aircraft details by ICAO hex address."""

    def __init__(
        self,
        *,
        base_url: str | None = None,
        timeout: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.base_url = (base_url or settings.enrichment_base_url).rstrip("/")
        self.timeout = timeout or settings.enrichment_timeout
        self.transport = transport

    async def lookup(self, identifier: str) -> EnrichmentRecord:
        identifier = identifier.strip()
        if not _IDENTIFIER_RE.fullmatch(identifier):
            raise DecodeError(f"Identifier {identifier!r} is not a hex address")

        url = f"{self.base_url}/{identifier.lower()}"
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout, transport=self.transport
            ) as client:
                response = await client.get(url)
        except httpx.TimeoutException as exc:
            raise NetworkError(f"Registry request timed out: {exc}", url=url) from exc
        except httpx.RequestError as exc:
            raise NetworkError(f"Registry request failed: {exc}", url=url) from exc
        except httpx.InvalidURL as exc:
            raise DecodeError(f"Registry URL is invalid: {exc}", url=url) from exc

        if response.status_code == 404:
            raise NotFoundError("Registry returned 404", url=url)
        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NetworkError(
                f"Registry returned HTTP {exc.response.status_code}", url=url
            ) from exc

        try:
            payload = response.json()
        except (ValueError, RecursionError) as exc:
            raise DecodeError(f"Registry body is not valid JSON: {exc}", url=url) from exc

        return parse_registry_payload(payload, url=url)

    async def fetch_enrichment(self, identifier: str | None) -> EnrichmentRecord:
        """Best-effort lookup: any failure yields a record of ``N/A`` fields."""

        if not identifier or not identifier.strip() or identifier == UNKNOWN:
            return EnrichmentRecord()

        try:
            record = await self.lookup(identifier)
        except NotFoundError:
            logger.debug("No registry record for %s", identifier)
            return EnrichmentRecord()
        except FetchError as exc:
            logger.info("Registry lookup for %s failed: %s", identifier, exc)
            return EnrichmentRecord()

        logger.debug("Registry record for %s: %s", identifier, record)
        return record


__all__ = ["EnrichmentClient", "parse_registry_payload"]
