"""Data ingestors for the NearSky tracker."""

from .enrichment import EnrichmentClient
from .feed import FeedClient

__all__ = [
    "EnrichmentClient",
    "FeedClient",
]
