"""Error taxonomy for feed and registry requests."""

from __future__ import annotations


class FetchError(Exception):
    """Base class for failures fetching remote aircraft data."""

    def __init__(self, message: str, *, url: str | None = None) -> None:
        super().__init__(message)
        self.url = url


class NetworkError(FetchError):
    """Raised on connect, timeout, or HTTP status failures."""


class DecodeError(FetchError):
    """Raised when a payload is not valid JSON or has an unexpected shape."""


class NotFoundError(FetchError):
    """Raised when the registry has no record for an identifier."""


__all__ = ["DecodeError", "FetchError", "NetworkError", "NotFoundError"]
