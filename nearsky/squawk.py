"""Transponder squawk code classification."""

from __future__ import annotations

_SQUAWK_DESCRIPTIONS = {
    "7700": "General Emergency",
    "7600": "Radio Failure",
    "7500": "Hijacking",
    "7000": "VFR Conspicuity",
}
_EMERGENCY_CODES = frozenset({"7500", "7600", "7700"})

DISCRETE_CODE = "Discrete Code"


def describe_squawk(squawk: str | None) -> str:
    return _SQUAWK_DESCRIPTIONS.get(squawk or "", DISCRETE_CODE)


def is_emergency(squawk: str | None) -> bool:
    """Return True for the hijack, radio failure and general emergency codes."""

    return squawk in _EMERGENCY_CODES


__all__ = ["DISCRETE_CODE", "describe_squawk", "is_emergency"]
