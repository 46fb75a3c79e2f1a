"""Read-only views of the tracking loop's latest result."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Path, Request
from pydantic import BaseModel, Field

from nearsky.models.tracking import CycleResult
from nearsky.services.mailbox import ResultMailbox
from nearsky.squawk import describe_squawk, is_emergency

router = APIRouter(prefix="/api/v1", tags=["aircraft"])

logger = logging.getLogger("nearsky.api.aircraft")


class SquawkResponse(BaseModel):
    """Classification of a transponder code."""

    squawk: str = Field(..., description="Four-digit squawk code")
    description: str = Field(..., description="Meaning of the code")
    emergency: bool = Field(..., description="True for 7500, 7600 and 7700")


@router.get(
    "/aircraft/closest",
    response_model=CycleResult,
    summary="Get the aircraft currently closest to the observer",
)
def get_closest_aircraft(request: Request) -> CycleResult:
    """Return the latest refresh cycle result, or the waiting state before the first."""

    mailbox: ResultMailbox | None = getattr(request.app.state, "mailbox", None)
    result = mailbox.peek() if mailbox else None
    if result is None:
        logger.debug("No cycle result yet; returning idle state")
        return CycleResult.idle()
    return result


@router.get(
    "/squawk/{code}",
    response_model=SquawkResponse,
    summary="Describe a squawk code",
)
def get_squawk(code: str = Path(..., min_length=1, max_length=4)) -> SquawkResponse:
    return SquawkResponse(
        squawk=code,
        description=describe_squawk(code),
        emergency=is_emergency(code),
    )
