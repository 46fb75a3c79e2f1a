"""API routers for the NearSky tracker."""

from fastapi import APIRouter

from .aircraft import router as aircraft_router
from .health import router as health_router

api_router = APIRouter()
api_router.include_router(health_router)
api_router.include_router(aircraft_router)

__all__ = ["api_router"]
