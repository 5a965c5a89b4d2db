"""
API Version 1 Package

Version 1 of the restaurant-settings API endpoints.
"""

from fastapi import APIRouter

from .endpoints import health_router, settings_router

router = APIRouter()
router.include_router(health_router, tags=["health"])
router.include_router(settings_router)

__all__ = ["router"]
