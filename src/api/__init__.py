"""
API Package

Main API package for restaurant-settings.
"""

from .factory import create_api
from .router import router

__all__ = ["router", "create_api"]
