"""
Models Package

SQLAlchemy models for restaurant-settings.
"""

from .base import Base, TimestampMixin
from .restaurant_settings import RestaurantSettingsRecord

__all__ = [
    # Base classes
    "Base",
    "TimestampMixin",
    # Database models
    "RestaurantSettingsRecord",
]
