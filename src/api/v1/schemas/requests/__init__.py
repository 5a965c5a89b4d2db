"""
V1 API Request Schemas

Request schemas for all API v1 endpoints.
"""

from .settings_requests import ApplyDayHoursRequest, SettingsUpdateRequest

__all__ = [
    "ApplyDayHoursRequest",
    "SettingsUpdateRequest",
]
