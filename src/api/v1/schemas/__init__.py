"""
V1 API Schemas Package

Pydantic models for settings API request and response data.
"""

from .requests import ApplyDayHoursRequest, SettingsUpdateRequest
from .responses import (
    CategorySettingsResponse,
    FieldDefinitionResponse,
    HealthResponse,
    HoursDisplayResponse,
    SettingsResponse,
    SettingsValidationResponse,
)

__all__ = [
    "ApplyDayHoursRequest",
    "SettingsUpdateRequest",
    "CategorySettingsResponse",
    "FieldDefinitionResponse",
    "HealthResponse",
    "HoursDisplayResponse",
    "SettingsResponse",
    "SettingsValidationResponse",
]
