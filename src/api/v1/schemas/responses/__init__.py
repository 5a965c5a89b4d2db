"""
V1 API Response Schemas

Response schemas for all API v1 endpoints.
"""

from .health_response import HealthResponse
from .settings_responses import (
    CategorySettingsResponse,
    FieldDefinitionResponse,
    FieldOptionResponse,
    FieldValidationResponse,
    HoursDisplayItemResponse,
    HoursDisplayResponse,
    SettingsResponse,
    SettingsValidationResponse,
)

__all__ = [
    "HealthResponse",
    "CategorySettingsResponse",
    "FieldDefinitionResponse",
    "FieldOptionResponse",
    "FieldValidationResponse",
    "HoursDisplayItemResponse",
    "HoursDisplayResponse",
    "SettingsResponse",
    "SettingsValidationResponse",
]
