"""
API Layer Converters

Converters between API layer schemas and service layer schemas.
"""

from .settings_converters import (
    convert_category_settings_to_response,
    convert_field_definition_to_response,
    convert_hours_display_to_response,
    convert_settings_to_response,
    convert_validation_errors_to_response,
)

__all__ = [
    "convert_category_settings_to_response",
    "convert_field_definition_to_response",
    "convert_hours_display_to_response",
    "convert_settings_to_response",
    "convert_validation_errors_to_response",
]
