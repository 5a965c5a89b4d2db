"""
Settings Converters

Converters between API layer schemas and the settings service layer.
"""

from typing import List, Mapping

from src.api.v1.schemas.responses import (
    CategorySettingsResponse,
    FieldDefinitionResponse,
    FieldOptionResponse,
    FieldValidationResponse,
    HoursDisplayItemResponse,
    HoursDisplayResponse,
    SettingsResponse,
    SettingsValidationResponse,
)
from src.core.field_definitions import FieldDefinition, SettingValue
from src.services.settings_service import HoursDisplayEntry


def convert_settings_to_response(
    restaurant_id: str, record: Mapping[str, SettingValue]
) -> SettingsResponse:
    """Convert a full settings record to API response."""
    return SettingsResponse(restaurant_id=restaurant_id, settings=dict(record))


def convert_category_settings_to_response(
    restaurant_id: str, category: str, record: Mapping[str, SettingValue]
) -> CategorySettingsResponse:
    """Convert a category view to API response."""
    return CategorySettingsResponse(
        restaurant_id=restaurant_id, category=category, settings=dict(record)
    )


def convert_field_definition_to_response(
    field: FieldDefinition,
) -> FieldDefinitionResponse:
    """Convert a field definition to API response; patterns are sent as source text."""
    validation = None
    if field.validation is not None:
        rules = field.validation
        validation = FieldValidationResponse(
            pattern=rules.pattern.pattern if rules.pattern is not None else None,
            min_length=rules.min_length,
            max_length=rules.max_length,
            min=rules.min,
            max=rules.max,
        )

    return FieldDefinitionResponse(
        id=field.id,
        label=field.label,
        type=field.type.value,
        required=field.required,
        placeholder=field.placeholder,
        validation=validation,
        options=[
            FieldOptionResponse(value=option.value, label=option.label)
            for option in field.options
        ],
        default_value=field.default_value,
        editable=field.editable,
        category=field.category,
    )


def convert_validation_errors_to_response(
    errors: Mapping[str, str],
) -> SettingsValidationResponse:
    """Convert a validation preview to API response."""
    return SettingsValidationResponse(valid=not errors, errors=dict(errors))


def convert_hours_display_to_response(
    restaurant_id: str, entries: List[HoursDisplayEntry]
) -> HoursDisplayResponse:
    """Convert the hours listing to API response."""
    return HoursDisplayResponse(
        restaurant_id=restaurant_id,
        hours=[
            HoursDisplayItemResponse(day=entry.day, hours=entry.hours)
            for entry in entries
        ],
    )
