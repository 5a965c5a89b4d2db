"""
Core Package

Configuration, logging, error handling and the settings field registry.
"""

# ruff: noqa: F401  # All imports are re-exported via __all__

from .config import Settings, settings
from .error_codes import (
    ERROR_CODE_MAP,
    APIErrorCode,
    ConfigurationErrorCode,
    DatabaseErrorCode,
    SettingsErrorCode,
    ValidationErrorCode,
    get_http_status_code,
)
from .exceptions import (
    ApplicationException,
    ConfigurationException,
    DatabaseException,
    FieldNotEditableException,
    FieldValidationException,
    ValidationException,
)
from .field_catalog import DEFAULT_RESTAURANT_SETTINGS, FIELD_CATALOG, WEEKDAYS
from .field_definitions import (
    FieldCategory,
    FieldDefinition,
    FieldOption,
    FieldType,
    FieldValidation,
    SettingsRecord,
    SettingValue,
)
from .field_registry import SettingsRegistry, get_settings_registry
from .logger import get_logger

__all__ = [
    # Configuration
    "Settings",
    "settings",
    # Error handling
    "ERROR_CODE_MAP",
    "APIErrorCode",
    "ConfigurationErrorCode",
    "DatabaseErrorCode",
    "SettingsErrorCode",
    "ValidationErrorCode",
    "get_http_status_code",
    # Exceptions
    "ApplicationException",
    "ConfigurationException",
    "DatabaseException",
    "FieldNotEditableException",
    "FieldValidationException",
    "ValidationException",
    # Field catalog and registry
    "DEFAULT_RESTAURANT_SETTINGS",
    "FIELD_CATALOG",
    "WEEKDAYS",
    "FieldCategory",
    "FieldDefinition",
    "FieldOption",
    "FieldType",
    "FieldValidation",
    "SettingsRecord",
    "SettingValue",
    "SettingsRegistry",
    "get_settings_registry",
    # Logger
    "get_logger",
]
