"""
Error Codes

Standardized error codes for restaurant-settings.
"""

from enum import StrEnum
from types import MappingProxyType
from typing import Mapping


class ErrorCode(StrEnum):
    """Base error code enum (string-based)."""


class ConfigurationErrorCode(ErrorCode):
    """Configuration-related error codes."""

    INVALID_CONFIG = "CONFIGURATION_INVALID_CONFIG"


class DatabaseErrorCode(ErrorCode):
    """Database-related error codes."""

    CONNECTION_FAILED = "DATABASE_CONNECTION_FAILED"
    QUERY_FAILED = "DATABASE_QUERY_FAILED"


class APIErrorCode(ErrorCode):
    """API-related error codes."""

    INTERNAL_ERROR = "API_INTERNAL_ERROR"


class ValidationErrorCode(ErrorCode):
    """Validation-related error codes."""

    INVALID_INPUT = "VALIDATION_INVALID_INPUT"
    MISSING_FIELD = "VALIDATION_MISSING_FIELD"
    INVALID_FORMAT = "VALIDATION_INVALID_FORMAT"
    VALUE_OUT_OF_RANGE = "VALIDATION_VALUE_OUT_OF_RANGE"


class SettingsErrorCode(ErrorCode):
    """Restaurant settings error codes."""

    FIELD_NOT_EDITABLE = "SETTINGS_FIELD_NOT_EDITABLE"
    UNKNOWN_DAY = "SETTINGS_UNKNOWN_DAY"


# Error code to HTTP status mapping
#
# Error code values carry a domain prefix (DATABASE_*, SETTINGS_*, ...) so they
# stay unique in API responses and logs. Every new code needs an entry here.
# ValidationErrorCode uses 400 for business validation failures, while
# FastAPI RequestValidationError uses 422 for malformed request bodies.
ERROR_CODE_MAP: Mapping[ErrorCode, int] = MappingProxyType(
    {
        # Configuration errors
        ConfigurationErrorCode.INVALID_CONFIG: 500,
        # Database errors
        DatabaseErrorCode.CONNECTION_FAILED: 503,
        DatabaseErrorCode.QUERY_FAILED: 500,
        # API errors
        APIErrorCode.INTERNAL_ERROR: 500,
        # Validation errors
        ValidationErrorCode.INVALID_INPUT: 400,
        ValidationErrorCode.MISSING_FIELD: 400,
        ValidationErrorCode.INVALID_FORMAT: 400,
        ValidationErrorCode.VALUE_OUT_OF_RANGE: 400,
        # Settings errors
        SettingsErrorCode.FIELD_NOT_EDITABLE: 400,
        SettingsErrorCode.UNKNOWN_DAY: 400,
    }
)


def _get_status_for_string(error_code_str: str) -> int:
    """Helper function to get status code for string error code."""
    for code in ERROR_CODE_MAP:
        if code.value == error_code_str:
            return ERROR_CODE_MAP[code]
    return 500


def get_http_status_code(error_code: ErrorCode | str) -> int:
    """
    Get HTTP status code for an error code.

    Args:
        error_code: Error code enum or string

    Returns:
        HTTP status code (defaults to 500 if not found)
    """
    if isinstance(error_code, ErrorCode):
        return ERROR_CODE_MAP.get(error_code, 500)
    return _get_status_for_string(error_code)
