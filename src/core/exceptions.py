"""
Custom Exceptions

Application-specific exception classes.

USAGE GUIDELINES:
- Always use ErrorCode enum members, not string literals
- Each exception subclass should use its corresponding domain error code
- Use the wrap() class method to preserve exception chains when wrapping lower-level exceptions
- Settings validation failures use ValidationErrorCode (HTTP 400)
- Request format validation errors use FastAPI RequestValidationError (HTTP 422)
"""

import json
from typing import TYPE_CHECKING, Any, Dict, Optional

from src.core.error_codes import SettingsErrorCode

if TYPE_CHECKING:
    from src.core.error_codes import ErrorCode


def _safe_serialize(obj: Any) -> Any:
    """Safely serialize an object for JSON, using repr() for non-serializable objects."""
    try:
        json.dumps(obj)
        return obj
    except (TypeError, ValueError):
        return repr(obj)


class ApplicationException(Exception):
    """Base exception for application-specific errors."""

    def __init__(
        self,
        message: str,
        error_code: Optional["ErrorCode | str"] = None,
        details: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
    ):
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.details = details or {}
        self.cause = cause

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for serialization with safe handling."""
        safe_details = {k: _safe_serialize(v) for k, v in self.details.items()}

        result = {
            "message": self.message,
            "code": (
                self.error_code.value
                if self.error_code is not None and hasattr(self.error_code, "value")
                else self.error_code
            ),
            "details": safe_details,
        }

        # Priority: custom cause > __cause__ > __context__
        cause = (
            self.cause
            or getattr(self, "__cause__", None)
            or getattr(self, "__context__", None)
        )
        if cause:
            result["cause"] = {"type": cause.__class__.__name__, "message": str(cause)}

        return result

    @classmethod
    def wrap(
        cls,
        exc: Exception,
        message: str,
        error_code: Optional["ErrorCode"] = None,
        **context: Any,
    ) -> "ApplicationException":
        """
        Wrap a lower-level exception into a business exception while preserving the exception chain.

        Example:
            try:
                db.commit()
            except SQLAlchemyError as e:
                raise DatabaseException.wrap(
                    e, "Failed to persist settings",
                    DatabaseErrorCode.QUERY_FAILED,
                    restaurant_id=restaurant_id,
                ) from e
        """
        return cls(message=message, error_code=error_code, details=context, cause=exc)

    def __str__(self) -> str:
        # The bare message is what end users see (admin forms, CLI)
        return self.message

    def __repr__(self) -> str:
        return (
            f"{self.__class__.__name__}("
            f"message={self.message!r}, "
            f"error_code={self.error_code!r}, "
            f"details={self.details!r}, "
            f"cause={self.cause!r})"
        )

    @property
    def http_status(self) -> int:
        """Get HTTP status code for this exception (lazy-loaded)."""
        if self.error_code:
            from src.core.error_codes import get_http_status_code

            return get_http_status_code(self.error_code)
        return 500


class ConfigurationException(ApplicationException):
    """Exception raised for configuration-related errors."""


class DatabaseException(ApplicationException):
    """Exception raised for database-related errors."""


class ValidationException(ApplicationException):
    """Exception raised for validation errors."""


class FieldValidationException(ValidationException):
    """A settings value failed its field's required/pattern/length/range check."""

    def __init__(
        self,
        message: str,
        error_code: Optional["ErrorCode | str"] = None,
        field_id: Optional[str] = None,
        **kwargs: Any,
    ) -> None:
        details = {"field": field_id} if field_id else {}
        super().__init__(message, error_code, details, **kwargs)
        self.field_id = field_id


class FieldNotEditableException(ApplicationException):
    """An update referenced an unknown or read-only settings field."""

    def __init__(self, field_id: str, **kwargs: Any) -> None:
        super().__init__(
            f"Field {field_id} is not editable",
            SettingsErrorCode.FIELD_NOT_EDITABLE,
            {"field": field_id},
            **kwargs,
        )
        self.field_id = field_id
