"""
API Schemas

Pydantic models for API requests and responses.
"""

from .error import ErrorDetail, ErrorResponse, ValidationErrorDetail

__all__ = ["ErrorResponse", "ErrorDetail", "ValidationErrorDetail"]
