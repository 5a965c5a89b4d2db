"""
Exception Handlers

Turns every exception raised while serving a request into the standard
ErrorResponse envelope.
"""

import traceback
from typing import Tuple

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.api.schemas.error import ErrorDetail, ErrorResponse
from src.core.config import settings
from src.core.error_codes import APIErrorCode, ValidationErrorCode
from src.core.exceptions import ApplicationException
from src.core.logger import get_logger

logger = get_logger(__name__)


def _log_exception(request: Request, exc: Exception, status_code: int) -> None:
    """Log at a level that follows the response status."""
    msg = "%s %s failed with %d: %s"
    args = (request.method, request.url.path, status_code, str(exc))

    if status_code >= 500:
        logger.error(msg, *args, exc_info=True)
    else:
        logger.warning(msg, *args)


def _build_response(
    error: ErrorDetail, request: Request, status_code: int
) -> JSONResponse:
    """Build standardized error response."""
    request_id = getattr(request.state, "request_id", None)

    payload = ErrorResponse(
        error=error,
        request_id=request_id,
        path=request.url.path,
        method=request.method,
    )

    headers = {"X-Request-ID": request_id} if request_id else {}
    return JSONResponse(
        status_code=status_code, content=payload.model_dump(), headers=headers
    )


def _describe(exc: Exception) -> Tuple[ErrorDetail, int]:
    if isinstance(exc, ApplicationException):
        exc_dict = exc.to_dict()
        return (
            ErrorDetail(
                type=exc.__class__.__name__,
                message=exc_dict["message"],
                code=exc_dict["code"],
                details=exc_dict["details"],
            ),
            exc.http_status,
        )

    if isinstance(exc, StarletteHTTPException):
        return (
            ErrorDetail(
                type="HTTPException",
                message=str(exc.detail),
                code=f"HTTP_{exc.status_code}",
            ),
            exc.status_code,
        )

    if isinstance(exc, RequestValidationError):
        return (
            ErrorDetail(
                type="ValidationError",
                message="Request validation failed",
                code=ValidationErrorCode.INVALID_INPUT.value,
                details={"validation_errors": jsonable_errors(exc)},
            ),
            422,
        )

    error = ErrorDetail(
        type="InternalServerError",
        message="An unexpected error occurred",
        code=APIErrorCode.INTERNAL_ERROR.value,
    )
    if settings.debug:
        error.debug = {
            "exception_type": exc.__class__.__name__,
            "exception_message": str(exc),
            "traceback": "".join(traceback.format_exception(exc)),
        }
    return error, 500


def jsonable_errors(exc: RequestValidationError) -> list:
    """Validation errors without the non-serializable ctx/input payloads."""
    return [
        {key: value for key, value in err.items() if key in ("loc", "msg", "type")}
        for err in exc.errors()
    ]


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler for all exceptions raised by endpoints.

    Args:
        request: FastAPI request object
        exc: Exception that was raised

    Returns:
        JSONResponse with standardized error format
    """
    error, status_code = _describe(exc)
    _log_exception(request, exc, status_code)
    return _build_response(error, request, status_code)


__all__ = ["global_exception_handler", "jsonable_errors"]
