"""
Logfire Configuration Module

Centralized Logfire configuration and instrumentation for restaurant-settings.

Usage:
    from src.core.logfire_config import initialize_logfire

    results = initialize_logfire(app)  # idempotent; safe to call at startup
    # results: {"configured": bool, "instrumentation": {...}}
"""

import logging
from typing import Any, Dict, Optional, Union

import logfire
from fastapi import FastAPI, Request, WebSocket

from src.core.config import settings
from src.core.logger import LOGGER_NAMESPACE, setup_logfire_handler

_logger = logging.getLogger(f"{LOGGER_NAMESPACE}.logfire")


class _LogfireState:
    """Tracks what has already been configured so repeated calls are no-ops."""

    def __init__(self) -> None:
        self.configured = False
        self.instrumented = False
        self.instrument_results: Dict[str, bool] = {"sqlalchemy": False}


_state = _LogfireState()


def custom_request_attributes_mapper(
    request: Union[Request, WebSocket], attributes: Dict[str, Any]
) -> Optional[Dict[str, Any]]:
    """
    Trim what Logfire records for each request.

    Validation errors are always kept. For successful requests the submitted
    settings values are kept, since they are what admins need when auditing a
    change, but anything that looks like a credential is redacted.
    """
    endpoint = str(request.url.path) if hasattr(request, "url") else "unknown"
    method = getattr(request, "method", "WebSocket")
    request_id = request.headers.get("x-request-id")

    if attributes.get("errors"):
        return {
            "errors": attributes["errors"],
            "endpoint": endpoint,
            "method": method,
            "request_id": request_id,
        }

    filtered_values: Dict[str, Any] = {}
    for key, value in (attributes.get("values") or {}).items():
        if key.lower() in ("password", "token", "api_key", "secret"):
            filtered_values[key] = "[REDACTED]"
        else:
            filtered_values[key] = value

    return {
        "values": filtered_values,
        "endpoint": endpoint,
        "method": method,
        "request_id": request_id,
    }


def setup_logfire() -> bool:
    """
    Configure Logfire from settings.

    Returns:
        bool: True if Logfire is configured, False otherwise
    """
    if not settings.logfire__enabled or _state.configured:
        return _state.configured

    try:
        config_kwargs: Dict[str, Any] = {
            "service_name": settings.logfire__service_name,
            "environment": settings.logfire__environment,
        }
        if settings.logfire__token:
            config_kwargs["token"] = settings.logfire__token.get_secret_value()

        logfire.configure(**config_kwargs)
        _logger.info(
            "Logfire initialized for service: %s", settings.logfire__service_name
        )

        setup_logfire_handler()
        _state.configured = True
        return True

    except Exception as e:
        _logger.error("Failed to initialize logfire: %s", e)
        return False


def instrument_logfire() -> Dict[str, bool]:
    """
    Instrument the libraries the settings service talks to.

    Returns:
        dict: Instrumentation result per library
    """
    if not settings.logfire__enabled or _state.instrumented:
        return dict(_state.instrument_results)

    if settings.logfire__instrument__sqlalchemy:
        try:
            logfire.instrument_sqlalchemy()
            _logger.info("Logfire SQLAlchemy instrumentation enabled")
            _state.instrument_results["sqlalchemy"] = True
        except Exception as e:
            _logger.warning("Failed to instrument SQLAlchemy with logfire: %s", e)

    _state.instrumented = True
    return dict(_state.instrument_results)


def instrument_fastapi(app: FastAPI) -> bool:
    """
    Set up Logfire instrumentation for FastAPI.

    Returns:
        bool: True if FastAPI was instrumented, False otherwise
    """
    if not settings.logfire__enabled or not settings.logfire__instrument__fastapi:
        return False

    try:
        logfire.instrument_fastapi(
            app,
            request_attributes_mapper=custom_request_attributes_mapper,
            capture_headers=True,
        )
        _logger.info("FastAPI instrumented with logfire")
        return True

    except Exception as e:
        _logger.error("Failed to instrument FastAPI with logfire: %s", e)
        return False


def initialize_logfire(app: Optional[FastAPI] = None) -> Dict[str, Any]:
    """
    Complete Logfire initialization including configuration and instrumentation.

    Args:
        app: Optional FastAPI application instance for instrumentation

    Returns:
        dict: Initialization results with status for each component
    """
    results: Dict[str, Any] = {
        "configured": False,
        "instrumentation": {"sqlalchemy": False, "fastapi": False},
    }

    results["configured"] = setup_logfire()

    if results["configured"]:
        results["instrumentation"].update(instrument_logfire())
        if app is not None:
            results["instrumentation"]["fastapi"] = instrument_fastapi(app)

    return results