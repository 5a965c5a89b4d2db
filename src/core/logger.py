"""
Core Logger Module

Centralized logging configuration for restaurant-settings with optional
Logfire integration.
"""

import logging
import logging.config
import sys
from contextvars import ContextVar
from functools import lru_cache
from pathlib import Path
from typing import Any, Dict, Optional

from src.core.config import settings

LOGGER_NAMESPACE = "restaurant_settings"

_RECORD_BUILTIN_ATTRS = frozenset(
    logging.LogRecord("", 0, "", 0, "", (), None).__dict__.keys()
) | {"message", "asctime"}


def _get_setting(name: str, default: Any) -> Any:
    """Get a setting with a default fallback."""
    return getattr(settings, name, default)


@lru_cache(maxsize=1)
def _get_logfire_module() -> Any:
    """Get cached logfire module or None if not available."""
    try:
        import logfire as _lf

        return _lf
    except ImportError:
        return None


def _sanitize_attributes(attrs: Dict[str, Any]) -> Dict[str, Any]:
    """Make record attributes safe for structured logging and redact sensitive keys."""
    safe: Dict[str, Any] = {}
    redact_keywords = ("password", "secret", "token", "api_key", "apikey")
    for k, v in attrs.items():
        if any(word in k.lower() for word in redact_keywords):
            safe[k] = "<redacted>"
        elif isinstance(v, (str, int, float, bool)) or v is None:
            safe[k] = v
        else:
            safe[k] = repr(v)
    return safe


# Restaurant whose settings the current request/command is touching
_restaurant_id_context: ContextVar[Optional[str]] = ContextVar(
    "restaurant_id", default=None
)


def set_restaurant_id(restaurant_id: str) -> None:
    """Set the restaurant ID in the current context for logging."""
    _restaurant_id_context.set(restaurant_id)


def get_restaurant_id() -> Optional[str]:
    """Get the current restaurant ID from context."""
    return _restaurant_id_context.get()


class RestaurantAwareLogfireHandler(logging.Handler):
    """
    Logfire handler that tags every record with the current restaurant ID.

    Falls back to a plain stream handler when Logfire is unavailable or
    rejects the record.
    """

    def __init__(
        self,
        level: int | str = logging.NOTSET,
        fallback: Optional[logging.Handler] = None,
        logfire_instance: Any = None,
    ) -> None:
        super().__init__(level=level)
        self.fallback = fallback or logging.StreamHandler(sys.stderr)
        self.logfire_instance = logfire_instance

    def emit(self, record: logging.LogRecord) -> None:
        logfire = self.logfire_instance or _get_logfire_module()
        if logfire is None:
            self.fallback.emit(record)
            return

        try:
            restaurant_id = get_restaurant_id()
            target = (
                logfire.with_tags(f"restaurant:{restaurant_id}")
                if restaurant_id
                else logfire
            )

            extra = {
                k: v for k, v in record.__dict__.items() if k not in _RECORD_BUILTIN_ATTRS
            }
            attributes = _sanitize_attributes(extra)
            attributes["code.filepath"] = record.pathname
            attributes["code.lineno"] = record.lineno
            attributes["code.function"] = record.funcName

            target.log(
                level=record.levelname.lower(),
                msg_template=record.getMessage(),
                attributes=attributes,
                exc_info=record.exc_info,
            )
        except (AttributeError, TypeError, ValueError):
            self.fallback.emit(record)


def get_logging_config() -> Dict[str, Any]:
    """
    Generate base logging configuration (console + rotating file).
    The Logfire handler is attached separately via setup_logfire_handler().
    """
    log_level = (_get_setting("log_level", "info") or "info").upper()

    logs_dir = Path(_get_setting("log__dir", "logs"))
    file_path = _get_setting("log__file_path", None)
    if file_path is None:
        logs_dir.mkdir(parents=True, exist_ok=True)
        file_path = str(logs_dir / f"{LOGGER_NAMESPACE}.log")

    handlers = {
        "console": {
            "class": "logging.StreamHandler",
            "level": log_level,
            "formatter": "simple",
            "stream": sys.stdout,
        },
        "file": {
            "class": "logging.handlers.RotatingFileHandler",
            "level": _get_setting("log__file_level", "INFO"),
            "formatter": "detailed",
            "filename": file_path,
            "maxBytes": int(_get_setting("log__file_max_bytes", 10 * 1024 * 1024)),
            "backupCount": int(_get_setting("log__file_backup_count", 3)),
            "encoding": "utf-8",
        },
    }

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "formatters": {
            "simple": {
                "format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s",
                "datefmt": "%H:%M:%S",
            },
            "detailed": {
                "format": (
                    "%(asctime)s - %(name)s - %(levelname)s - "
                    "%(module)s:%(lineno)d - %(message)s"
                ),
                "datefmt": "%Y-%m-%d %H:%M:%S",
            },
        },
        "handlers": handlers,
        "loggers": {
            LOGGER_NAMESPACE: {
                "level": log_level,
                "handlers": ["console", "file"],
                "propagate": False,
            },
            "uvicorn.access": {"level": "WARNING", "propagate": True},
            "sqlalchemy.engine": {"level": "WARNING", "propagate": True},
        },
        "root": {"level": "WARNING", "handlers": ["console"]},
    }


def setup_logfire_handler() -> None:
    """
    Attach the restaurant-aware Logfire handler to the application logger.

    Must run after logfire.configure() and after dictConfig(), otherwise the
    handler is overwritten. Safe to call more than once.
    """
    if not _get_setting("logfire__enabled", False):
        return

    app_logger = logging.getLogger(LOGGER_NAMESPACE)
    if any(isinstance(h, RestaurantAwareLogfireHandler) for h in app_logger.handlers):
        return

    logfire = _get_logfire_module()
    if logfire is None:
        print("⚠️  Logfire not available, using standard logging only")
        return

    fallback_handler = logging.StreamHandler(sys.stderr)
    fallback_handler.setFormatter(
        logging.Formatter("%(asctime)s - %(name)s - %(levelname)s - %(message)s")
    )
    app_logger.addHandler(
        RestaurantAwareLogfireHandler(
            level=_get_setting("log_level", "info").upper(),
            fallback=fallback_handler,
            logfire_instance=logfire,
        )
    )
    logging.getLogger(f"{LOGGER_NAMESPACE}.logfire").info(
        "Restaurant-aware Logfire logging handler configured"
    )


@lru_cache(maxsize=1)
def setup_logging() -> None:
    """
    Set up base logging configuration (console + file handlers).
    Called once during application startup; later calls are no-ops.
    """
    logging.config.dictConfig(get_logging_config())

    logging.getLogger(f"{LOGGER_NAMESPACE}.startup").info(
        "Logging system initialized - Environment: %s, Level: %s, Logfire: %s",
        _get_setting("environment", "development"),
        _get_setting("log_level", "info"),
        _get_setting("logfire__enabled", False),
    )


def get_logger(name: str) -> logging.Logger:
    """
    Get a logger instance under the 'restaurant_settings' namespace.

    Args:
        name: Logger name, typically __name__ of the calling module.

    Example:
        logger = get_logger(__name__)  # 'restaurant_settings.src.services.settings_service'
        logger.info("Settings updated")
    """
    setup_logging()

    if not name.startswith(LOGGER_NAMESPACE):
        name = f"{LOGGER_NAMESPACE}.{name}"

    return logging.getLogger(name)
