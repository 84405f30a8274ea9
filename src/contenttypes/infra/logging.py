"""
Logging configuration for contenttypes.

This module configures structlog for JSON logging across the application. Every
event carries the service name and environment, and database credentials are
masked before rendering.
"""

import logging
import re
from typing import Any

import structlog

from .settings import settings

# Event keys whose whole value is masked
SECRET_KEYS = ("database_url", "dsn", "password")

# Credentials embedded in a value: DSN userinfo and password query parameters
_VALUE_PATTERNS = (
    (re.compile(r"://[^/@\s]+@"), "://***@"),
    (re.compile(r"password=[^&\s]+"), "password=***"),
)


def _mask(value: Any) -> Any:
    if isinstance(value, str):
        for pattern, replacement in _VALUE_PATTERNS:
            value = pattern.sub(replacement, value)
        return value
    if isinstance(value, dict):
        return {k: _mask(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [_mask(item) for item in value]
    return value


def redact_secrets(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Mask database credentials in log events."""
    for key, value in event_dict.items():
        if any(secret in key.lower() for secret in SECRET_KEYS):
            event_dict[key] = "***REDACTED***"
        else:
            event_dict[key] = _mask(value)
    return event_dict


def add_service_context(_, __, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Tag every event with the service name and deployment environment."""
    event_dict.setdefault("service", "contenttypes")
    event_dict.setdefault("env", settings.env)
    return event_dict


def configure_logging(*, install_handler: bool = True) -> None:
    """Configure structlog for JSON logging.

    ``install_handler`` attaches a stderr handler to the root logger when none is
    present; test harnesses that capture records themselves pass False.
    """
    if install_handler:
        logging.basicConfig(format="%(message)s")
    logging.getLogger("contenttypes").setLevel(settings.log_level.upper())

    structlog.configure(
        processors=[
            structlog.stdlib.filter_by_level,
            structlog.stdlib.add_logger_name,
            structlog.stdlib.add_log_level,
            structlog.stdlib.PositionalArgumentsFormatter(),
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.StackInfoRenderer(),
            structlog.processors.format_exc_info,
            structlog.processors.UnicodeDecoder(),
            add_service_context,
            redact_secrets,  # Redact secrets before rendering
            structlog.processors.JSONRenderer(),
        ],
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        wrapper_class=structlog.stdlib.BoundLogger,
        cache_logger_on_first_use=True,
    )
