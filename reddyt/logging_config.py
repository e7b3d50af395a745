"""
Logging configuration for the Reddyt API.

- Health check probes are dropped from the uvicorn access log
- Authorization material that ends up in a message is masked
- The auth module has its own level so credential DEBUG lines can be
  silenced without quieting the rest of the service
"""

import logging
import re
from typing import Any, Dict, Optional

from reddyt.config.provider import APIConfig

AUTH_LOGGER = "reddyt.modules.auth"

CREDENTIAL_PATTERN = re.compile(r"\b(Basic|Bearer)\s+[A-Za-z0-9+/=._~-]+")


class HealthCheckFilter(logging.Filter):
    """Filter to suppress health check endpoint logs."""

    def filter(self, record: logging.LogRecord) -> bool:
        if record.name == "uvicorn.access":
            message = record.getMessage()
            if "/health" in message and "GET" in message:
                return False
        return True


class CredentialRedactionFilter(logging.Filter):
    """Mask Basic payloads and session tokens before a record is emitted."""

    def filter(self, record: logging.LogRecord) -> bool:
        message = record.getMessage()
        redacted = CREDENTIAL_PATTERN.sub(r"\1 [REDACTED]", message)
        if redacted != message:
            record.msg = redacted
            record.args = None
        return True


def _logger(handler: str, level: str) -> Dict[str, Any]:
    return {"handlers": [handler], "level": level, "propagate": False}


def get_logging_config(
    api_config: Optional[APIConfig] = None,
    level: str = "INFO",
) -> Dict[str, Any]:
    """
    Build the dictConfig for uvicorn and the service loggers.

    Args:
        api_config: API configuration; its log levels win over level
        level: Service log level when no api_config is given

    Returns:
        Dictionary for logging.config.dictConfig
    """
    if api_config is not None:
        level = api_config.log_level
    level = level.upper()

    auth_level = level
    if api_config is not None and api_config.auth_log_level:
        auth_level = api_config.auth_log_level.upper()

    return {
        "version": 1,
        "disable_existing_loggers": False,
        "filters": {
            "health_check_filter": {"()": HealthCheckFilter},
            "credential_filter": {"()": CredentialRedactionFilter},
        },
        "formatters": {
            "default": {"format": "%(asctime)s - %(name)s - %(levelname)s - %(message)s"},
            "access": {"format": "%(message)s"},
        },
        "handlers": {
            "default": {
                "class": "logging.StreamHandler",
                "formatter": "default",
                "stream": "ext://sys.stdout",
                "filters": ["credential_filter"],
            },
            "access": {
                "class": "logging.StreamHandler",
                "formatter": "access",
                "stream": "ext://sys.stdout",
                "filters": ["health_check_filter", "credential_filter"],
            },
        },
        "loggers": {
            "uvicorn": _logger("default", "INFO"),
            "uvicorn.error": _logger("default", "INFO"),
            "uvicorn.access": _logger("access", "INFO"),
            "reddyt": _logger("default", level),
            AUTH_LOGGER: _logger("default", auth_level),
        },
        "root": {"level": level, "handlers": ["default"]},
    }
