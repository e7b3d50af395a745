"""Configuration provider following Black Box Design principles."""
import logging
import os
from dataclasses import dataclass, field
from typing import Optional, Protocol

from email_validator import EmailNotValidError, validate_email

logger = logging.getLogger(__name__)

DEFAULT_SESSION_TTL = 3 * 60 * 60
DEFAULT_COOKIE_NAME = "authentication"


class ConfigurationError(ValueError):
    """Raised when the environment cannot produce a usable configuration."""


@dataclass(frozen=True)
class AdminIdentity:
    """The single administrator identity, immutable for the process lifetime."""
    email: str
    password: str = field(repr=False)


@dataclass
class APIConfig:
    """API configuration."""
    port: int
    host: str
    debug: bool
    log_level: str
    production: bool
    auth_log_level: Optional[str] = None


@dataclass
class AuthConfig:
    """Authentication configuration."""
    session_ttl: int
    cookie_name: str
    signing_secret: Optional[str]


@dataclass
class StorageConfig:
    """Storage configuration."""
    redis_url: str


class ConfigProvider(Protocol):
    """Protocol for configuration providers."""

    def get_admin_identity(self) -> AdminIdentity:
        """Get the administrator identity."""
        ...

    def get_api_config(self) -> APIConfig:
        """Get API configuration."""
        ...

    def get_auth_config(self) -> AuthConfig:
        """Get authentication configuration."""
        ...

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration."""
        ...


def validate_admin_email(email: str) -> bool:
    """
    Check the admin email can be used for the Basic exchange.

    The address must be syntactically valid and must not contain a colon,
    since the Basic payload is split on the first one.
    """
    if ":" in email:
        return False
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        logger.debug(f"Admin email rejected: {e}")
        return False
    return True


class EnvConfigProvider:
    """Environment-based configuration provider."""

    def get_admin_identity(self) -> AdminIdentity:
        """
        Load the administrator identity from RYT_ADMIN_EMAIL/RYT_ADMIN_PASSWORD.

        Raises:
            ConfigurationError: If either value is missing or the email is invalid
        """
        email = os.getenv("RYT_ADMIN_EMAIL")
        password = os.getenv("RYT_ADMIN_PASSWORD")

        missing = [
            name for name, value in (
                ("RYT_ADMIN_EMAIL", email),
                ("RYT_ADMIN_PASSWORD", password),
            )
            if not value
        ]
        if missing:
            raise ConfigurationError(
                f"Missing required environment variables: {', '.join(missing)}. "
                "The admin panel cannot be protected without them."
            )

        if not validate_admin_email(email):
            logger.error(
                "The configured email is invalid, "
                "please re-check the environment variables."
            )
            raise ConfigurationError("The admin email at RYT_ADMIN_EMAIL is not valid.")

        return AdminIdentity(email=email, password=password)

    def get_api_config(self) -> APIConfig:
        """Get API configuration from environment variables."""
        return APIConfig(
            port=int(os.getenv("API_PORT", "8081")),
            host=os.getenv("API_HOST", "0.0.0.0"),
            debug=os.getenv("API_DEBUG", "false").lower() == "true",
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            production=os.getenv("REDDYT_ENV", "development").lower() == "production",
            auth_log_level=os.getenv("AUTH_LOG_LEVEL") or None,
        )

    def get_auth_config(self) -> AuthConfig:
        """
        Get authentication configuration from environment variables.

        Raises:
            ConfigurationError: If SESSION_TTL is not a positive integer
        """
        raw_ttl = os.getenv("SESSION_TTL", str(DEFAULT_SESSION_TTL))
        try:
            session_ttl = int(raw_ttl)
        except ValueError:
            session_ttl = 0
        if session_ttl <= 0:
            raise ConfigurationError(
                f"SESSION_TTL must be a positive number of seconds, got '{raw_ttl}'."
            )

        return AuthConfig(
            session_ttl=session_ttl,
            cookie_name=DEFAULT_COOKIE_NAME,
            signing_secret=os.getenv("RYT_SIGNING_SECRET") or None,
        )

    def get_storage_config(self) -> StorageConfig:
        """Get storage configuration from environment variables."""
        return StorageConfig(
            redis_url=os.getenv("REDIS_URL", "redis://localhost:6379/0"),
        )
