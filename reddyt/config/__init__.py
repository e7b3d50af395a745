"""Configuration providers."""

from .provider import (
    AdminIdentity,
    APIConfig,
    AuthConfig,
    ConfigProvider,
    ConfigurationError,
    EnvConfigProvider,
    StorageConfig,
)

__all__ = [
    "AdminIdentity",
    "APIConfig",
    "AuthConfig",
    "ConfigProvider",
    "ConfigurationError",
    "EnvConfigProvider",
    "StorageConfig",
]
