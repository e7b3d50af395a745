"""
Shared pytest fixtures for Reddyt tests.

This module provides common fixtures including:
- FakeRedis: In-memory stand-in for the async Redis client
- FrozenClock: Controllable time source for token expiry
- StaticConfigProvider: Configuration without environment variables
"""

import os
import sys
from typing import Dict, List, Optional

import pytest

# Add parent directory to path for imports
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from reddyt.config.provider import (
    AdminIdentity,
    APIConfig,
    AuthConfig,
    StorageConfig,
)
from reddyt.modules.auth import AuthenticationGateway, SecretManager, TokenCodec

ADMIN_EMAIL = "admin@example.com"
ADMIN_PASSWORD = "secret"
# base64("admin@example.com:secret")
ADMIN_BASIC = "Basic YWRtaW5AZXhhbXBsZS5jb206c2VjcmV0"
START_TIME = 1_700_000_000


# =============================================================================
# Redis Mocking Infrastructure
# =============================================================================

class FakeRedis:
    """
    In-memory async Redis covering the commands the run store uses.

    Values are stored as strings, as with decode_responses=True.
    """

    def __init__(self):
        self.values: Dict[str, str] = {}
        self.sorted_sets: Dict[str, Dict[str, float]] = {}

    async def get(self, key: str) -> Optional[str]:
        return self.values.get(key)

    async def set(self, key: str, value: str) -> bool:
        self.values[key] = value
        return True

    async def incr(self, key: str) -> int:
        value = int(self.values.get(key, "0")) + 1
        self.values[key] = str(value)
        return value

    async def mget(self, keys: List[str]) -> List[Optional[str]]:
        return [self.values.get(key) for key in keys]

    async def zadd(self, key: str, mapping: Dict[str, float]) -> int:
        members = self.sorted_sets.setdefault(key, {})
        added = len([m for m in mapping if m not in members])
        members.update(mapping)
        return added

    async def zrange(self, key: str, start: int, end: int) -> List[str]:
        members = self.sorted_sets.get(key, {})
        ordered = [m for m, _ in sorted(members.items(), key=lambda item: (item[1], item[0]))]
        if end == -1:
            return ordered[start:]
        return ordered[start:end + 1]


# =============================================================================
# Time and Configuration
# =============================================================================

class FrozenClock:
    """Clock that only moves when told to."""

    def __init__(self, start: int = START_TIME):
        self.current = start

    def now(self) -> int:
        return self.current

    def advance(self, seconds: int) -> None:
        self.current += seconds


class StaticConfigProvider:
    """Config provider with fixed values for tests."""

    def __init__(
        self,
        email: str = ADMIN_EMAIL,
        password: str = ADMIN_PASSWORD,
        production: bool = False,
        signing_secret: Optional[str] = None,
    ):
        self.identity = AdminIdentity(email=email, password=password)
        self.production = production
        self.signing_secret = signing_secret

    def get_admin_identity(self) -> AdminIdentity:
        return self.identity

    def get_api_config(self) -> APIConfig:
        return APIConfig(
            port=8081,
            host="127.0.0.1",
            debug=False,
            log_level="INFO",
            production=self.production,
        )

    def get_auth_config(self) -> AuthConfig:
        return AuthConfig(
            session_ttl=10800,
            cookie_name="authentication",
            signing_secret=self.signing_secret,
        )

    def get_storage_config(self) -> StorageConfig:
        return StorageConfig(redis_url="redis://localhost:6379/15")


# =============================================================================
# Fixtures
# =============================================================================

@pytest.fixture
def admin_identity():
    """The configured admin identity."""
    return AdminIdentity(email=ADMIN_EMAIL, password=ADMIN_PASSWORD)


@pytest.fixture
def clock():
    """Frozen clock starting at START_TIME."""
    return FrozenClock()


@pytest.fixture
def secret_manager():
    """Fresh secret manager (new secret per test)."""
    return SecretManager()


@pytest.fixture
def token_codec(secret_manager):
    """Token codec bound to the test secret manager."""
    return TokenCodec(secret_manager)


@pytest.fixture
def gateway(admin_identity, token_codec, clock):
    """Authentication gateway wired with test collaborators."""
    return AuthenticationGateway(
        identity=admin_identity,
        token_codec=token_codec,
        clock=clock,
    )


@pytest.fixture
def fake_redis():
    """In-memory Redis client."""
    return FakeRedis()
