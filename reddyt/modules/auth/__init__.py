"""
Authentication Module - Black Box Interface

Purpose: Gate the admin API behind the single configured identity
Interface: AuthFactory.build(), AuthenticationGateway.authenticate()
Hidden: Secret generation, token format, credential comparison

Accepts a one-time Basic exchange or a previously issued session token and
answers with an AuthResult. Malformed and absent credentials are
indistinguishable to callers.
"""

from .errors import ClockError, EntropyError, GatewayError
from .factory import AuthFactory
from .gateway import (
    UNAUTHENTICATED,
    Authenticated,
    AuthenticationGateway,
    AuthResult,
    Unauthenticated,
)
from .interfaces import Clock, SystemClock
from .secret import SecretManager
from .tokens import SessionClaims, TokenCodec

__all__ = [
    "AuthFactory",
    "AuthenticationGateway",
    "AuthResult",
    "Authenticated",
    "Unauthenticated",
    "UNAUTHENTICATED",
    "Clock",
    "SystemClock",
    "SecretManager",
    "SessionClaims",
    "TokenCodec",
    "GatewayError",
    "EntropyError",
    "ClockError",
]
