"""
Authentication gateway.

Turns the credential material of one request into an AuthResult. Two
credential forms are accepted:

1. A one-time Basic exchange (Authorization: Basic base64(email:password)),
   which mints a fresh session token on success.
2. A previously issued session token, either as Authorization: Bearer or as
   the raw value of the session cookie, which is passed through unchanged.

Every credential-shaped failure (missing, malformed, mismatched, expired or
tampered material) ends as UNAUTHENTICATED in this module and nowhere else.
Infrastructure failures (clock, entropy) propagate as GatewayError.
"""

import base64
import logging
from dataclasses import dataclass
from typing import Literal, Optional

from ...config.provider import AdminIdentity, DEFAULT_SESSION_TTL
from .credentials import verify_basic
from .interfaces import Clock
from .tokens import TokenCodec

logger = logging.getLogger(__name__)

BASIC_PREFIX = "Basic "
BEARER_PREFIX = "Bearer "


@dataclass(frozen=True)
class AuthResult:
    """Outcome of authenticating a single request."""

    @property
    def ok(self) -> bool:
        return isinstance(self, Authenticated)


@dataclass(frozen=True)
class Unauthenticated(AuthResult):
    """No usable credentials were presented."""


@dataclass(frozen=True)
class Authenticated(AuthResult):
    """The request carries the admin identity; token is the session token to set."""
    token: str


UNAUTHENTICATED = Unauthenticated()


@dataclass(frozen=True)
class Credential:
    """Raw credential material pulled from a request."""
    scheme: Literal["basic", "bearer"]
    value: str


def extract_credential(
    authorization: Optional[str],
    cookie: Optional[str] = None
) -> Optional[Credential]:
    """
    Extract credential material from request headers.

    The Authorization header wins when present; the cookie is only consulted
    when there is no header at all.

    Args:
        authorization: Authorization header value
        cookie: Session cookie value

    Returns:
        Credential, or None when nothing usable was sent
    """
    if authorization:
        if authorization.startswith(BASIC_PREFIX):
            return Credential("basic", authorization[len(BASIC_PREFIX):])
        if authorization.startswith(BEARER_PREFIX):
            return Credential("bearer", authorization[len(BEARER_PREFIX):])
        return None

    if cookie:
        return Credential("bearer", cookie)

    return None


def decode_basic(encoded: str) -> Optional[tuple]:
    """Decode a Basic payload into (email, password), or None if malformed."""
    try:
        decoded = base64.b64decode(encoded.strip(), validate=True).decode("utf-8")
    except ValueError:
        return None

    email, separator, password = decoded.partition(":")
    if not separator:
        return None
    return email, password


class AuthenticationGateway:
    """
    Stateless per-request authenticator for the single admin identity.

    All collaborators are injected; the gateway performs no I/O.
    """

    def __init__(
        self,
        identity: AdminIdentity,
        token_codec: TokenCodec,
        clock: Clock,
        session_ttl: int = DEFAULT_SESSION_TTL
    ):
        """
        Initialize gateway.

        Args:
            identity: The configured admin identity
            token_codec: Codec sharing the process signing secret
            clock: Time source
            session_ttl: Lifetime of freshly issued tokens in seconds
        """
        self.identity = identity
        self.token_codec = token_codec
        self.clock = clock
        self.session_ttl = session_ttl

    def authenticate(
        self,
        authorization: Optional[str] = None,
        cookie: Optional[str] = None
    ) -> AuthResult:
        """
        Authenticate a request.

        Args:
            authorization: Authorization header value
            cookie: Session cookie value

        Returns:
            Authenticated with the token to set, or UNAUTHENTICATED

        Raises:
            GatewayError: On clock or entropy failure
        """
        credential = extract_credential(authorization, cookie)
        if credential is None:
            return UNAUTHENTICATED

        if credential.scheme == "basic":
            return self._authenticate_basic(credential.value)
        return self._authenticate_bearer(credential.value)

    def _authenticate_basic(self, encoded: str) -> AuthResult:
        pair = decode_basic(encoded)
        if pair is None:
            logger.debug("Ignoring malformed Basic credentials")
            return UNAUTHENTICATED

        email, password = pair
        if not verify_basic(email, password, self.identity):
            logger.debug("Basic credentials rejected")
            return UNAUTHENTICATED

        token = self.token_codec.issue(self.identity.email, self.clock.now(), self.session_ttl)
        logger.info("Admin authenticated via basic credentials, session token issued")
        return Authenticated(token)

    def _authenticate_bearer(self, token: str) -> AuthResult:
        claims = self.token_codec.verify(token, self.clock.now())
        if claims is None:
            return UNAUTHENTICATED

        # A token minted for a previous admin email is no longer valid
        if claims.email != self.identity.email:
            logger.debug("Session token identity does not match the configured admin")
            return UNAUTHENTICATED

        return Authenticated(token)
