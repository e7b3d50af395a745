"""
Session token encoding and verification.

Tokens are compact HS256 JWTs carrying the admin email and an absolute
expiry. Any decode, signature, claim or expiry problem yields None rather
than an exception: an unusable token is an ordinary "not authenticated"
outcome, not a system fault.
"""

import logging
from dataclasses import dataclass
from typing import Optional

import jwt

from .errors import ClockError
from .secret import SecretManager

logger = logging.getLogger(__name__)

ALGORITHM = "HS256"

# 9999-12-31T23:59:59Z, the last second representable as a datetime.
MAX_TIMESTAMP = 253402300799


@dataclass(frozen=True)
class SessionClaims:
    """Claims carried by a session token."""
    email: str
    expires_at: int


class TokenCodec:
    """
    Issues and verifies signed session tokens.

    The signing key is read from the injected SecretManager on every call,
    so all codecs sharing a manager agree on the key.
    """

    def __init__(self, secret_manager: SecretManager):
        self.secret_manager = secret_manager

    def issue(self, email: str, now: int, ttl: int) -> str:
        """
        Issue a token for the given identity.

        Args:
            email: Identity to embed
            now: Current unix timestamp
            ttl: Lifetime in seconds

        Returns:
            Encoded token

        Raises:
            ClockError: If now + ttl leaves the timestamp range
            EntropyError: If the signing secret cannot be generated
        """
        expires_at = now + ttl
        if expires_at < 0 or expires_at > MAX_TIMESTAMP:
            raise ClockError(f"Token expiry {expires_at} is outside the timestamp range")

        payload = {"email": email, "exp": expires_at}
        return jwt.encode(payload, self.secret_manager.get_signing_secret(), algorithm=ALGORITHM)

    def verify(self, token: str, now: int) -> Optional[SessionClaims]:
        """
        Verify a token and return its claims.

        Args:
            token: Encoded token
            now: Current unix timestamp

        Returns:
            SessionClaims if the token is well formed, correctly signed and
            expires strictly after now; None otherwise
        """
        if not token:
            return None

        secret = self.secret_manager.get_signing_secret()
        try:
            # Expiry is checked below against the injected clock
            claims = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"verify_exp": False, "require": ["email", "exp"]},
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected session token: {type(e).__name__}")
            return None

        email = claims.get("email")
        expires_at = claims.get("exp")
        if not isinstance(email, str) or isinstance(expires_at, bool) or not isinstance(expires_at, int):
            logger.debug("Rejected session token: malformed claims")
            return None

        if expires_at <= now:
            logger.debug("Rejected session token: expired")
            return None

        return SessionClaims(email=email, expires_at=expires_at)
