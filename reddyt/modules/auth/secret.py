"""
Process-lifetime signing secret.

The secret is owned by a SecretManager instance built once by the
composition root and shared by every component that signs or verifies
session tokens.
"""

import logging
import secrets
import string
import threading
from typing import Optional

from .errors import EntropyError

logger = logging.getLogger(__name__)

SECRET_LENGTH = 32
SECRET_ALPHABET = string.ascii_letters + string.digits


class SecretManager:
    """
    Lazily generates and memoizes a single signing secret.

    Generation happens at most once per instance, under a lock, so concurrent
    first callers all observe the same value. Reads after initialization do
    not take the lock.
    """

    def __init__(self, preset: Optional[str] = None):
        """
        Initialize secret manager.

        Args:
            preset: Externally persisted secret. When given, no secret is
                generated and tokens survive process restarts.
        """
        self._secret: Optional[str] = preset or None
        self._lock = threading.Lock()

    def get_signing_secret(self) -> str:
        """
        Get the signing secret, generating it on first use.

        Raises:
            EntropyError: If the secure random source fails
        """
        secret = self._secret
        if secret is not None:
            return secret

        with self._lock:
            if self._secret is None:
                self._secret = self._generate()
                logger.info("Generated process signing secret; previously issued tokens are invalid")
            return self._secret

    @staticmethod
    def _generate() -> str:
        try:
            return "".join(secrets.choice(SECRET_ALPHABET) for _ in range(SECRET_LENGTH))
        except (OSError, NotImplementedError) as e:
            logger.error(f"Secure random source failed: {e}")
            raise EntropyError(f"Secure random source failed: {e}") from e
