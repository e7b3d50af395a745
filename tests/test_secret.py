"""
Unit tests for the process signing secret.
"""

import string
import threading
from unittest.mock import patch

import pytest

from reddyt.modules.auth import EntropyError, SecretManager
from reddyt.modules.auth.secret import SECRET_LENGTH


def test_secret_is_32_alphanumeric_characters(secret_manager):
    """Generated secrets use the alphanumeric alphabet."""
    secret = secret_manager.get_signing_secret()

    assert len(secret) == SECRET_LENGTH == 32
    assert all(c in string.ascii_letters + string.digits for c in secret)


def test_secret_is_memoized(secret_manager):
    """Repeated calls return the same secret."""
    first = secret_manager.get_signing_secret()

    assert secret_manager.get_signing_secret() == first
    assert secret_manager.get_signing_secret() is first


def test_secret_managers_are_independent():
    """Each manager owns its own secret."""
    assert SecretManager().get_signing_secret() != SecretManager().get_signing_secret()


def test_preset_secret_is_used_verbatim():
    """A configured secret bypasses generation."""
    manager = SecretManager(preset="persisted-secret-value-0123456789")

    with patch("reddyt.modules.auth.secret.SecretManager._generate") as generate:
        assert manager.get_signing_secret() == "persisted-secret-value-0123456789"
        generate.assert_not_called()


def test_concurrent_first_use_generates_once():
    """Concurrent first callers all observe the same secret."""
    manager = SecretManager()
    barrier = threading.Barrier(16)
    results = []
    lock = threading.Lock()

    def worker():
        barrier.wait()
        secret = manager.get_signing_secret()
        with lock:
            results.append(secret)

    threads = [threading.Thread(target=worker) for _ in range(16)]
    for t in threads:
        t.start()
    for t in threads:
        t.join()

    assert len(results) == 16
    assert len(set(results)) == 1


def test_entropy_failure_raises_entropy_error():
    """A failing random source surfaces as an infrastructure error."""
    manager = SecretManager()

    with patch("reddyt.modules.auth.secret.secrets.choice", side_effect=OSError("no entropy")):
        with pytest.raises(EntropyError):
            manager.get_signing_secret()

    # A later call can still succeed once the source recovers
    assert len(manager.get_signing_secret()) == 32
