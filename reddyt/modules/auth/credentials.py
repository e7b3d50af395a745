"""Credential verification against the single configured admin identity."""

import secrets

from ...config.provider import AdminIdentity


def verify_basic(submitted_email: str, submitted_password: str, identity: AdminIdentity) -> bool:
    """
    Compare a submitted (email, password) pair with the admin identity.

    Both fields are compared byte for byte with no normalization, so the
    email is case-sensitive and surrounding whitespace is significant.
    Both comparisons always run.

    Args:
        submitted_email: Email from the Basic exchange
        submitted_password: Password from the Basic exchange
        identity: The configured admin identity

    Returns:
        True if both fields match exactly
    """
    email_ok = secrets.compare_digest(
        submitted_email.encode("utf-8"), identity.email.encode("utf-8")
    )
    password_ok = secrets.compare_digest(
        submitted_password.encode("utf-8"), identity.password.encode("utf-8")
    )
    return email_ok and password_ok
