"""
Infrastructure errors raised by the authentication stack.

Credential-shaped failures never raise; they collapse to an unauthenticated
result. Only the failures below escape, and callers map them to a 5xx.
"""


class GatewayError(Exception):
    """An infrastructure failure while authenticating a request."""


class EntropyError(GatewayError):
    """The secure random source could not produce bytes."""


class ClockError(GatewayError):
    """The clock is unavailable or a timestamp left the representable range."""
