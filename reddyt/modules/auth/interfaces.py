"""Authentication interfaces following Black Box Design principles."""
import time
from typing import Protocol

from .errors import ClockError


class Clock(Protocol):
    """Protocol for the time source - allows a frozen clock in tests."""

    def now(self) -> int:
        """
        Current time.

        Returns:
            Unix timestamp in whole seconds
        """
        ...


class SystemClock:
    """Wall clock backed by time.time()."""

    def now(self) -> int:
        try:
            return int(time.time())
        except (OSError, OverflowError, ValueError) as e:
            raise ClockError(f"System clock unavailable: {e}") from e
