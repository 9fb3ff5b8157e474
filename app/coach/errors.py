"""Coach error taxonomy.

Only mutation entry points and the advice client raise. Calculators are
total functions and never raise.
"""

from __future__ import annotations


class CoachError(Exception):
    """Base class for coach errors."""


class InvalidInput(CoachError, ValueError):
    """Non-positive or non-finite weight/height supplied to a mutation."""


class InvalidWeight(InvalidInput):
    pass


class InvalidSlot(InvalidInput):
    """Hour outside the fixed hydration schedule."""

    def __init__(self, hour: int):
        super().__init__(f"Hour {hour} is not a hydration slot")
        self.hour = hour


class ExternalServiceFailure(CoachError):
    """AI advice call failed (network, timeout, invalid response)."""


class QuotaExceeded(ExternalServiceFailure):
    """AI advice provider rejected the call for quota / rate limit (429)."""
