"""
Error taxonomy for the stress monitor.

Every error derives from ValueError as well, so callers that only care about
"bad input" can catch that.
"""


class StressMonitorError(Exception):
    """Base class for all stress monitor errors."""


class InvalidMeasurement(StressMonitorError, ValueError):
    """Measurement is negative or not a finite number."""

    def __init__(self, value: float) -> None:
        super().__init__(f"HRV measurement must be a finite, non-negative number, got {value!r}")
        self.value = value


class InvalidProfile(StressMonitorError, ValueError):
    """Subject profile failed validation (e.g. negative age)."""


class DuplicateEntry(StressMonitorError, ValueError):
    """A point already exists for the day and the store rejects duplicates."""
