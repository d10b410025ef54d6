"""Exception types raised by benchwatch."""


class BenchwatchError(Exception):
    """Base class for all benchwatch errors."""


class ClockUnavailableError(BenchwatchError):
    """Raised when the monotonic wall clock cannot be read at all."""
