"""Display units for reported durations."""

from enum import Enum
from typing import Union


class TimeUnit(Enum):
    """Unit a Timer renders its durations in. AUTO picks one per value."""

    AUTO = "auto"
    SECONDS = "s"
    MILLISECONDS = "ms"
    MICROSECONDS = "us"
    NANOSECONDS = "ns"

    @property
    def divisor(self) -> int:
        """Return how many nanoseconds make up one of this unit."""
        return _DIVISORS[self]

    @classmethod
    def parse(cls, value: Union["TimeUnit", str]) -> "TimeUnit":
        """
        Accept a TimeUnit or one of its names/suffixes ("ms", "milliseconds", ...).

        Raises:
            ValueError: if the value names no known unit
        """
        if isinstance(value, cls):
            return value
        key = str(value).strip().lower()
        if key in _ALIASES:
            return _ALIASES[key]
        raise ValueError(f"unknown time unit {value!r}")


_DIVISORS = {
    TimeUnit.AUTO: 1,
    TimeUnit.SECONDS: 1_000_000_000,
    TimeUnit.MILLISECONDS: 1_000_000,
    TimeUnit.MICROSECONDS: 1_000,
    TimeUnit.NANOSECONDS: 1,
}

_ALIASES = {unit.value: unit for unit in TimeUnit}
_ALIASES.update({unit.name.lower(): unit for unit in TimeUnit})
_ALIASES.update({"default": TimeUnit.AUTO, "sec": TimeUnit.SECONDS, "µs": TimeUnit.MICROSECONDS})
