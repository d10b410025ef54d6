"""
Aggregate statistics over a run-history series.

Negative entries (the INVALID_TIME sentinel) count towards the series length
but are excluded from every statistic.
"""

import math
from dataclasses import dataclass

INVALID_TIME = -1


@dataclass(frozen=True)
class RunStats:
    """Summary of one series of run durations, all values in nanoseconds."""

    total: int
    count: int
    mean: float = 0.0
    stddev: float = 0.0
    minimum: int = 0
    maximum: int = 0
    sum: int = 0

    @property
    def valid(self) -> bool:
        """Return True if at least one entry had a valid time."""
        return self.count > 0

    @property
    def complete(self) -> bool:
        """Return True if every entry had a valid time."""
        return self.count == self.total

    @classmethod
    def from_series(cls, values: list[int]) -> "RunStats":
        """
        Compute stats for a series, skipping sentinel entries.

        The standard deviation uses the sample (count - 1) denominator and
        is reported as 0.0 for fewer than two valid entries.
        """
        valid = [v for v in values if v >= 0]
        if not valid:
            return cls(total=len(values), count=0)

        count = len(valid)
        total_ns = sum(valid)
        mean = total_ns / count
        variance = 0.0
        if count > 1:
            variance = sum((v - mean) ** 2 for v in valid) / (count - 1)

        return cls(
            total=len(values),
            count=count,
            mean=mean,
            stddev=math.sqrt(variance),
            minimum=min(valid),
            maximum=max(valid),
            sum=total_ns,
        )
