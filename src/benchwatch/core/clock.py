"""
Platform time sources used by every Timer.

Wall time comes from time.perf_counter_ns, the highest-resolution monotonic
clock Python exposes. CPU time is best-effort: per-thread CPU time where the
platform offers it, process CPU time otherwise, and None when neither can be
read.
"""

import logging
import time
from dataclasses import dataclass
from typing import Callable, Optional

from ..errors import ClockUnavailableError

logger = logging.getLogger(__name__)

if hasattr(time, "thread_time_ns"):
    _cpu_source: Callable[[], int] = time.thread_time_ns
    CPU_CLOCK_LABEL = "Thread"
else:
    _cpu_source = time.process_time_ns
    CPU_CLOCK_LABEL = "CPU"


@dataclass(frozen=True)
class ClockSample:
    """
    One reading of both clocks.

    Both values are integer nanoseconds since a source-specific epoch.
    cpu_ns is None when the CPU clock could not be read.
    """

    wall_ns: int
    cpu_ns: Optional[int] = None

    @property
    def cpu_valid(self) -> bool:
        """Return True if this sample carries a CPU reading."""
        return self.cpu_ns is not None


def sample_wall() -> int:
    """Return the current monotonic wall time in nanoseconds."""
    return time.perf_counter_ns()


def sample_cpu() -> Optional[int]:
    """Return the current thread (or process) CPU time, or None if unavailable."""
    try:
        return _cpu_source()
    except OSError as exc:
        logger.debug("CPU clock unavailable: %s", exc)
        return None


class ClockSampler:
    """
    Pair of wall and CPU time sources.

    Timers read the clocks exclusively through a sampler, so tests can
    substitute synthetic sources and drive the bias correction with known
    instants.
    """

    def __init__(
        self,
        wall: Optional[Callable[[], int]] = None,
        cpu: Optional[Callable[[], Optional[int]]] = None,
        cpu_label: Optional[str] = None,
    ):
        """
        Args:
            wall: Callable returning monotonic nanoseconds; defaults to sample_wall
            cpu: Callable returning CPU nanoseconds or None; defaults to sample_cpu
            cpu_label: Name used for the CPU row in reports ("Thread" or "CPU")

        Raises:
            ClockUnavailableError: if the wall source cannot be read
        """
        self.wall = wall or sample_wall
        self.cpu = cpu or sample_cpu
        self.cpu_label = cpu_label or CPU_CLOCK_LABEL
        self._probe_wall()

    def _probe_wall(self) -> None:
        try:
            value = self.wall()
        except OSError as exc:
            raise ClockUnavailableError(f"wall clock cannot be read: {exc}") from exc
        if not isinstance(value, int):
            raise ClockUnavailableError(
                f"wall clock returned {type(value).__name__}, expected int nanoseconds"
            )

    def open_bracket(self, with_cpu: bool = True) -> tuple[ClockSample, ClockSample]:
        """
        Take the two back-to-back samples that open a measured interval.

        Reads wall A, wall B, CPU A, CPU B in that order so that the B
        samples sit closest to the measured code.

        Returns:
            (outer, inner) samples; CPU readings are None when skipped or unavailable
        """
        wall_a = self.wall()
        wall_b = self.wall()
        cpu_a = cpu_b = None
        if with_cpu:
            cpu_a = self.cpu()
            if cpu_a is not None:
                cpu_b = self.cpu()
        return ClockSample(wall_a, cpu_a), ClockSample(wall_b, cpu_b)

    def close_bracket(
        self, outer_start: ClockSample, inner_start: ClockSample
    ) -> tuple[ClockSample, ClockSample]:
        """
        Take the two samples that close an interval opened by open_bracket.

        Reads in mirrored order (CPU B, CPU A, wall B, wall A). A CPU clock is
        only read again if the matching start sample had a valid reading.

        Returns:
            (outer, inner) samples
        """
        cpu_b = self.cpu() if inner_start.cpu_valid else None
        cpu_a = self.cpu() if outer_start.cpu_valid else None
        wall_b = self.wall()
        wall_a = self.wall()
        return ClockSample(wall_a, cpu_a), ClockSample(wall_b, cpu_b)


_default_clock: Optional[ClockSampler] = None


def default_clock() -> ClockSampler:
    """Return the process-wide sampler over the real platform clocks."""
    global _default_clock
    if _default_clock is None:
        _default_clock = ClockSampler()
    return _default_clock
