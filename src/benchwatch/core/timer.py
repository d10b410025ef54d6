"""
Overhead-compensated run timer.

A Timer measures wall time and CPU/thread time of a code section, pausing and
resuming with stop()/start(), and keeps a history of completed runs for
statistics. Each start and stop reads every clock twice back to back; see
core.correction for how the pairs cancel the cost of reading the clock.
"""

import logging
from typing import Callable, Optional, Union

from .clock import ClockSample, ClockSampler, default_clock
from .correction import corrected_cpu, corrected_wall
from .stats import INVALID_TIME, RunStats
from .units import TimeUnit
from ..output.formatter import print_report, render_report

logger = logging.getLogger(__name__)


class Timer:
    """
    Stateful start/stop timer with multi-run statistics.

    Not thread-safe: confine each instance to one thread or lock around it.

    Example:
        timer = Timer("solve", autostart=False)
        for _ in range(10):
            timer.start()
            solve()
            timer.reset(new_run=True)
        print(timer)
    """

    def __init__(
        self,
        name: str,
        unit: Union[TimeUnit, str] = TimeUnit.AUTO,
        autostart: bool = True,
        print_on_destruct: bool = False,
        clock: Optional[ClockSampler] = None,
        cpu_drift_correction: bool = True,
    ):
        """
        Args:
            name: Label used in reports; need not be unique
            unit: Unit for reports, TimeUnit.AUTO chooses per value
            autostart: Start measuring immediately
            print_on_destruct: Write the report to stderr when close() runs
                (on leaving a `with` block, or on registry teardown)
            clock: Time sources; defaults to the real platform clocks
            cpu_drift_correction: Subtract the CPU bracket overhead from
                the wall estimate as well
        """
        self.name = name
        self.unit = TimeUnit.parse(unit)
        self.print_on_destruct = print_on_destruct
        self.cpu_drift_correction = cpu_drift_correction
        self._clock = clock or default_clock()

        self._running = False
        self._closed = False
        self._elapsed_ns = 0
        self._elapsed_cpu_ns = 0
        self._cpu_valid = True
        self._run_times: list[int] = []
        self._cpu_run_times: list[int] = []
        self._start_outer: Optional[ClockSample] = None
        self._start_inner: Optional[ClockSample] = None

        if autostart:
            self.start()

    @property
    def running(self) -> bool:
        """Return True while the timer is measuring."""
        return self._running

    @property
    def cpu_label(self) -> str:
        """Return "Thread" or "CPU" depending on the CPU clock in use."""
        return self._clock.cpu_label

    @property
    def clock(self) -> ClockSampler:
        """Return the time sources this timer reads."""
        return self._clock

    def start(self) -> "Timer":
        """Start or resume measuring. Does nothing if already running."""
        if self._running:
            return self
        self._running = True
        self._start_outer, self._start_inner = self._clock.open_bracket(with_cpu=self._cpu_valid)
        if not self._start_outer.cpu_valid and self._cpu_valid:
            logger.debug("timer %r: no CPU time for this run", self.name)
            self._cpu_valid = False
        return self

    def stop(self) -> None:
        """Pause measuring and add the corrected interval. Does nothing if stopped."""
        if not self._running:
            return
        start_outer, start_inner = self._start_outer, self._start_inner
        stop_outer, stop_inner = self._clock.close_bracket(start_outer, start_inner)

        cpu_drift = 0
        if self._cpu_valid:
            if stop_outer.cpu_valid:
                elapsed_cpu, cpu_drift = corrected_cpu(
                    start_outer.cpu_ns, start_inner.cpu_ns, stop_inner.cpu_ns, stop_outer.cpu_ns
                )
                self._elapsed_cpu_ns += elapsed_cpu
            else:
                logger.debug("timer %r: CPU clock failed at stop", self.name)
                self._cpu_valid = False

        if not self.cpu_drift_correction:
            cpu_drift = 0
        self._elapsed_ns += corrected_wall(
            start_outer.wall_ns,
            start_inner.wall_ns,
            stop_inner.wall_ns,
            stop_outer.wall_ns,
            cpu_drift,
        )
        self._running = False

    def reset(self, new_run: bool = False) -> None:
        """
        Stop the timer and clear the current run.

        Args:
            new_run: If True, the current run is appended to the run history
                (when it measured any time) so the next start begins a new run.
                If False, the run history is discarded as well.
        """
        self.stop()
        if new_run:
            if self._elapsed_ns > 0:
                self._run_times.append(self._elapsed_ns)
                self._cpu_run_times.append(self._elapsed_cpu_ns if self._cpu_valid else INVALID_TIME)
        else:
            self._run_times.clear()
            self._cpu_run_times.clear()
        self._elapsed_ns = 0
        self._elapsed_cpu_ns = 0
        self._cpu_valid = True

    def elapsed_time(self) -> int:
        """
        Return wall nanoseconds of the current run, including the live part.

        The live part is read without overhead correction.
        """
        result = self._elapsed_ns
        if self._running:
            result += self._clock.wall() - self._start_inner.wall_ns
        return result

    def elapsed_cpu_time(self) -> int:
        """Return CPU nanoseconds of the current run, or -1 if CPU time is unavailable."""
        if not self._cpu_valid:
            return INVALID_TIME
        result = self._elapsed_cpu_ns
        if self._running:
            now = self._clock.cpu()
            if now is None:
                return INVALID_TIME
            result += now - self._start_outer.cpu_ns
        return result

    def runs(self) -> tuple[list[int], list[int]]:
        """
        Return (wall, cpu) run histories, with the current run appended if it measured time.

        Both lists always have the same length; CPU entries of -1 mark runs
        without a valid CPU measurement.
        """
        wall = list(self._run_times)
        cpu = list(self._cpu_run_times)
        elapsed = self.elapsed_time()
        if elapsed != 0:
            wall.append(elapsed)
            cpu.append(self.elapsed_cpu_time())
        return wall, cpu

    def run_times(self) -> list[int]:
        """Return wall durations of all runs in nanoseconds."""
        return self.runs()[0]

    def cpu_run_times(self) -> list[int]:
        """Return CPU durations of all runs in nanoseconds (-1 where invalid)."""
        return self.runs()[1]

    def stats(self) -> tuple[RunStats, RunStats]:
        """Return (wall, cpu) statistics over all runs."""
        wall, cpu = self.runs()
        return RunStats.from_series(wall), RunStats.from_series(cpu)

    def report(self, colored: bool = False) -> str:
        """Return the human-readable report for this timer."""
        wall, cpu = self.runs()
        return render_report(self.name, wall, cpu, self.unit, self.cpu_label, colored=colored)

    def add_run(self, wall_ns: int, cpu_ns: int = INVALID_TIME) -> None:
        """
        Append an externally measured run to the run history.

        Used to collect runs measured on separate timers, e.g. overlapping
        calls of one decorated function. Runs with no wall time are skipped,
        as in reset(new_run=True).

        Args:
            wall_ns: Wall duration in nanoseconds
            cpu_ns: CPU duration in nanoseconds, or -1 if unavailable
        """
        if wall_ns <= 0:
            return
        self._run_times.append(wall_ns)
        self._cpu_run_times.append(cpu_ns if cpu_ns >= 0 else INVALID_TIME)

    def close(self) -> None:
        """
        Stop the timer and, if configured, print its report.

        Called automatically when leaving a `with Timer(...)` block. Runs once
        per `with` block; entering the timer again re-arms it.
        """
        if self._closed:
            return
        self._closed = True
        self.stop()
        if self.print_on_destruct:
            print_report(self)

    def __enter__(self) -> "Timer":
        self._closed = False
        return self.start()

    def __exit__(self, *_) -> None:
        self.close()

    def __str__(self) -> str:
        return self.report()

    def __repr__(self) -> str:
        state = "running" if self._running else "stopped"
        return f"<Timer {self.name!r} {state} runs={len(self._run_times)}>"

    @staticmethod
    def time(fn: Callable, *args, name: Optional[str] = None,
             unit: Union[TimeUnit, str] = TimeUnit.AUTO, **kwargs):
        """
        Time a single call and print its report to stderr.

        Args:
            fn: The callable to time
            *args: Positional arguments forwarded to fn
            name: Report label; defaults to fn's qualified name
            unit: Report unit
            **kwargs: Keyword arguments forwarded to fn

        Returns:
            The return value of fn(*args, **kwargs)
        """
        label = name or getattr(fn, "__qualname__", repr(fn))
        with Timer(label, unit=unit, print_on_destruct=True):
            return fn(*args, **kwargs)


class TimeBlock:
    """
    Scope guard that records one run on a timer.

    Starts the timer on construction; end() (or leaving the `with` block)
    stops it and commits the run exactly once.

    Example:
        with TimeBlock(timer):
            step()
    """

    def __init__(self, timer: Timer):
        self.timer = timer
        self._ended = False
        timer.start()

    def end(self) -> None:
        """Stop the timer and commit the run; later calls only stop."""
        self.timer.stop()
        if self._ended:
            return
        self._ended = True
        self.timer.reset(new_run=True)

    def __enter__(self) -> "TimeBlock":
        return self

    def __exit__(self, *_) -> None:
        self.end()
