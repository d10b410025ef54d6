"""
benchwatch - Overhead-compensated Python timing and run statistics.

Provides multiple interfaces to time code sections across repeated runs:
  - Timer                : start/stop/reset timer with run history and reports
  - TimeBlock            : scope guard that records one run on a Timer
  - @watch               : function/method decorator, one run per call
  - watch_block()        : context manager for code blocks
  - watch_call()         : time a single call without decorating
  - timer()              : named timer from the default registry
  - summary()            : print every registered timer's report to stdout
  - registry             : access the default global TimerRegistry

Wall time uses time.perf_counter_ns; CPU time uses time.thread_time_ns where
available. Each start and stop reads the clocks twice to cancel the cost of
reading them.
"""

from .core.clock import ClockSample, ClockSampler
from .core.registry import TimerRegistry, default_registry
from .core.stats import INVALID_TIME, RunStats
from .core.timer import TimeBlock, Timer
from .core.units import TimeUnit
from .errors import BenchwatchError, ClockUnavailableError

from .interfaces.decorators import watch, watch_block, watch_call

from .output.formatter import format_duration, print_report, print_summary


def timer(name: str, **config) -> Timer:
    """
    Return the named timer from the default registry, creating it on first use.

    Args:
        name: Timer name
        **config: Timer keyword arguments, used only when the timer is created
    """
    return default_registry.timer(name, **config)


def summary() -> None:
    """Print a formatted report of every timer in the default registry."""
    print_summary(default_registry)


def reset() -> None:
    """Remove all timers from the default registry."""
    default_registry.clear()


registry = default_registry

__all__ = [
    "Timer",
    "TimeBlock",
    "TimeUnit",
    "watch",
    "watch_block",
    "watch_call",
    "timer",
    "summary",
    "reset",
    "registry",
    "TimerRegistry",
    "RunStats",
    "INVALID_TIME",
    "ClockSample",
    "ClockSampler",
    "format_duration",
    "print_report",
    "print_summary",
    "BenchwatchError",
    "ClockUnavailableError",
]
