"""
Text rendering for timer reports.

A report is a single sentence for zero or one run and a table with one row
for wall time ("Real") and one for CPU time ("Thread" or "CPU") for several
runs. All formatting decisions are centralized here.
Color output uses ANSI codes via colorama and is only applied when writing
to a terminal.
"""

import logging
import shutil
import sys
from datetime import datetime
from typing import TYPE_CHECKING, Optional, TextIO, Union

import colorama

from ..core.stats import INVALID_TIME, RunStats
from ..core.units import TimeUnit

if TYPE_CHECKING:
    from ..core.registry import TimerRegistry
    from ..core.timer import Timer

colorama.just_fix_windows_console()

logger = logging.getLogger(__name__)


class _Color:
    """ANSI color constants."""

    RESET   = colorama.Style.RESET_ALL
    DIM     = colorama.Style.DIM
    BOLD    = colorama.Style.BRIGHT
    CYAN    = colorama.Fore.CYAN
    YELLOW  = colorama.Fore.YELLOW
    RED     = colorama.Fore.RED
    WHITE   = colorama.Fore.WHITE
    MAGENTA = colorama.Fore.MAGENTA


_TYPE_WIDTH = 8
_MEAN_WIDTH = 40
_COLUMN_WIDTH = 16

_AUTO_NS_LIMIT = 5_000
_AUTO_US_LIMIT = 5_000_000
_AUTO_MS_LIMIT = 5_000_000_000


def _console_width() -> int:
    """Return current terminal width, with a sensible fallback."""
    return shutil.get_terminal_size(fallback=(80, 24)).columns


def _separator(char: str = "-") -> str:
    """Return a separator line sized to the current terminal width."""
    return char * _console_width()


def _paint(text: str, color: str, colored: bool) -> str:
    """Wrap text in an ANSI color when colored is True."""
    return f"{color}{text}{_Color.RESET}" if colored else text


def _pad(text: str, width: int) -> str:
    """Center text in a field of the given width; longer text is left as is."""
    left = max(0, (width - len(text)) // 2)
    return (" " * left + text).ljust(width)


def resolve_unit(ns: float, unit: Union[TimeUnit, str] = TimeUnit.AUTO) -> TimeUnit:
    """
    Return the concrete unit a value is rendered in.

    AUTO keeps nanoseconds below 5 us, microseconds below 5 ms,
    milliseconds below 5 s and seconds above.
    """
    unit = TimeUnit.parse(unit)
    if unit is not TimeUnit.AUTO:
        return unit
    if ns < _AUTO_NS_LIMIT:
        return TimeUnit.NANOSECONDS
    if ns < _AUTO_US_LIMIT:
        return TimeUnit.MICROSECONDS
    if ns < _AUTO_MS_LIMIT:
        return TimeUnit.MILLISECONDS
    return TimeUnit.SECONDS


def format_duration(ns: float, unit: Union[TimeUnit, str] = TimeUnit.AUTO) -> str:
    """Return a nanosecond duration as text, e.g. "4999ns", "5.000us", "1.250s"."""
    unit = resolve_unit(ns, unit)
    if unit is TimeUnit.NANOSECONDS:
        return f"{round(ns)}{unit.value}"
    return f"{ns / unit.divisor:.3f}{unit.value}"


def _format_stats(stats: RunStats, unit: TimeUnit, colored: bool) -> str:
    """Render the statistics cells of one table row."""
    if not stats.valid:
        return _paint("no valid times.", _Color.RED, colored)

    mean = f"{format_duration(stats.mean, unit)} +- {format_duration(stats.stddev, unit)}"
    cells = (
        _pad(mean, _MEAN_WIDTH)
        + _pad(format_duration(stats.maximum, unit), _COLUMN_WIDTH)
        + _pad(format_duration(stats.minimum, unit), _COLUMN_WIDTH)
        + _pad(format_duration(stats.sum, unit), _COLUMN_WIDTH)
    ).rstrip()
    if not stats.complete:
        warning = f"Warning: Only {stats.count} of {stats.total} had valid times!"
        cells += "\n" + _paint(warning, _Color.YELLOW, colored)
    return cells


def render_report(
    name: str,
    run_times: list[int],
    cpu_run_times: list[int],
    unit: Union[TimeUnit, str] = TimeUnit.AUTO,
    cpu_label: str = "CPU",
    colored: bool = False,
) -> str:
    """
    Render the report for one timer.

    Args:
        name: Timer label
        run_times: Wall durations in nanoseconds
        cpu_run_times: CPU durations in nanoseconds, parallel to run_times (-1 if invalid)
        unit: Display unit
        cpu_label: Row label for CPU time ("Thread" or "CPU")
        colored: Wrap the label and warnings in ANSI colors
    """
    unit = TimeUnit.parse(unit)
    tag = _paint(f"[Timer: {name}]", _Color.CYAN + _Color.BOLD, colored)
    head = f"{tag} {len(run_times)} run(s) took:"

    if not run_times:
        return f"{head} no time at all."

    if len(run_times) == 1:
        text = f"{head} {format_duration(run_times[0], unit)}"
        if cpu_run_times and cpu_run_times[0] != INVALID_TIME:
            text += f" ({cpu_label}: {format_duration(cpu_run_times[0], unit)})"
        return text + "."

    columns = (
        _pad("Type", _TYPE_WIDTH)
        + _pad("Mean (+/- stddev)", _MEAN_WIDTH)
        + _pad("Longest", _COLUMN_WIDTH)
        + _pad("Shortest", _COLUMN_WIDTH)
        + _pad("Sum", _COLUMN_WIDTH)
    ).rstrip()
    lines = [
        head,
        columns,
        _pad("Real", _TYPE_WIDTH) + _format_stats(RunStats.from_series(run_times), unit, colored),
        _pad(cpu_label, _TYPE_WIDTH) + _format_stats(RunStats.from_series(cpu_run_times), unit, colored),
    ]
    return "\n".join(lines)


def _wants_color(stream: TextIO) -> bool:
    """Return True if the stream is an interactive terminal."""
    isatty = getattr(stream, "isatty", None)
    return bool(isatty and isatty())


def print_report(timer: "Timer", stream: Optional[TextIO] = None, color: bool = True) -> None:
    """
    Write a timer's report to stream (stderr by default).

    Output errors are ignored; reporting never fails the caller.
    """
    out = stream if stream is not None else sys.stderr
    try:
        colored = color and _wants_color(out)
        print(timer.report(colored=colored), file=out, flush=True)
    except (OSError, ValueError) as exc:
        logger.debug("could not write report for %r: %s", timer.name, exc)


def print_summary(registry: "TimerRegistry", stream: Optional[TextIO] = None) -> None:
    """Print every registered timer's report between banner lines."""
    out = stream if stream is not None else sys.stdout
    colored = _wants_color(out)
    timers = registry.all()
    thick = _paint(_separator("="), _Color.MAGENTA, colored)
    thin = _paint(_separator("-"), _Color.DIM, colored)

    if not timers:
        print(_paint("  [benchwatch] No timers registered.", _Color.DIM, colored), file=out)
        return

    print(thick, file=out)
    print(f"  {_paint('benchwatch', _Color.BOLD + _Color.WHITE, colored)} | Timing Summary", file=out)
    print(f"  {_paint(datetime.now().strftime('%Y-%m-%d %H:%M:%S'), _Color.DIM, colored)}", file=out)
    print(thick, file=out)

    for registered in timers:
        print(registered.report(colored=colored), file=out)
        print(thin, file=out)

    print(f"  Timers : {len(timers)}", file=out)
    print(thick, file=out)
