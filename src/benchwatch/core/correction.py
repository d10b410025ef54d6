"""
Overhead-compensating interval arithmetic.

Every clock read takes time: part of it before the instant is captured (I)
and part after (R). A timer reads each clock twice in a row at start and
twice at stop, in mirrored order:

    WALL_START_A    XI XR
    WALL_START_B    XI XR
    CPU_START_A     YI YR
    CPU_START_B     YI YR
    measured code   M
    CPU_STOP_B      YI YR
    CPU_STOP_A      YI YR
    WALL_STOP_B     XI XR
    WALL_STOP_A     XI XR

For the CPU clock the outer pair (A) spans YR + YI + YR + M + YI + YR + YI and
the inner pair (B) spans YR + M + YI, so their difference (the drift) is
2 * (YR + YI) and inner - drift / 2 == M, i.e. 1.5 * inner - 0.5 * outer.

The wall pairs additionally enclose the four CPU reads, 2 * drift worth of
time, which the wall estimate subtracts when a CPU bracket was taken. That
last step assumes both clocks cost about the same to read; it is a heuristic,
not a bound.

All functions are pure and work on plain integer nanoseconds.
"""

from typing import Optional


def drift(inner: int, outer: int) -> int:
    """Return the sampling overhead enclosed by the outer pair but not the inner one."""
    return outer - inner


def bias_corrected(inner: int, outer: int) -> int:
    """
    Return 1.5 * inner - 0.5 * outer, clamped at zero.

    Args:
        inner: stop B minus start B, in nanoseconds
        outer: stop A minus start A, in nanoseconds
    """
    return max(0, (3 * inner - outer) // 2)


def corrected_cpu(
    start_a: int,
    start_b: Optional[int],
    stop_b: Optional[int],
    stop_a: int,
) -> tuple[int, int]:
    """
    Return (elapsed, drift) for one CPU bracket.

    When the inner pair is missing the uncorrected outer duration is used and
    the drift is zero.
    """
    outer = stop_a - start_a
    if start_b is None or stop_b is None:
        return max(0, outer), 0
    inner = stop_b - start_b
    return bias_corrected(inner, outer), drift(inner, outer)


def corrected_wall(
    start_a: int,
    start_b: int,
    stop_b: int,
    stop_a: int,
    cpu_drift: int = 0,
) -> int:
    """
    Return the corrected wall duration for one bracket.

    Args:
        start_a, start_b: the two start instants (outer first)
        stop_b, stop_a: the two stop instants (inner first)
        cpu_drift: drift of the CPU bracket read inside this wall bracket;
            twice this value is subtracted from the estimate
    """
    estimate = bias_corrected(stop_b - start_b, stop_a - start_a)
    return max(0, estimate - 2 * cpu_drift)
