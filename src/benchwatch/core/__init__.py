"""Timing primitives: clocks, bias correction, timers, statistics, registry."""
