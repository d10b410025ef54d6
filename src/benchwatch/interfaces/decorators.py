"""
Function and block timing interfaces backed by registry timers.

Every timed call or block is measured on its own Timer and committed as one
run on the named registry timer, so repeated, recursive or overlapping calls
build up statistics that summary() prints.

Usage:
    @watch                          # uses default name (function name)
    def my_function(): ...

    @watch("custom label")          # uses custom name
    def my_function(): ...

    with watch_block("db query"):   # inline block timing
        result = db.query(...)
"""

import functools
import inspect
from contextlib import contextmanager
from typing import Callable, Iterator, Optional

from ..core.registry import TimerRegistry, default_registry
from ..core.timer import Timer


@contextmanager
def _recorded_run(name: str, registry: TimerRegistry) -> Iterator[Timer]:
    """Measure one invocation and commit it as a run on the registry timer."""
    shared = registry.timer(name)
    invocation = Timer(name, clock=shared.clock, cpu_drift_correction=shared.cpu_drift_correction)
    try:
        yield shared
    finally:
        invocation.stop()
        shared.add_run(invocation.elapsed_time(), invocation.elapsed_cpu_time())


def _make_wrapper(fn: Callable, name: str, registry: TimerRegistry) -> Callable:
    """Wrap a callable so each invocation records one run."""

    @functools.wraps(fn)
    def wrapper(*args, **kwargs):
        with _recorded_run(name, registry):
            return fn(*args, **kwargs)

    return wrapper


def _make_async_wrapper(fn: Callable, name: str, registry: TimerRegistry) -> Callable:
    """Wrap an async callable so each awaited invocation records one run."""

    @functools.wraps(fn)
    async def wrapper(*args, **kwargs):
        with _recorded_run(name, registry):
            return await fn(*args, **kwargs)

    return wrapper


def _build_decorator(label: Optional[str], registry: TimerRegistry) -> Callable:
    """Return a decorator that times the given function with the resolved label."""

    def decorator(fn: Callable) -> Callable:
        name = label or fn.__qualname__
        if inspect.iscoroutinefunction(fn):
            return _make_async_wrapper(fn, name, registry)
        return _make_wrapper(fn, name, registry)

    return decorator


def watch(arg=None, *, name: Optional[str] = None, registry: Optional[TimerRegistry] = None):
    """
    Decorator that records a run on every call of a function or method.

    Supported usage patterns:
        @watch
        @watch("custom name")
        @watch(name="custom name")
        @watch(registry=my_registry)
        @watch("name", registry=my_registry)

    Async functions are timed from the first to the last awaited step; wall
    time includes time spent suspended, CPU time only covers this thread.

    Args:
        arg: Either the decorated function (bare @watch) or a string label
        name: Keyword-only custom label
        registry: Registry holding the timer; defaults to default_registry
    """
    active_registry = registry if registry is not None else default_registry

    if callable(arg):
        return _build_decorator(name, active_registry)(arg)

    if isinstance(arg, str):
        return _build_decorator(arg, active_registry)

    return _build_decorator(name, active_registry)


@contextmanager
def watch_block(name: str, registry: Optional[TimerRegistry] = None) -> Iterator[Timer]:
    """
    Context manager that records one run of an inline block.

    Yields the registry timer the run is committed to when the block exits.

    Args:
        name: Timer name in the registry
        registry: Custom registry; defaults to the global default_registry

    Example:
        with watch_block("parse json"):
            data = json.loads(raw)
    """
    active_registry = registry if registry is not None else default_registry
    with _recorded_run(name, active_registry) as timer:
        yield timer


def watch_call(fn: Callable, *args, name: Optional[str] = None,
               registry: Optional[TimerRegistry] = None, **kwargs):
    """
    Time a single function call without decorating the function.

    Useful when you don't control the source of the function.

    Args:
        fn: The callable to time
        *args: Positional arguments forwarded to fn
        name: Custom label; defaults to fn's qualified name
        registry: Custom registry; defaults to the global default_registry
        **kwargs: Keyword arguments forwarded to fn

    Returns:
        The return value of fn(*args, **kwargs)
    """
    active_registry = registry if registry is not None else default_registry
    label = name or getattr(fn, "__qualname__", repr(fn))
    with _recorded_run(label, active_registry):
        return fn(*args, **kwargs)
