"""
Registry of named, long-lived timers.

Lets call sites share a Timer across invocations without defining module
globals. Initialization order is explicit: a timer is created by the first
timer(name, ...) call, and that call's configuration wins. Later calls with
the same name return the existing instance and ignore their configuration.
"""

import atexit
import logging
import threading
from typing import Optional

from .timer import Timer

logger = logging.getLogger(__name__)


class TimerRegistry:
    """
    Store of Timer instances keyed by name.

    Creation is locked so two threads asking for the same name get the same
    timer; using the returned timer is still single-threaded.
    """

    def __init__(self):
        """Initialize with no timers."""
        self._timers: dict[str, Timer] = {}
        self._lock = threading.Lock()

    def timer(self, name: str, **config) -> Timer:
        """
        Return the timer registered under name, creating it on first use.

        Args:
            name: Registry key and report label
            **config: Timer keyword arguments, applied only on creation.
                Registry timers default to autostart=False.
        """
        with self._lock:
            existing = self._timers.get(name)
            if existing is not None:
                if config:
                    logger.debug("timer %r already exists; ignoring %s", name, sorted(config))
                return existing
            config.setdefault("autostart", False)
            created = Timer(name, **config)
            self._timers[name] = created
            return created

    def get(self, name: str) -> Optional[Timer]:
        """Return the timer registered under name, or None."""
        return self._timers.get(name)

    def all(self) -> list[Timer]:
        """Return all timers in creation order."""
        return list(self._timers.values())

    def names(self) -> list[str]:
        """Return all registered names in creation order."""
        return list(self._timers)

    def remove(self, name: str) -> Optional[Timer]:
        """Unregister and return a timer without closing it."""
        with self._lock:
            return self._timers.pop(name, None)

    def clear(self) -> None:
        """Drop every registered timer without printing."""
        with self._lock:
            self._timers.clear()

    def close(self) -> None:
        """
        Close every timer, printing those created with print_on_destruct.

        Each timer prints at most once, so calling this again only reports
        timers registered since the previous call. The default registry
        runs this at interpreter exit.
        """
        for registered in self.all():
            registered.close()

    def __len__(self) -> int:
        return len(self._timers)

    def __contains__(self, name: str) -> bool:
        return name in self._timers

    def __enter__(self) -> "TimerRegistry":
        return self

    def __exit__(self, *_) -> None:
        self.close()


# Module-level registry used by the convenience interfaces.
default_registry = TimerRegistry()
atexit.register(default_registry.close)
