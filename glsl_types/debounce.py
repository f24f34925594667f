"""
Per-file debouncing of watch events.

Editors usually produce a burst of notifications for one save. The Debouncer
coalesces them: each file gets its own quiescence timer, restarted by every
new event, and the handler runs once with the last event when the timer
expires.
"""

import itertools
import threading
from collections.abc import Callable
from dataclasses import dataclass, field
from functools import partial
from pathlib import Path
from typing import Protocol

from loguru import logger

DEFAULT_DELAY = 0.01


@dataclass(frozen=True)
class WatchEvent:
    """A change notification from the watch subsystem.

    Attributes:
        paths: Affected paths, empty for events the generator ignores
        kind: Change kind, e.g. ``created``, ``modified`` or ``moved``
    """

    paths: tuple[Path, ...]
    kind: str = "modified"


def event_key(event: WatchEvent) -> Path:
    """Stable per-file key of an event: the canonical form of its first path."""
    return event.paths[0].resolve()


class TimerHandle(Protocol):
    def start(self) -> None: ...

    def cancel(self) -> None: ...


TimerFactory = Callable[[float, Callable[[], None]], TimerHandle]


def _daemon_timer(delay: float, callback: Callable[[], None]) -> TimerHandle:
    timer = threading.Timer(delay, callback)
    timer.daemon = True
    return timer


@dataclass
class _Pending:
    payload: WatchEvent
    timer: TimerHandle
    generation: int


@dataclass
class _KeyLock:
    """Serializes handler runs of one key; users counts runs holding or awaiting it."""

    lock: threading.Lock = field(default_factory=threading.Lock)
    users: int = 0


class Debouncer:
    """Coalesces bursts of watch events per file.

    Args:
        delay: Quiescence window in seconds
        handler: Called with the last event of a burst
        timer_factory: Creates the timer of one key; ``threading.Timer`` based
            by default
    """

    def __init__(
        self,
        delay: float,
        handler: Callable[[WatchEvent], None],
        timer_factory: TimerFactory | None = None,
    ):
        self.delay = delay
        self._handler = handler
        self._timer_factory = timer_factory or _daemon_timer
        self._lock = threading.Lock()
        self._pending: dict[Path, _Pending] = {}
        self._key_locks: dict[Path, _KeyLock] = {}
        self._generations = itertools.count()

    def register(self, event: WatchEvent) -> None:
        """Record an event and (re)start the timer of its file.

        Events without paths are dropped.
        """
        if not event.paths:
            return

        key = event_key(event)
        with self._lock:
            previous = self._pending.get(key)
            if previous is not None:
                previous.timer.cancel()

            generation = next(self._generations)
            timer = self._timer_factory(self.delay, partial(self._fire, key, generation))
            self._pending[key] = _Pending(event, timer, generation)
            timer.start()

    def _fire(self, key: Path, generation: int) -> None:
        with self._lock:
            pending = self._pending.get(key)
            # A newer event restarted the window after this timer expired
            if pending is None or pending.generation != generation:
                return
            del self._pending[key]
            key_lock = self._key_locks.setdefault(key, _KeyLock())
            key_lock.users += 1

        try:
            with key_lock.lock:
                try:
                    self._handler(pending.payload)
                except Exception:
                    logger.exception(f"Unhandled error while processing {key}")
        finally:
            with self._lock:
                key_lock.users -= 1
                # Only keys with a running or waiting handler keep a lock
                if key_lock.users == 0:
                    del self._key_locks[key]
