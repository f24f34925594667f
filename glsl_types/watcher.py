"""
Watch session: filesystem events to regenerated bindings.

watchdog delivers events on its observer thread; they are converted to
WatchEvents and fed to a Debouncer, whose timers run one regeneration cycle
per changed file.
"""

import os
import time
from collections.abc import Callable
from pathlib import Path
from typing import Any

import watchdog.events
import watchdog.observers
from loguru import logger
from watchdog.events import FileSystemEventHandler

from glsl_types.config import WatchConfig
from glsl_types.debounce import Debouncer, TimerFactory, WatchEvent
from glsl_types.errors import WatchError
from glsl_types.pipeline import CycleOutcome, run_cycle
from glsl_types.reporting import report_outcome

# Event types that can change the content of a shader
WATCHED_EVENT_TYPES = frozenset(
    {
        watchdog.events.EVENT_TYPE_CREATED,
        watchdog.events.EVENT_TYPE_MODIFIED,
        watchdog.events.EVENT_TYPE_MOVED,
    }
)


def to_watch_event(event: watchdog.events.FileSystemEvent) -> WatchEvent:
    """Convert a watchdog event.

    Directory events carry no path. Move events report their destination.
    """
    if event.is_directory:
        return WatchEvent(paths=(), kind=event.event_type)
    raw_path = event.src_path
    if event.event_type == watchdog.events.EVENT_TYPE_MOVED:
        raw_path = event.dest_path
    return WatchEvent(paths=(Path(os.fsdecode(raw_path)),), kind=event.event_type)


class ShaderChangeHandler(FileSystemEventHandler):  # type: ignore
    """Event handler forwarding shader changes to a Debouncer."""

    def __init__(self, debouncer: Debouncer):
        self.debouncer = debouncer

    def on_any_event(self, event: watchdog.events.FileSystemEvent) -> None:
        """Handle any file system event.

        Args:
            event: File system event
        """
        if event.event_type in WATCHED_EVENT_TYPES:
            self.debouncer.register(to_watch_event(event))


class WatchSession:
    """Watches an input tree and regenerates bindings on changes.

    Args:
        config: Session settings
        on_outcome: Receives the outcome of every cycle; logs it by default
        observer_factory: Creates the watchdog observer
        timer_factory: Passed to the Debouncer
    """

    def __init__(
        self,
        config: WatchConfig,
        on_outcome: Callable[[CycleOutcome], None] | None = None,
        observer_factory: Callable[[], Any] = watchdog.observers.Observer,
        timer_factory: TimerFactory | None = None,
    ):
        self.config = config
        self.target = config.target_type.create()
        self.on_outcome = on_outcome or self._report
        self.observer_factory = observer_factory
        self.debouncer = Debouncer(config.debounce_delay, self.handle_event, timer_factory)
        self.observer: Any = None

    def _report(self, outcome: CycleOutcome) -> None:
        report_outcome(outcome, root=self.config.input_dir.resolve().parent)

    def handle_event(self, event: WatchEvent) -> None:
        """Run one regeneration cycle for a debounced event."""
        outcome = run_cycle(event.paths[0], self.config.output_dir, self.target)
        if outcome is not None:
            self.on_outcome(outcome)

    def start(self) -> None:
        """Start watching the input tree.

        Raises:
            WatchError: If the watch cannot be registered
        """
        observer = self.observer_factory()
        try:
            observer.schedule(
                ShaderChangeHandler(self.debouncer),
                path=str(self.config.input_dir),
                recursive=True,
            )
            observer.start()
        except OSError as e:
            raise WatchError(f"Cannot watch {self.config.input_dir}: {e}") from e
        self.observer = observer
        logger.info(f"Watching for changes in the folder: {self.config.input_dir}")

    def stop(self) -> None:
        if self.observer is None:
            return
        self.observer.stop()
        self.observer.join()
        self.observer = None

    def run(self, poll_interval: float = 0.1) -> None:
        """Watch until interrupted."""
        self.start()
        try:
            while True:
                time.sleep(poll_interval)
        except KeyboardInterrupt:
            logger.info("Keyboard interrupt received, stopping...")
        finally:
            self.stop()
