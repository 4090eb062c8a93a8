"""
Source watcher — observe ``source/`` and deliver change events in order.

Every directory under the source root is registered individually
(non-recursive) with one watchdog observer.  The set of watched
directories is fixed at start; directories created later are not
picked up until the next ``start_watch()``.

Threads
───────
- watchdog's own threads call ``_EventForwarder``, which only converts
  the event and puts it on the handle's queue.
- one worker thread per handle drains that queue and calls the
  ``on_event`` callback, strictly in delivery order.  No debounce:
  a burst of writes means a burst of callbacks.

``WatchHandle.stop()`` signals the worker, waits for it, and only then
stops the observer (releasing every registration).
"""

from __future__ import annotations

import logging
import os
import queue
import threading
from dataclasses import dataclass
from enum import Enum
from pathlib import Path
from typing import Any, Callable

from watchdog.events import (
    EVENT_TYPE_CREATED,
    EVENT_TYPE_DELETED,
    EVENT_TYPE_MODIFIED,
    EVENT_TYPE_MOVED,
    FileSystemEvent,
    FileSystemEventHandler,
)
from watchdog.observers import Observer

logger = logging.getLogger(__name__)

_POLL_INTERVAL_S = 0.5
"""How often the worker re-checks its stop signal while idle."""


class WatchError(RuntimeError):
    """Raised when the watch mechanism itself cannot be set up."""


class Operation(str, Enum):
    """Kinds of filesystem change."""

    WRITE = "write"
    CREATE = "create"
    REMOVE = "remove"
    RENAME = "rename"
    OTHER = "other"


@dataclass(frozen=True)
class ChangeEvent:
    """A single change observed in the watched tree."""

    path: Path
    operation: Operation


EventCallback = Callable[[ChangeEvent], None]


def to_change_event(event: FileSystemEvent) -> ChangeEvent:
    """Map a watchdog event onto a ChangeEvent.

    Only a modification of a file counts as a content write; a
    directory's own modified event (entry added/removed) is OTHER.
    """
    path = Path(os.fsdecode(event.src_path))
    if event.event_type == EVENT_TYPE_MODIFIED:
        op = Operation.OTHER if event.is_directory else Operation.WRITE
    elif event.event_type == EVENT_TYPE_CREATED:
        op = Operation.CREATE
    elif event.event_type == EVENT_TYPE_DELETED:
        op = Operation.REMOVE
    elif event.event_type == EVENT_TYPE_MOVED:
        op = Operation.RENAME
    else:
        op = Operation.OTHER
    return ChangeEvent(path=path, operation=op)


class _EventForwarder(FileSystemEventHandler):
    """watchdog handler that feeds a WatchHandle's queue."""

    def __init__(self, handle: WatchHandle) -> None:
        self._handle = handle

    def on_any_event(self, event: FileSystemEvent) -> None:
        self._handle.submit(to_change_event(event))


def iter_watch_dirs(root: Path) -> list[Path]:
    """``root`` and every directory below it, sorted."""
    dirs = [root]
    for dirpath, dirnames, _files in os.walk(root):
        dirnames.sort()
        dirs.extend(Path(dirpath) / d for d in dirnames)
    return dirs


class WatchHandle:
    """A running watch session over one source tree."""

    def __init__(
        self,
        root: Path,
        on_event: EventCallback,
        *,
        observer_factory: Callable[[], Any] = Observer,
    ) -> None:
        self.root = root
        self._on_event = on_event
        self._observer_factory = observer_factory
        self._observer: Any = None
        self._events: queue.Queue[ChangeEvent] = queue.Queue()
        self._stop = threading.Event()
        self._worker: threading.Thread | None = None
        self.watched_dirs: frozenset[Path] = frozenset()

    @property
    def running(self) -> bool:
        return self._worker is not None and self._worker.is_alive()

    def start(self) -> WatchHandle:
        """Register the source tree and start delivering events.

        Raises:
            WatchError: Missing root, or the observer cannot be created.
        """
        if not self.root.is_dir():
            raise WatchError(f"Source directory not found: {self.root}")

        try:
            self._observer = self._observer_factory()
            self._observer.start()
        except Exception as e:
            raise WatchError(f"Cannot create file watcher: {e}") from e

        handler = _EventForwarder(self)
        watched: set[Path] = set()
        for directory in iter_watch_dirs(self.root):
            try:
                self._observer.schedule(handler, str(directory), recursive=False)
            except OSError as e:
                logger.warning("Cannot watch %s: %s", directory, e)
                continue
            watched.add(directory)
        self.watched_dirs = frozenset(watched)

        self._worker = threading.Thread(
            target=self._run, daemon=True, name="source-watcher",
        )
        self._worker.start()
        logger.info("Watching %d directories under %s", len(watched), self.root)
        return self

    def submit(self, event: ChangeEvent) -> None:
        """Queue an event for the worker (ignored once stopping)."""
        if not self._stop.is_set():
            self._events.put(event)

    def stop(self) -> None:
        """Stop the worker, then release every registration.  Idempotent."""
        self._stop.set()

        worker = self._worker
        if worker is not None and worker is not threading.current_thread():
            worker.join()

        observer, self._observer = self._observer, None
        if observer is not None:
            observer.unschedule_all()
            observer.stop()
            observer.join()
            logger.info("Stopped watching %s", self.root)

    def _run(self) -> None:
        """Worker loop — one callback per event, in order."""
        while not self._stop.is_set():
            try:
                event = self._events.get(timeout=_POLL_INTERVAL_S)
            except queue.Empty:
                continue
            if self._stop.is_set():
                break
            try:
                self._on_event(event)
            except Exception:
                logger.exception("Watch callback failed for %s", event.path)


def start_watch(
    root: Path,
    on_event: EventCallback,
    *,
    observer_factory: Callable[[], Any] = Observer,
) -> WatchHandle:
    """Start watching ``root``; see WatchHandle.start()."""
    return WatchHandle(root, on_event, observer_factory=observer_factory).start()
