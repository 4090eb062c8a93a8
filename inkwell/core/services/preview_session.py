"""
Preview session — rebuild on write, then tell the browser to reload.

A session owns the three moving parts of ``inkwell preview``:

    WatchHandle  ──write event──▶  builder(root)  ──▶  broadcaster.notify()

It lives exactly as long as the preview operation (use it as a context
manager).  Only one watch handle is active at a time: ``start_watch()``
fully stops the previous handle before registering a new one, so a
single write never triggers two rebuilds.
"""

from __future__ import annotations

import logging
import threading
from pathlib import Path
from typing import Any, Callable

from watchdog.observers import Observer

from inkwell.core.observability.logging_config import progress_logger
from inkwell.core.services.live_reload import RELOAD_MESSAGE, LiveReloadBroadcaster
from inkwell.core.services.site_builder import SOURCE_DIR, BuildError
from inkwell.core.services.watcher import ChangeEvent, Operation, WatchHandle, start_watch

logger = logging.getLogger(__name__)
progress = progress_logger("preview")

Builder = Callable[[Path], Any]
"""Regenerates the output for a site root; may raise BuildError."""


class PreviewSession:
    """Watch handle + builder + live reload for one preview run."""

    def __init__(
        self,
        root: Path,
        builder: Builder,
        broadcaster: LiveReloadBroadcaster | None = None,
        *,
        observer_factory: Callable[[], Any] = Observer,
    ) -> None:
        self.root = root
        self.builder = builder
        self.broadcaster = broadcaster or LiveReloadBroadcaster()
        self._observer_factory = observer_factory
        self._handle: WatchHandle | None = None
        self._handle_lock = threading.Lock()

    @property
    def source_dir(self) -> Path:
        return self.root / SOURCE_DIR

    @property
    def handle(self) -> WatchHandle | None:
        return self._handle

    def start_watch(self) -> WatchHandle:
        """(Re)start watching the source tree.

        Raises:
            WatchError: The watcher cannot be created.
        """
        with self._handle_lock:
            if self._handle is not None:
                self._handle.stop()
                self._handle = None
            self._handle = start_watch(
                self.source_dir,
                self.handle_event,
                observer_factory=self._observer_factory,
            )
            return self._handle

    def stop_watch(self) -> None:
        with self._handle_lock:
            if self._handle is not None:
                self._handle.stop()
                self._handle = None

    def handle_event(self, event: ChangeEvent) -> None:
        """Rebuild and notify on a content write; ignore anything else."""
        if event.operation is not Operation.WRITE:
            return

        progress.info("Changed: %s", event.path)
        try:
            self.builder(self.root)
        except BuildError as e:
            logger.error("Rebuild failed: %s", e)
        except Exception:
            logger.exception("Rebuild failed unexpectedly")

        # Reload even after a failed build; the client shows whatever is on disk
        self.broadcaster.notify(RELOAD_MESSAGE)

    def close(self) -> None:
        """Stop watching and drop the preview client."""
        self.stop_watch()
        self.broadcaster.close()

    def __enter__(self) -> PreviewSession:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()
