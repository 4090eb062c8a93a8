"""
Live reload — push "reload now" to the one connected preview client.

Single-connection model
───────────────────────
The preview is a single-developer tool, so exactly one browser tab is
kept: a new connection replaces (and closes) the previous one.

- ``connect()`` is called by the ``/live`` SSE route.
- ``notify()`` is called by the watch worker after each rebuild.
- ``_lock`` guards the connection reference; notify reads it and, on
  a failed send, clears it under the same lock so a dead tab is not
  written to forever.

Each connection owns a bounded ``queue.Queue``; the SSE generator
consumes it with ``messages()``.  A full queue means the client stopped
reading and counts as a failed send.
"""

from __future__ import annotations

import logging
import queue
import threading
from typing import Generator

logger = logging.getLogger(__name__)

RELOAD_MESSAGE = "change"
"""The only message type: content changed, reload."""

_CLOSE = object()


class PreviewConnection:
    """One live-reload channel to a browser."""

    def __init__(self, *, queue_size: int = 16) -> None:
        self._queue: queue.Queue[object] = queue.Queue(maxsize=queue_size)
        self._closed = threading.Event()

    @property
    def closed(self) -> bool:
        return self._closed.is_set()

    def send(self, message: str) -> None:
        """Queue ``message`` for the client.

        Raises:
            ConnectionError: The connection is closed or not draining.
        """
        if self.closed:
            raise ConnectionError("preview connection is closed")
        try:
            self._queue.put_nowait(message)
        except queue.Full as e:
            raise ConnectionError("preview client is not reading") from e

    def close(self) -> None:
        """Close the channel; the stream generator ends after this."""
        if self.closed:
            return
        self._closed.set()
        try:
            self._queue.put_nowait(_CLOSE)
        except queue.Full:
            pass  # messages() re-checks closed on its next wait

    def messages(self, *, heartbeat_interval: float = 15.0) -> Generator[str | None, None, None]:
        """Yield queued messages, or None after each idle interval.

        Ends once the connection is closed.
        """
        while not self.closed:
            try:
                item = self._queue.get(timeout=heartbeat_interval)
            except queue.Empty:
                yield None
                continue
            if item is _CLOSE:
                break
            yield str(item)


class LiveReloadBroadcaster:
    """Holds at most one PreviewConnection and notifies it."""

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._conn: PreviewConnection | None = None

    @property
    def connected(self) -> bool:
        with self._lock:
            return self._conn is not None

    def connect(self) -> PreviewConnection:
        """Register a new client, superseding any existing one."""
        conn = PreviewConnection()
        with self._lock:
            previous, self._conn = self._conn, conn
        if previous is not None:
            previous.close()
            logger.info("Live reload client replaced by a new connection")
        else:
            logger.info("Live reload client connected")
        return conn

    def disconnect(self, conn: PreviewConnection) -> None:
        """Forget ``conn`` if it is still the current connection."""
        with self._lock:
            if self._conn is conn:
                self._conn = None
        conn.close()

    def notify(self, message: str = RELOAD_MESSAGE) -> bool:
        """Best-effort send to the current client.

        Returns:
            True if the message was queued, False if there is no
            client or the send failed (the stale client is dropped).
        """
        with self._lock:
            conn = self._conn
            if conn is None:
                return False
            try:
                conn.send(message)
            except ConnectionError as e:
                self._conn = None
                logger.debug("Dropped live reload client: %s", e)
                return False
        return True

    def close(self) -> None:
        """Close the current connection, if any."""
        with self._lock:
            conn, self._conn = self._conn, None
        if conn is not None:
            conn.close()
