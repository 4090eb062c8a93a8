"""
Publish executor — run the configured publish command in ``public/``.

The command goes through the platform shell (``cmd /C`` on Windows,
``/bin/sh -c`` elsewhere).  stdout and stderr are drained by two
threads so long-running deploys show progress line by line; the two
streams are only ordered relative to themselves.

There is no timeout: a hung publish command hangs the caller.
"""

from __future__ import annotations

import logging
import os
import subprocess
import threading
from pathlib import Path
from typing import IO, Callable

from inkwell.core.observability.logging_config import progress_logger

logger = logging.getLogger(__name__)
progress = progress_logger("publish")

LineSink = Callable[[str], None]


class PublishError(RuntimeError):
    """Raised when the publish command cannot run or exits non-zero."""

    def __init__(self, message: str, returncode: int | None = None):
        super().__init__(message)
        self.returncode = returncode


def shell_command(command: str) -> list[str]:
    """Wrap ``command`` for the platform's command interpreter."""
    if os.name == "nt":
        return ["cmd", "/C", command]
    return ["/bin/sh", "-c", command]


def _drain(stream: IO[str], sink: LineSink) -> None:
    """Forward every line of ``stream`` to ``sink`` until EOF.

    Reading never stops early: the command would die of SIGPIPE.  If
    ``sink`` raises, the remaining lines go to the log instead.
    """
    with stream:
        for line in stream:
            line = line.rstrip("\r\n")
            try:
                sink(line)
            except Exception:
                logger.exception("Publish output sink failed, logging the rest")
                sink = _log_line
                sink(line)


def _log_line(line: str) -> None:
    progress.info("%s", line)


def run_publish(
    command: str,
    working_dir: Path,
    sink: LineSink | None = None,
) -> int:
    """Run ``command`` in ``working_dir``, streaming its output to ``sink``.

    Returns only after the process has exited and both streams have
    been forwarded in full.

    Args:
        command: Shell command string from config.
        working_dir: Directory to run in (the build output).
        sink: Receives each output line; defaults to progress logging.

    Returns:
        The exit status (always 0 — non-zero raises).

    Raises:
        PublishError: Empty command, missing directory, spawn failure
            or non-zero exit.
    """
    if not command or not command.strip():
        raise PublishError("No publish command configured (build.publish)")
    if not working_dir.is_dir():
        raise PublishError(f"Publish directory not found: {working_dir}")

    sink = sink or _log_line
    argv = shell_command(command)
    logger.debug("Publishing: %s (cwd=%s)", argv, working_dir)

    try:
        proc = subprocess.Popen(
            argv,
            cwd=str(working_dir),
            stdout=subprocess.PIPE,
            stderr=subprocess.PIPE,
            encoding="utf-8",
            errors="replace",
            bufsize=1,
        )
    except OSError as e:
        raise PublishError(f"Failed to start publish command: {e}") from e

    drains = [
        threading.Thread(
            target=_drain, args=(stream, sink), daemon=True, name=f"publish-{label}",
        )
        for label, stream in (("stdout", proc.stdout), ("stderr", proc.stderr))
        if stream is not None
    ]
    for t in drains:
        t.start()

    returncode = proc.wait()
    for t in drains:
        t.join()

    logger.info("Publish command exited with code %d", returncode)
    if returncode != 0:
        raise PublishError(
            f"Publish command failed (exit code {returncode})", returncode=returncode,
        )
    return returncode
