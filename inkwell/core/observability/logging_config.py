"""
Console and file logging for the inkwell CLI.

Two kinds of records reach the console:

- **progress** lines (``Converting hello.md``, ``Changed: source/a.md``)
  are what the user runs the command to see.  They come from loggers
  under ``inkwell.progress`` and are printed bare at the default level;
  only ``--quiet`` hides them.
- everything else is diagnostics, shown from the configured level up
  (WARNING unless ``-v``/``--debug``/``INK_LOG_LEVEL`` says otherwise).

``INK_LOG_FILE`` adds a file that gets full detail from its own level
(``INK_LOG_FILE_LEVEL``, default: the console level).
"""

from __future__ import annotations

import logging
import sys

PROGRESS_LOGGER = "inkwell.progress"

_LEVEL_FORMATS = {
    logging.DEBUG: ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%H:%M:%S"),
    logging.INFO: ("%(asctime)s [%(name)s] %(message)s", "%H:%M:%S"),
}
_FILE_FORMAT = ("%(asctime)s %(levelname)-5s %(name)s:%(lineno)d  %(message)s", "%Y-%m-%d %H:%M:%S")

# Chatty at INFO: the watcher backend, the dev server's request log,
# and Python-Markdown's extension loading
_NOISY_LOGGERS = ("watchdog", "werkzeug", "MARKDOWN")


def progress_logger(name: str) -> logging.Logger:
    """Logger whose INFO records are user-facing progress lines."""
    return logging.getLogger(f"{PROGRESS_LOGGER}.{name}")


def _is_progress(record: logging.LogRecord) -> bool:
    return record.name == PROGRESS_LOGGER or record.name.startswith(PROGRESS_LOGGER + ".")


class _ConsoleFilter(logging.Filter):
    """Pass diagnostics from ``level`` up, and progress when enabled."""

    def __init__(self, level: int, show_progress: bool) -> None:
        super().__init__()
        self.level = level
        self.show_progress = show_progress

    def filter(self, record: logging.LogRecord) -> bool:
        if record.levelno >= self.level:
            return True
        return self.show_progress and record.levelno >= logging.INFO and _is_progress(record)


class _ConsoleFormatter(logging.Formatter):
    """Progress lines bare; diagnostics formatted for the console level."""

    def __init__(self, level: int) -> None:
        fmt, datefmt = _LEVEL_FORMATS.get(level, ("%(message)s", None))
        super().__init__(fmt, datefmt=datefmt)
        self._bare = logging.Formatter("%(message)s")

    def format(self, record: logging.LogRecord) -> str:
        if _is_progress(record) and record.levelno == logging.INFO:
            return self._bare.format(record)
        return super().format(record)


def setup_logging(
    level: str = "WARNING",
    log_file: str | None = None,
    log_file_level: str | None = None,
    quiet_third_party: bool = True,
) -> None:
    """Configure the root logger for one CLI run.

    Args:
        level: Console level name.  Anything above WARNING (``-q``)
            also hides progress lines.
        log_file: Optional log file path.
        log_file_level: Level for the file; defaults to ``level``.
        quiet_third_party: Hold _NOISY_LOGGERS at WARNING unless the
            console is at DEBUG.
    """
    console_level = _parse_level(level)
    show_progress = console_level <= logging.WARNING

    console = logging.StreamHandler(sys.stderr)
    console.addFilter(_ConsoleFilter(console_level, show_progress))
    console.setFormatter(_ConsoleFormatter(min(console_level, logging.WARNING)))

    handlers: list[logging.Handler] = [console]
    root_level = console_level
    if log_file:
        file_level = _parse_level(log_file_level) if log_file_level else console_level
        fh = logging.FileHandler(log_file, encoding="utf-8")
        fh.setLevel(file_level)
        fh.setFormatter(logging.Formatter(_FILE_FORMAT[0], datefmt=_FILE_FORMAT[1]))
        handlers.append(fh)
        root_level = min(root_level, file_level)

    root = logging.getLogger()
    root.handlers[:] = handlers
    root.setLevel(root_level)

    # Progress must get past the root level even when diagnostics do not
    logging.getLogger(PROGRESS_LOGGER).setLevel(
        min(root_level, logging.INFO) if show_progress else logging.NOTSET
    )

    if quiet_third_party and console_level > logging.DEBUG:
        for name in _NOISY_LOGGERS:
            logging.getLogger(name).setLevel(logging.WARNING)


def _parse_level(level: str | None) -> int:
    """Level name to number; unknown or empty names mean WARNING."""
    numeric = logging.getLevelName(level.upper()) if level else logging.WARNING
    return numeric if isinstance(numeric, int) else logging.WARNING
