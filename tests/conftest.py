"""
Shared test fixtures and configuration.
"""

import logging
import textwrap
from pathlib import Path

import pytest


@pytest.fixture
def site_root(tmp_path: Path) -> Path:
    """Create a minimal site: config.yml, one article, one asset."""
    root = tmp_path / "site"
    (root / "source" / "posts").mkdir(parents=True)
    (root / "public").mkdir()

    (root / "config.yml").write_text(textwrap.dedent("""\
        site:
          title: Test Blog
        build:
          port: 8123
          publish: "echo published"
    """))
    (root / "source" / "posts" / "hello.md").write_text(textwrap.dedent("""\
        title: Hello
        date: 2015-01-02 03:04:05
        tags:
          - intro

        ---

        Hello **world**.
    """))
    (root / "source" / "style.css").write_text("body { color: black; }\n")
    return root


@pytest.fixture(autouse=True)
def _restore_logging():
    """setup_logging() reconfigures the root logger; undo it per test."""
    root = logging.getLogger()
    progress = logging.getLogger("inkwell.progress")
    handlers, level, progress_level = root.handlers[:], root.level, progress.level
    yield
    progress.setLevel(progress_level)
    for handler in root.handlers:
        if handler not in handlers:
            handler.close()
    root.handlers[:] = handlers
    root.setLevel(level)


class FakeObserver:
    """Stands in for a watchdog observer; records registrations."""

    def __init__(self, fail_on: set[str] | None = None) -> None:
        self.fail_on = fail_on or set()
        self.scheduled: list[str] = []
        self.started = False
        self.stopped = False
        self.joined = False

    def start(self) -> None:
        self.started = True

    def schedule(self, handler, path: str, recursive: bool = False):
        assert recursive is False
        if Path(path).name in self.fail_on:
            raise OSError(f"cannot watch {path}")
        self.scheduled.append(path)
        return path

    def unschedule_all(self) -> None:
        self.scheduled.clear()

    def stop(self) -> None:
        self.stopped = True

    def join(self, timeout=None) -> None:
        self.joined = True


@pytest.fixture
def fake_observer():
    """Observer class to pass as ``observer_factory``."""
    return FakeObserver
