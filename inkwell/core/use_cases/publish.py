"""
Publish use case — build, then run ``build.publish`` inside ``public/``.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path

from inkwell.core.services.publish import LineSink, PublishError, run_publish
from inkwell.core.services.site_builder import PUBLIC_DIR
from inkwell.core.use_cases.build import BuildResult, run_build


@dataclass
class PublishResult:
    """Outcome of build + publish."""

    build: BuildResult | None = None
    command: str = ""
    returncode: int | None = None
    error: str | None = None

    def to_dict(self) -> dict:
        """Convert to a JSON-serializable dictionary."""
        result: dict = {
            "command": self.command,
            "returncode": self.returncode,
        }
        if self.build is not None:
            result["build"] = self.build.to_dict()
        if self.error:
            result["error"] = self.error
        return result


def run_site_publish(
    root: Path | str | None = None,
    *,
    sink: LineSink | None = None,
) -> PublishResult:
    """Build the site and run its publish command.

    Args:
        root: Site root (default: cwd, falling back to ``blog``).
        sink: Receives every stdout/stderr line of the command.
    """
    result = PublishResult()

    result.build = run_build(root)
    if result.build.error:
        result.error = result.build.error
        return result

    assert result.build.site_root is not None
    assert result.build.config is not None
    result.command = result.build.config.build.publish

    try:
        result.returncode = run_publish(
            result.command,
            result.build.site_root / PUBLIC_DIR,
            sink=sink,
        )
    except PublishError as e:
        result.returncode = e.returncode
        result.error = str(e)

    return result
