"""
Preview use case — build, watch ``source/``, serve with live reload.

This is the only long-running operation.  Everything it starts is
owned by one PreviewSession and torn down when the server exits.
"""

from __future__ import annotations

import functools
import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable

from flask import Flask

from inkwell.core.services.preview_session import PreviewSession
from inkwell.core.services.site_builder import build_site
from inkwell.core.services.watcher import WatchError
from inkwell.core.use_cases.build import BuildResult, run_build

logger = logging.getLogger(__name__)


@dataclass
class PreviewResult:
    """Outcome of a preview run (set once the server stops)."""

    build: BuildResult | None = None
    url: str = ""
    watched_dirs: int = 0
    error: str | None = None


def run_preview(
    root: Path | str | None = None,
    *,
    host: str = "0.0.0.0",
    port: int | None = None,
    on_ready: Callable[[PreviewResult], None] | None = None,
    serve: Callable[[Flask, str, int], None] | None = None,
) -> PreviewResult:
    """Build the site, start watching, and serve until interrupted.

    Args:
        root: Site root (default: cwd, falling back to ``blog``).
        host: Bind address.
        port: Port; defaults to ``build.port`` from config.
        on_ready: Called once the server is about to start.
        serve: Server runner, ``serve(app, host, port)``; defaults to
            the Flask development server.
    """
    from inkwell.ui.web.server import create_app

    result = PreviewResult()
    result.build = run_build(root, live_reload=True)
    if result.build.error:
        result.error = result.build.error
        return result

    assert result.build.site_root is not None
    assert result.build.config is not None
    site_root = result.build.site_root
    port = port or result.build.config.build.port

    builder = functools.partial(
        build_site, live_reload=True, site_title=result.build.config.site.title,
    )

    with PreviewSession(site_root, builder) as session:
        try:
            handle = session.start_watch()
        except WatchError as e:
            result.error = str(e)
            return result

        result.watched_dirs = len(handle.watched_dirs)
        result.url = f"http://localhost:{port}/"
        app = create_app(site_root, broadcaster=session.broadcaster)

        if on_ready is not None:
            on_ready(result)
        try:
            (serve or _serve_forever)(app, host, port)
        except KeyboardInterrupt:
            logger.info("Preview interrupted by user")
        finally:
            logger.info("Preview stopped")

    return result


def _serve_forever(app: Flask, host: str, port: int) -> None:
    from inkwell.ui.web.server import run_server

    run_server(app, host=host, port=port)
