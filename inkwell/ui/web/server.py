"""
Preview server — Flask app factory.

Serves the generated site and, in preview mode, the live reload
stream.  Static serving only; all generation happens in the builder.
"""

from __future__ import annotations

import logging
from pathlib import Path

from flask import Flask

from inkwell.core.services.live_reload import LiveReloadBroadcaster
from inkwell.core.services.site_builder import PUBLIC_DIR

logger = logging.getLogger(__name__)


def create_app(
    site_root: Path,
    broadcaster: LiveReloadBroadcaster | None = None,
) -> Flask:
    """Create and configure the Flask application.

    Args:
        site_root: Site root; files are served from its ``public/``.
        broadcaster: Live reload broadcaster.  When given, ``/live``
            is registered.

    Returns:
        Configured Flask application.
    """
    app = Flask(__name__, static_folder=None)

    app.config["SITE_ROOT"] = str(site_root)
    app.config["PUBLIC_DIR"] = str(site_root / PUBLIC_DIR)

    from inkwell.ui.web.routes_live import live_bp
    from inkwell.ui.web.routes_site import site_bp

    if broadcaster is not None:
        app.extensions["inkwell.live_reload"] = broadcaster
        app.register_blueprint(live_bp)
    app.register_blueprint(site_bp)

    logger.info("Preview app created (root=%s, live=%s)", site_root, broadcaster is not None)
    return app


def run_server(
    app: Flask,
    host: str = "0.0.0.0",
    port: int = 8000,
    debug: bool = False,
) -> None:
    """Run the Flask development server (threaded, no reloader)."""
    logger.info("Starting preview server on %s:%d", host, port)
    app.run(host=host, port=port, debug=debug, use_reloader=False, threaded=True)
