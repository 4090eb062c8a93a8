"""
Site routes — serve the generated ``public/`` directory.

GET /<path> → the file, or the directory's index.html.
"""

from __future__ import annotations

import mimetypes
from pathlib import Path

from flask import Blueprint, abort, current_app, send_file

site_bp = Blueprint("site", __name__)


def _public_dir() -> Path:
    return Path(current_app.config["PUBLIC_DIR"]).resolve()


@site_bp.route("/")
@site_bp.route("/<path:filepath>")
def serve_site(filepath: str = ""):  # type: ignore[no-untyped-def]
    """Serve a file from the build output."""
    public = _public_dir()
    requested = (public / filepath).resolve()

    # Refuse anything that escapes public/ (e.g. "../config.yml")
    if requested != public and public not in requested.parents:
        abort(404)

    if requested.is_dir():
        requested = requested / "index.html"

    if requested.is_file():
        mime = mimetypes.guess_type(str(requested))[0] or "application/octet-stream"
        return send_file(requested, mimetype=mime)

    abort(404, description=f"File not found: {filepath}")
