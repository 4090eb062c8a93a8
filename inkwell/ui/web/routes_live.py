"""
Live reload endpoint.

``GET /live`` — a Server-Sent Events stream.  Connecting supersedes
any previous preview tab.  After every rebuild the server sends::

    event: change
    data: change

and the page script reloads.  Idle streams get a comment line every
few seconds; once the browser is gone that write fails, the generator
is closed and the connection is dropped from the broadcaster.
"""

from __future__ import annotations

from flask import Blueprint, Response, current_app

live_bp = Blueprint("live", __name__)


@live_bp.route("/live")
def live_stream():  # type: ignore[no-untyped-def]
    """Open the live reload channel for this client."""
    broadcaster = current_app.extensions["inkwell.live_reload"]
    heartbeat = current_app.config.get("LIVE_HEARTBEAT_S", 15.0)
    conn = broadcaster.connect()

    def generate():  # type: ignore[no-untyped-def]
        try:
            yield "retry: 1000\n\n"
            for message in conn.messages(heartbeat_interval=heartbeat):
                if message is None:
                    yield ": keep-alive\n\n"
                else:
                    yield f"event: {message}\ndata: {message}\n\n"
        finally:
            broadcaster.disconnect(conn)

    return Response(
        generate(),
        mimetype="text/event-stream",
        headers={
            "Cache-Control": "no-cache, no-store, must-revalidate",
            "X-Accel-Buffering": "no",
        },
    )
