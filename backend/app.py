import os

import sys

from pathlib import Path

from dotenv import load_dotenv


def _wants_eventlet() -> bool:
    # Must agree with ito.server._default_async_mode.
    mode = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()
    if mode:
        return mode == "eventlet"
    return not sys.platform.startswith("win") and sys.version_info < (3, 13)


def main() -> None:
    load_dotenv(Path(__file__).resolve().parents[1] / ".env")

    if _wants_eventlet():
        import eventlet

        eventlet.monkey_patch()

    try:
        from backend.ito.server import create_app
    except ImportError:  # pragma: no cover
        from ito.server import create_app

    app, socketio = create_app()

    host = os.environ.get("HOST", "0.0.0.0")
    port = int(os.environ.get("PORT", "3001"))

    app.logger.info("ito server listening on %s:%s", host, port)
    socketio.run(
        app,
        host=host,
        port=port,
        debug=os.environ.get("FLASK_DEBUG", "0") == "1",
        allow_unsafe_werkzeug=os.environ.get("ALLOW_UNSAFE_WERKZEUG", "1") == "1",
        use_reloader=os.environ.get("FLASK_USE_RELOADER", "0") == "1",
    )


if __name__ == "__main__":
    main()
