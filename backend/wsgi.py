try:
    from backend.ito.server import create_app
except ImportError:  # pragma: no cover
    from ito.server import create_app

# Single worker only: room state lives in this process.
app, socketio = create_app()
