from __future__ import annotations

import random
import sys
from typing import Any

from flask import Flask
from flask_cors import CORS
from flask_socketio import SocketIO
from werkzeug.middleware.proxy_fix import ProxyFix

from .config import Config, configure_logging
from .game.registry import RoomRegistry
from .game.themes import ThemeSelector
from .realtime.handlers import register_socketio_handlers
from .routes.health import bp as health_bp
from .routes.rooms import bp as rooms_bp
from .utils.ratelimit import RateLimiter


def _default_async_mode() -> str:
    # Windows and Python >= 3.13: threading (eventlet has known
    # compatibility issues there). Otherwise: eventlet.
    if sys.platform.startswith("win") or sys.version_info >= (3, 13):
        return "threading"
    return "eventlet"


def create_app(config: Any = None, registry: RoomRegistry | None = None) -> tuple[Flask, SocketIO]:
    app = Flask(__name__)
    app.config.from_object(config or Config)

    configure_logging(app.config.get("LOG_LEVEL", "INFO"))

    if app.config.get("TRUST_PROXY_HEADERS", False):
        app.wsgi_app = ProxyFix(app.wsgi_app, x_for=1, x_proto=1, x_host=1, x_port=1)

    cors_origins = app.config.get("CORS_ORIGINS", "*")
    CORS(app, resources={r"/api/*": {"origins": cors_origins}})

    socketio = SocketIO(
        app,
        cors_allowed_origins=cors_origins,
        async_mode=app.config.get("SOCKETIO_ASYNC_MODE") or _default_async_mode(),
    )

    if registry is None:
        seed = app.config.get("RANDOM_SEED")
        rng = random.Random(seed) if seed is not None else None
        registry = RoomRegistry(
            themes=ThemeSelector(app.config.get("THEMES"), rng=rng),
            number_min=app.config.get("NUMBER_MIN", 1),
            number_max=app.config.get("NUMBER_MAX", 100),
            rng=rng,
        )
    app.extensions["ito.registry"] = registry

    rate_limiter = RateLimiter(interval=float(app.config.get("SUBMIT_INTERVAL_SEC", 1.0)))

    app.register_blueprint(health_bp, url_prefix="/api")
    app.register_blueprint(rooms_bp, url_prefix="/api")

    register_socketio_handlers(
        socketio,
        registry,
        rate_limiter,
        trust_proxy_headers=app.config.get("TRUST_PROXY_HEADERS", False),
    )

    return app, socketio
