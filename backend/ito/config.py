import logging
import os
import sys

from .game.themes import DEFAULT_THEMES_JA


class Config:
    SECRET_KEY = os.environ.get("SECRET_KEY", "dev")

    # CORS (REST + Socket.IO)
    CORS_ORIGINS = os.environ.get("CORS_ORIGINS", "http://localhost:3000")

    # Reverse proxy / IP headers
    TRUST_PROXY_HEADERS = os.environ.get("TRUST_PROXY_HEADERS", "1") == "1"

    # Empty means platform default (see server.create_app)
    SOCKETIO_ASYNC_MODE = os.environ.get("SOCKETIO_ASYNC_MODE", "").strip()

    LOG_LEVEL = os.environ.get("LOG_LEVEL", "INFO").upper()

    # Game
    NUMBER_MIN = 1
    NUMBER_MAX = 100
    SUBMIT_INTERVAL_SEC = float(os.environ.get("SUBMIT_INTERVAL_SEC", "1.0"))
    THEMES = list(DEFAULT_THEMES_JA)
    # Fixed seed for reproducible cards and themes; unset in production.
    RANDOM_SEED = int(os.environ["RANDOM_SEED"]) if os.environ.get("RANDOM_SEED") else None


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Transport libraries are chatty at INFO.
    logging.getLogger("engineio").setLevel(logging.WARNING)
    logging.getLogger("socketio").setLevel(logging.WARNING)
    logging.getLogger("werkzeug").setLevel(logging.WARNING)
