import random

import pytest

from ito.config import Config
from ito.game.models import RoomState
from ito.game.pool import NumberPool
from ito.game.registry import RoomRegistry
from ito.game.themes import ThemeSelector
from ito.server import create_app


class AppTestConfig(Config):
    TESTING = True
    SECRET_KEY = "test-secret"
    SOCKETIO_ASYNC_MODE = "threading"
    TRUST_PROXY_HEADERS = False
    LOG_LEVEL = "WARNING"
    SUBMIT_INTERVAL_SEC = 0.0


def assert_partition(room: RoomState) -> None:
    """Pool and held cards together are exactly low..high, no overlap."""
    held = [p.number for p in room.players.values()]
    everything = sorted(room.pool.available() + held)
    assert everything == list(range(room.pool.low, room.pool.high + 1))


def make_room(name: str = "ABC", theme: str = "最強の動物", seed: int = 0) -> RoomState:
    return RoomState(name=name, pool=NumberPool(rng=random.Random(seed)), theme=theme)


def events(client) -> list[tuple[str, list]]:
    return [(e["name"], e["args"]) for e in client.get_received()]


def payloads(received: list[tuple[str, list]], name: str) -> list:
    return [args[0] if args else None for n, args in received if n == name]


@pytest.fixture
def registry():
    rng = random.Random(1234)
    return RoomRegistry(themes=ThemeSelector(rng=rng), rng=rng)


@pytest.fixture
def themes():
    return ThemeSelector(rng=random.Random(42))


@pytest.fixture
def app_ctx(registry):
    app, socketio = create_app(AppTestConfig, registry=registry)
    return {"app": app, "socketio": socketio, "registry": registry}


@pytest.fixture
def app(app_ctx):
    return app_ctx["app"]


@pytest.fixture
def socketio(app_ctx):
    return app_ctx["socketio"]


@pytest.fixture
def http_client(app):
    return app.test_client()


@pytest.fixture
def connect(app, socketio):
    clients = []

    def _connect():
        client = socketio.test_client(app)
        clients.append(client)
        return client

    yield _connect

    for client in clients:
        if client.is_connected():
            client.disconnect()


@pytest.fixture
def join(connect):
    """Connect a client, join a room, drain its queue. Returns (client, player_id, number)."""

    def _join(room: str, nickname: str):
        client = connect()
        ack = client.emit("join_room", {"room": room, "nickname": nickname}, callback=True)
        assert ack["ok"] is True, ack
        client.get_received()
        return client, ack["playerId"], ack["number"]

    return _join
