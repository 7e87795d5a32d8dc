from __future__ import annotations

from flask import Blueprint, current_app, jsonify

from ..game import service
from ..game.errors import RoomNotFound

bp = Blueprint("rooms", __name__)


@bp.get("/rooms")
def list_rooms():
    registry = current_app.extensions["ito.registry"]
    with registry.lock:
        rooms = [service.room_summary(r) for r in registry.list_rooms()]
    return jsonify({"rooms": rooms})


@bp.get("/rooms/<name>")
def get_room(name: str):
    registry = current_app.extensions["ito.registry"]
    with registry.lock:
        try:
            room = registry.get(name)
        except RoomNotFound as e:
            return jsonify({"error": e.code}), 404
        return jsonify(service.room_public_state(room))
