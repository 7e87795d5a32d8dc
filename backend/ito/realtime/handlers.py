from __future__ import annotations

import logging
from typing import Any

from flask import request
from flask_socketio import SocketIO, close_room, emit, join_room

from ..game import service
from ..game.errors import GameError, InternalError, InvalidAnswer, InvalidNickname, InvalidRoomName
from ..game.models import RoomState
from ..game.registry import RoomRegistry
from ..utils.ip import get_client_ip
from ..utils.ratelimit import RateLimiter
from ..utils.text import payload_text, validate_answer, validate_nickname, validate_room_name

logger = logging.getLogger(__name__)


def register_socketio_handlers(
    socketio: SocketIO,
    registry: RoomRegistry,
    rate_limiter: RateLimiter,
    trust_proxy_headers: bool = True,
) -> None:
    """Bind the game protocol to ``socketio``.

    Every handler runs under ``registry.lock`` from lookup to broadcast, so
    each event is applied and fanned out before the next one touches any room.
    Rejections go to the sender only (``error_message`` plus an ack with the
    error code) and leave the room untouched.
    """

    def _broadcast_room_state(room: RoomState, skip_sid: str | None = None) -> None:
        socketio.emit("game_update", service.room_public_state(room), to=room.channel, skip_sid=skip_sid)

    def _reject(event: str, err: GameError) -> dict:
        logger.info("%s from %s rejected: %s", event, request.sid, err.code)
        emit("error_message", err.message)
        return {"ok": False, "error": err.code}

    def _internal_error(event: str) -> dict:
        logger.exception("Unexpected error while handling %s from %s", event, request.sid)
        return _reject(event, InternalError())

    @socketio.on("connect")
    def on_connect(auth: Any = None):
        logger.info("Connected: %s (%s)", request.sid, get_client_ip(request, trust_proxy_headers))

    @socketio.on("join_room")
    def on_join_room(data: Any = None):
        room_name = payload_text(data, "room")
        nickname = payload_text(data, "nickname")

        try:
            if not validate_room_name(room_name):
                raise InvalidRoomName()
            if not validate_nickname(nickname):
                raise InvalidNickname()

            with registry.lock:
                room, player, created = service.join_room(registry, room_name, request.sid, nickname)
                try:
                    join_room(room.channel)
                except Exception:
                    service.leave_room(registry, request.sid)
                    raise
                emit("your_card", {"number": player.number})
                _broadcast_room_state(room)
        except GameError as e:
            return _reject("join_room", e)
        except Exception:
            return _internal_error("join_room")

        logger.info(
            "%s (%s) joined room %s%s",
            request.sid,
            player.nickname,
            room_name,
            " as host" if created else "",
        )
        return {"ok": True, "playerId": request.sid, "number": player.number}

    @socketio.on("submit_answer")
    def on_submit_answer(data: Any = None):
        if not rate_limiter.allow(request.sid):
            logger.debug("submit_answer from %s throttled", request.sid)
            return None

        answer = payload_text(data, "answer")
        try:
            if not validate_answer(answer):
                raise InvalidAnswer()

            with registry.lock:
                room = registry.find_room_of(request.sid)
                service.submit_answer(room, request.sid, answer)
                _broadcast_room_state(room)
        except GameError as e:
            return _reject("submit_answer", e)

        logger.debug("%s submitted an answer in room %s", request.sid, room.name)
        return {"ok": True}

    @socketio.on("update_order")
    def on_update_order(data: Any = None):
        ordered_ids = data.get("orderedIds") if isinstance(data, dict) else None
        try:
            with registry.lock:
                room = registry.find_room_of(request.sid)
                service.update_order(room, request.sid, ordered_ids)
                # The sender already shows this arrangement.
                _broadcast_room_state(room, skip_sid=request.sid)
        except GameError as e:
            return _reject("update_order", e)

        return {"ok": True}

    @socketio.on("show_result")
    def on_show_result(data: Any = None):
        try:
            with registry.lock:
                room = registry.find_room_of(request.sid)
                service.show_result(room, request.sid)
                _broadcast_room_state(room)
        except GameError as e:
            return _reject("show_result", e)
        except Exception:
            return _internal_error("show_result")

        logger.info("Room %s: result shown", room.name)
        return {"ok": True}

    @socketio.on("reset_game")
    def on_reset_game(data: Any = None):
        try:
            with registry.lock:
                room = registry.find_room_of(request.sid)
                numbers = service.reset_round(room, request.sid, registry.themes)
                for pid, number in numbers.items():
                    socketio.emit("your_card", {"number": number}, to=pid)
                _broadcast_room_state(room)
        except GameError as e:
            return _reject("reset_game", e)
        except Exception:
            return _internal_error("reset_game")

        logger.info("Room %s: new round (theme=%s)", room.name, room.theme)
        return {"ok": True}

    @socketio.on("disband_room")
    def on_disband_room(data: Any = None):
        try:
            with registry.lock:
                room = service.disband_room(registry, request.sid)
                socketio.emit("room_disbanded", {}, to=room.channel)
                close_room(room.channel)
        except GameError as e:
            return _reject("disband_room", e)
        except Exception:
            return _internal_error("disband_room")

        logger.info("Room %s disbanded by host %s", room.name, request.sid)
        return {"ok": True}

    @socketio.on("disconnect")
    def on_disconnect(reason: Any = None):
        logger.info("Disconnected: %s", request.sid)
        rate_limiter.forget(request.sid)

        with registry.lock:
            room, deleted, new_host = service.leave_room(registry, request.sid)
            if room is None or deleted:
                return
            if new_host:
                logger.info("Room %s: new host is %s", room.name, new_host)
            _broadcast_room_state(room)
