from __future__ import annotations


class PoolExhausted(Exception):
    """Raised by NumberPool.draw() when no values are left."""


class GameError(Exception):
    """A rejected event. Reported to the originating connection only."""

    code = "game_error"
    message = "操作に失敗しました。"

    def __init__(self, message: str | None = None) -> None:
        if message is not None:
            self.message = message
        super().__init__(self.message)


class InvalidRoomName(GameError):
    code = "invalid_room_name"
    message = "ルーム名は1〜20文字の英数字・ひらがな・カタカナ・漢字で入力してください。"


class InvalidNickname(GameError):
    code = "invalid_nickname"
    message = "ニックネームは1〜20文字の英数字・ひらがな・カタカナ・漢字で入力してください。"


class InvalidAnswer(GameError):
    code = "invalid_answer"
    message = "回答は1〜100文字で入力してください。"


class InvalidOrder(GameError):
    code = "invalid_order"
    message = "並び順が不正です。"


class RoomFull(GameError):
    code = "room_full"
    message = "このルームは満員です。"


class RoomNotFound(GameError):
    code = "room_not_found"
    message = "ルームが見つかりません。"


class NotInRoom(GameError):
    code = "not_in_room"
    message = "ルームに参加していません。"


class AlreadyInRoom(GameError):
    code = "already_in_room"
    message = "すでにルームに参加しています。"


class NotHost(GameError):
    code = "not_host"
    message = "この操作はホストのみ実行できます。"


class WrongPhase(GameError):
    code = "wrong_phase"
    message = "結果発表中はこの操作を行えません。"


class InternalError(GameError):
    code = "internal_error"
    message = "サーバーでエラーが発生しました。"
