from __future__ import annotations

import re
from typing import Any


NAME_MAX_LEN = 20
ANSWER_MAX_LEN = 100

# ASCII alphanumerics, hiragana, katakana (incl. "ー"), half-width katakana,
# CJK unified ideographs and the iteration mark "々".
_NAME_CHARS = r"0-9A-Za-z\u3040-\u309f\u30a0-\u30ff\uff66-\uff9f\u4e00-\u9fff\u3005"

_NICKNAME_RE = re.compile(rf"[{_NAME_CHARS}]{{1,{NAME_MAX_LEN}}}")
_ROOM_RE = re.compile(rf"[{_NAME_CHARS}_\-]{{1,{NAME_MAX_LEN}}}")
_UNSAFE_RE = re.compile(r"[<>\x00-\x1f\x7f]")


def payload_text(payload: Any, key: str) -> str:
    if not isinstance(payload, dict):
        return ""
    value = payload.get(key)
    if not isinstance(value, str):
        return ""
    return value.strip()


def sanitize_text(text: str) -> str:
    """Drop markup brackets and control characters."""
    return _UNSAFE_RE.sub("", text)


def validate_room_name(name: str) -> bool:
    return bool(_ROOM_RE.fullmatch(name or ""))


def validate_nickname(name: str) -> bool:
    return bool(_NICKNAME_RE.fullmatch(name or ""))


def validate_answer(answer: str) -> bool:
    a = (answer or "").strip()
    if not a or len(a) > ANSWER_MAX_LEN:
        return False
    return bool(sanitize_text(a).strip())
