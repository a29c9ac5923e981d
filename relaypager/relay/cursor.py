import binascii
import re
from base64 import b64decode, b64encode
from typing import Any

from .errors import InvalidCursorError, OrdinalKeyError

CURSOR_PREFIX = "cursor:v1:"

_ORDINAL_KEY = re.compile(r"[0-9]+")


def get_cursor_from_id(id: Any) -> str:
    """
    Cursors are the base64 encoded `cursor:v1:ID`, opaque to clients.
    """
    if id is None:
        raise OrdinalKeyError("Record primary key not found")
    return b64encode(f"{CURSOR_PREFIX}{id}".encode()).decode()


def get_id_from_cursor(cursor: str) -> int:
    """
    Inverse of get_cursor_from_id. Anything that was not produced by it, or encodes
    a negative key, raises InvalidCursorError.
    """
    try:
        decoded = b64decode(cursor.encode(), validate=True).decode()
    except (binascii.Error, UnicodeError) as e:
        raise InvalidCursorError() from e
    if not decoded.startswith(CURSOR_PREFIX):
        raise InvalidCursorError()
    raw = decoded[len(CURSOR_PREFIX) :]
    if _ORDINAL_KEY.fullmatch(raw) is None:
        raise InvalidCursorError()
    try:
        return int(raw)
    except ValueError as e:
        raise InvalidCursorError() from e
