"""
RESP2 encoder.

Requests are always an array of bulk strings. Lengths are byte lengths of
the UTF-8 encoding, not character counts.
"""

from typing import List, Sequence, Union

from .errors import InvalidArgument
from .formatter import Segment
from .resp_types import (
    Array, BulkString, Error, Integer, RESPValue, SimpleString,
    INT64_MAX, INT64_MIN,
)

CRLF = b"\r\n"

Argument = Union[str, bytes, int, float]


def _to_bytes(arg: Argument) -> bytes:
    if isinstance(arg, bytes):
        return arg
    if isinstance(arg, bool):
        raise InvalidArgument(f"Cannot encode boolean argument {arg!r}")
    if isinstance(arg, (int, float)):
        arg = repr(arg)
    if not isinstance(arg, str):
        raise InvalidArgument(f"Cannot encode argument of type {type(arg).__name__}")
    try:
        return arg.encode("utf-8")
    except UnicodeEncodeError as e:
        raise InvalidArgument(f"Argument {arg!r} is not valid UTF-8 text: {e.reason}") from e


def encode_command(args: Sequence[Argument]) -> bytes:
    """Encode command arguments as a RESP array of bulk strings.

    An empty sequence produces b"" (nothing to send), never a ``*0`` frame.
    """
    if not args:
        return b""
    parts = [b"*%d\r\n" % len(args)]
    for arg in args:
        data = _to_bytes(arg)
        parts.append(b"$%d\r\n" % len(data))
        parts.append(data)
        parts.append(CRLF)
    return b"".join(parts)


def command_segments(args: Sequence[Argument]) -> List[Segment]:
    """Wire lines of the request frame for ``args``, for display"""
    if not args:
        return []
    segments = [Segment(f"*{len(args)}")]
    for arg in args:
        data = _to_bytes(arg)
        segments.append(Segment(f"${len(data)}"))
        segments.append(Segment(data.decode("utf-8", errors="replace"), payload=True))
    return segments


def _line(prefix: str, text: str) -> bytes:
    if "\r" in text or "\n" in text:
        raise InvalidArgument(f"{prefix} line must not contain CR or LF: {text!r}")
    try:
        return prefix.encode() + text.encode("utf-8") + CRLF
    except UnicodeEncodeError as e:
        raise InvalidArgument(f"Text {text!r} is not valid UTF-8: {e.reason}") from e


def encode_value(value: RESPValue) -> bytes:
    """Serialize any RESP2 value, nulls included."""
    if isinstance(value, SimpleString):
        return _line("+", value.text)
    if isinstance(value, Error):
        return _line("-", value.text)
    if isinstance(value, Integer):
        if isinstance(value.value, bool) or not isinstance(value.value, int):
            raise InvalidArgument(f"Integer frame needs an int, got {value.value!r}")
        if not INT64_MIN <= value.value <= INT64_MAX:
            raise InvalidArgument(f"Integer {value.value} is outside the signed 64-bit range")
        return b":%d\r\n" % value.value
    if isinstance(value, BulkString):
        if value.data is None:
            return b"$-1\r\n"
        data = _to_bytes(value.data)
        return b"$%d\r\n" % len(data) + data + CRLF
    if isinstance(value, Array):
        if value.items is None:
            return b"*-1\r\n"
        return b"*%d\r\n" % len(value.items) + b"".join(encode_value(item) for item in value.items)
    raise InvalidArgument(f"Not a RESP value: {value!r}")
