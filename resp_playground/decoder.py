"""
Resumable RESP2 decoder.

The decoder is a small state machine over an internal buffer. Bytes can
arrive in chunks of any size: when a frame cannot be completed yet,
``get_value`` returns INCOMPLETE and keeps its position, so the next call
continues from the same place instead of re-parsing the stream.

Nested arrays are tracked on an explicit stack rather than by recursion.
All declared sizes are checked against DecoderLimits before anything is
read or allocated.
"""

import logging
import re
from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Optional, Union

from .errors import INCOMPLETE, IncompleteInput, ProtocolError, ResourceLimitExceeded
from .formatter import Segment
from .resp_types import (
    Array, BulkString, Error, Integer, RESPValue, SimpleString,
    INT64_MAX, INT64_MIN,
)

logger = logging.getLogger("resp_playground")

CR = 0x0D
LF = 0x0A
_PREFIXES = b"+-:$*"
_DECIMAL = re.compile(rb"-?[0-9]+")
# Digits in INT64_MAX; longer fields are rejected before int() sees them
_MAX_DIGITS = 19


@dataclass
class DecoderLimits:
    """Ceilings applied to declared sizes before allocating"""
    max_bulk_length: int = 512 * 1024 * 1024
    max_array_length: int = 1024 * 1024
    max_nesting_depth: int = 128
    max_line_length: int = 64 * 1024


class DecoderState(Enum):
    EXPECT_TYPE = "expect_type"
    EXPECT_LINE = "expect_line"
    EXPECT_BULK_BYTES = "expect_bulk_bytes"
    EXPECT_ARRAY_ELEMENTS = "expect_array_elements"
    DONE = "done"
    ERROR = "error"


class _PendingArray:
    __slots__ = ("remaining", "items")

    def __init__(self, count: int):
        self.remaining = count
        self.items: List[RESPValue] = []


# Marks "frame consumed but the top-level value is not finished yet"
_PENDING = object()


class RESPDecoder:
    """Incremental decoder yielding one RESP value per top-level frame.

    Usage::

        decoder = RESPDecoder()
        decoder.decode(b"$5\\r\\nHel")   # -> INCOMPLETE
        decoder.decode(b"lo\\r\\n")      # -> BulkString(b"Hello")

    After a ProtocolError (or ResourceLimitExceeded) the decoder is in the
    ERROR state and refuses further input; discard it.

    With record_segments=True every consumed wire line is kept in
    ``segments`` for display. It is off by default so a long-lived
    decoder holds no more than its unfinished frame.
    """

    def __init__(self, limits: Optional[DecoderLimits] = None, record_segments: bool = False):
        self.limits = limits or DecoderLimits()
        self.record_segments = record_segments
        self.segments: List[Segment] = []
        self._buffer = bytearray()
        self._state = DecoderState.EXPECT_TYPE
        self._prefix = b""
        self._bulk_length = 0
        self._stack: List[_PendingArray] = []

    @property
    def state(self) -> DecoderState:
        return self._state

    @property
    def buffered(self) -> int:
        """Number of received bytes not yet consumed"""
        return len(self._buffer)

    @property
    def unconsumed(self) -> bytes:
        return bytes(self._buffer)

    @property
    def depth(self) -> int:
        return len(self._stack)

    @property
    def pending_elements(self) -> int:
        """Elements still expected by the innermost open array"""
        return self._stack[-1].remaining if self._stack else 0

    @property
    def at_frame_boundary(self) -> bool:
        return self._state in (DecoderState.EXPECT_TYPE, DecoderState.DONE) and not self._stack

    def feed(self, data: bytes):
        """Append received bytes to the buffer."""
        self._check_usable()
        self._buffer.extend(data)

    def decode(self, data: bytes = b"") -> Union[RESPValue, IncompleteInput]:
        """Feed ``data`` and try to complete the next top-level frame."""
        self.feed(data)
        return self.get_value()

    def values(self) -> Iterator[RESPValue]:
        """Yield every complete top-level frame currently buffered."""
        while True:
            value = self.get_value()
            if value is INCOMPLETE:
                return
            yield value

    def get_value(self) -> Union[RESPValue, IncompleteInput]:
        """Advance the state machine as far as the buffer allows.

        Returns the next complete top-level value, or INCOMPLETE when more
        bytes are needed.
        """
        self._check_usable()
        if self._state is DecoderState.DONE:
            self._state = DecoderState.EXPECT_TYPE
        try:
            return self._run()
        except ProtocolError as e:
            self._state = DecoderState.ERROR
            logger.debug(f"Decoder failed: {e}")
            raise

    def _check_usable(self):
        if self._state is DecoderState.ERROR:
            raise ProtocolError("decoder is in error state and cannot be reused")

    def _run(self) -> Union[RESPValue, IncompleteInput]:
        while True:
            state = self._state
            if state in (DecoderState.EXPECT_TYPE, DecoderState.EXPECT_ARRAY_ELEMENTS):
                if not self._buffer:
                    return INCOMPLETE
                prefix = bytes(self._buffer[:1])
                if prefix not in _PREFIXES:
                    raise ProtocolError(f"Unknown type prefix {prefix!r}")
                del self._buffer[:1]
                self._prefix = prefix
                self._state = DecoderState.EXPECT_LINE
                continue

            if state is DecoderState.EXPECT_LINE:
                line = self._read_line()
                if line is None:
                    return INCOMPLETE
                self._record(Segment((self._prefix + line).decode("utf-8", errors="replace")))
                value = self._dispatch_line(line)
            else:
                value = self._read_bulk_payload()
                if value is None:
                    return INCOMPLETE

            if value is _PENDING:
                continue
            value = self._complete(value)
            if value is not _PENDING:
                self._state = DecoderState.DONE
                return value

    def _read_line(self) -> Optional[bytes]:
        buf = self._buffer
        cr = buf.find(b"\r")
        if cr != -1 and cr + 1 < len(buf) and buf[cr + 1] != LF:
            raise ProtocolError("Expected CRLF line terminator, found bare CR")
        lf = buf.find(b"\n")
        if lf == -1:
            if len(buf) > self.limits.max_line_length:
                raise ResourceLimitExceeded("Line length", len(buf), self.limits.max_line_length)
            return None
        if lf == 0 or buf[lf - 1] != CR:
            raise ProtocolError("Expected CRLF line terminator, found bare LF")
        if lf - 1 > self.limits.max_line_length:
            raise ResourceLimitExceeded("Line length", lf - 1, self.limits.max_line_length)
        line = bytes(buf[:lf - 1])
        del buf[:lf + 1]
        return line

    def _record(self, segment: Segment):
        if self.record_segments:
            self.segments.append(segment)

    def _parse_int(self, line: bytes, what: str, limit: Optional[int] = None) -> int:
        if not _DECIMAL.fullmatch(line):
            raise ProtocolError(f"Invalid {what} {line[:32]!r}")
        negative = line.startswith(b"-")
        digits = len(line) - negative
        if digits > _MAX_DIGITS:
            if limit is not None and not negative:
                raise ResourceLimitExceeded(what.capitalize(), None, limit, digits=digits)
            raise ProtocolError(f"Invalid {what}: {digits} digits")
        return int(line)

    def _dispatch_line(self, line: bytes):
        prefix = self._prefix
        if prefix == b"+":
            return SimpleString(line.decode("utf-8", errors="replace"))
        if prefix == b"-":
            return Error(line.decode("utf-8", errors="replace"))
        if prefix == b":":
            number = self._parse_int(line, "integer")
            if not INT64_MIN <= number <= INT64_MAX:
                raise ProtocolError(f"Integer {number} is outside the signed 64-bit range")
            return Integer(number)
        if prefix == b"$":
            length = self._parse_int(line, "bulk string length", self.limits.max_bulk_length)
            if length == -1:
                return BulkString(None)
            if length < 0:
                raise ProtocolError(f"Invalid bulk string length {length}")
            if length > self.limits.max_bulk_length:
                raise ResourceLimitExceeded("Bulk string length", length, self.limits.max_bulk_length)
            self._bulk_length = length
            self._state = DecoderState.EXPECT_BULK_BYTES
            return _PENDING

        count = self._parse_int(line, "array length", self.limits.max_array_length)
        if count == -1:
            return Array(None)
        if count < 0:
            raise ProtocolError(f"Invalid array length {count}")
        if count > self.limits.max_array_length:
            raise ResourceLimitExceeded("Array length", count, self.limits.max_array_length)
        if count == 0:
            return Array([])
        if len(self._stack) >= self.limits.max_nesting_depth:
            raise ResourceLimitExceeded("Array nesting depth", len(self._stack) + 1,
                                        self.limits.max_nesting_depth)
        self._stack.append(_PendingArray(count))
        self._state = DecoderState.EXPECT_ARRAY_ELEMENTS
        return _PENDING

    def _read_bulk_payload(self) -> Optional[BulkString]:
        length = self._bulk_length
        if len(self._buffer) < length + 2:
            return None
        if self._buffer[length:length + 2] != b"\r\n":
            raise ProtocolError(f"Bulk string payload is not followed by CRLF after {length} bytes")
        data = bytes(self._buffer[:length])
        del self._buffer[:length + 2]
        self._record(Segment(data.decode("utf-8", errors="replace"), payload=True))
        return BulkString(data)

    def _complete(self, value):
        """Attach a finished value to open arrays, closing those that fill up."""
        while self._stack:
            top = self._stack[-1]
            top.items.append(value)
            top.remaining -= 1
            if top.remaining:
                self._state = DecoderState.EXPECT_ARRAY_ELEMENTS
                return _PENDING
            self._stack.pop()
            value = Array(top.items)
        return value


def decode_all(data: bytes, limits: Optional[DecoderLimits] = None) -> List[RESPValue]:
    """Decode a complete buffer into its top-level values.

    Raises ProtocolError if the buffer ends in the middle of a frame.
    """
    decoder = RESPDecoder(limits)
    decoder.feed(data)
    values = list(decoder.values())
    if decoder.buffered or not decoder.at_frame_boundary:
        raise ProtocolError("Input ends in the middle of a frame")
    return values
