import logging
from dataclasses import dataclass, field
from typing import List, Optional

from .decoder import DecoderLimits, RESPDecoder, decode_all
from .encoder import command_segments, encode_command
from .errors import INCOMPLETE, RESPError
from .formatter import (
    DisplayLine, describe_value, error_line, escape_wire, format_segments,
    render_html, render_text, unescape_wire, wire_segments,
)
from .resp_types import RESPValue
from .tokenizer import split_commands, tokenize

logger = logging.getLogger("resp_playground")


@dataclass
class RequestView:
    """A command and its RESP request encoding, ready to render"""
    command: str
    parts: List[str]
    wire: bytes = b""
    lines: List[DisplayLine] = field(default_factory=list)
    error: Optional[RESPError] = None

    @property
    def is_empty(self) -> bool:
        return not self.parts

    @property
    def display(self) -> str:
        return escape_wire(self.wire)

    @property
    def copy_text(self) -> str:
        """Wire text with real CR/LF bytes, for the clipboard"""
        return self.wire.decode("utf-8", errors="replace")

    @property
    def text(self) -> str:
        return render_text(self.lines)

    @property
    def html(self) -> str:
        return render_html(self.lines)


@dataclass
class ResponseView:
    """Frames decoded from a chunk of wire bytes"""
    values: List[RESPValue] = field(default_factory=list)
    lines: List[DisplayLine] = field(default_factory=list)
    error: Optional[RESPError] = None
    complete: bool = True

    @property
    def text(self) -> str:
        return render_text(self.lines)

    @property
    def html(self) -> str:
        return render_html(self.lines)

    @property
    def result(self) -> str:
        return "\n".join(describe_value(value) for value in self.values)


class RESPInterceptor:
    """Shows the RESP protocol messages behind a command"""

    def __init__(self, limits: Optional[DecoderLimits] = None):
        self.limits = limits or DecoderLimits()

    def encode_resp_array(self, items: List[str]) -> bytes:
        """Encode a list of strings as RESP array"""
        return encode_command(items)

    def format_request(self, command: str) -> RequestView:
        """Tokenize and encode one command line"""
        parts = tokenize(command)
        view = RequestView(command=command, parts=parts)
        if not parts:
            return view

        try:
            view.wire = self.encode_resp_array(parts)
            # The request must survive our own decoder unchanged
            decoded = decode_all(view.wire, self.limits)
            if len(decoded) != 1:
                raise RESPError(f"Request decoded into {len(decoded)} frames")
            view.lines = format_segments(command_segments(parts))
        except RESPError as e:
            logger.warning(f"Could not encode {command!r}: {e}")
            view.wire = b""
            view.error = e
            view.lines = [error_line(e)]
        return view

    def format_requests(self, text: str) -> List[RequestView]:
        """Encode every command in a multi-line input"""
        return [self.format_request(" ".join(parts)) for parts in split_commands(text)]

    def decode_resp_response(self, data: bytes) -> ResponseView:
        """Decode wire bytes into values and labeled lines"""
        view = ResponseView()
        if not data:
            return view

        decoder = RESPDecoder(self.limits, record_segments=True)
        try:
            decoder.feed(data)
            # Keep frames decoded before a failure
            for value in decoder.values():
                view.values.append(value)
        except RESPError as e:
            logger.warning(f"Could not decode response: {e}")
            view.error = e

        view.lines = format_segments(decoder.segments)
        if view.error is not None:
            # Show the bytes the decoder stopped at as plain lines
            view.lines.extend(format_segments(wire_segments(decoder.unconsumed)))
            view.lines.append(error_line(view.error))
        elif not decoder.at_frame_boundary or decoder.buffered:
            view.complete = False
            view.lines.append(error_line(INCOMPLETE))
        return view

    def decode_escaped(self, text: str) -> ResponseView:
        """Decode wire text typed with literal \\r\\n escapes"""
        return self.decode_resp_response(unescape_wire(text.strip(" \t")))
