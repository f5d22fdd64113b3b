"""
Turns RESP wire lines into labeled display lines.

Nothing here does I/O or knows about the UI; the same DisplayLine list is
rendered as plain text by the CLI and as HTML by the Gradio app.
"""

import html
from typing import Iterable, List, NamedTuple, Union

from .resp_types import Array, BulkString, Error, Integer, RESPValue, SimpleString, TYPE_NAMES


class Segment(NamedTuple):
    """One CRLF-delimited wire line. Bulk payloads are flagged so they are
    never mistaken for a frame header."""
    text: str
    payload: bool = False


class DisplayLine(NamedTuple):
    raw: str
    label: str
    display_class: str


DATA = ("Data", "resp-data")
FAILURE_CLASS = "resp-failure"

_LABELS = {
    "*": ("Array length", "resp-array"),
    "$": ("String length", "resp-bulk"),
    "+": ("Simple string", "resp-simple"),
    "-": ("Error", "resp-error"),
    ":": ("Integer", "resp-integer"),
}

LEGEND = [(prefix, TYPE_NAMES[prefix], _LABELS[prefix][1]) for prefix in "*$+:-"]


def classify(segment: Union[Segment, str]):
    """Return the (label, display_class) pair for a segment."""
    if isinstance(segment, Segment):
        if segment.payload:
            return DATA
        segment = segment.text
    return _LABELS.get(segment[:1], DATA)


def format_segments(segments: Iterable[Union[Segment, str]]) -> List[DisplayLine]:
    """Label each wire segment; blank segments are dropped."""
    lines = []
    for segment in segments:
        text = segment.text if isinstance(segment, Segment) else segment
        if text == "":
            continue
        label, display_class = classify(segment)
        lines.append(DisplayLine(text, label, display_class))
    return lines


def error_line(error) -> DisplayLine:
    """A distinct line describing an encode or decode failure"""
    label = getattr(error, "label", type(error).__name__)
    raw = str(error)
    if not raw or raw == repr(error):
        raw = "waiting for more input" if label == "Incomplete input" else label
    return DisplayLine(raw, label, FAILURE_CLASS)


def _text(data: bytes) -> str:
    return data.decode("utf-8", errors="replace")


def wire_segments(data: bytes) -> List[Segment]:
    """Split raw wire bytes into segments.

    Declared bulk lengths are honored, so a payload that itself contains
    CRLF stays a single segment. Anything that does not parse as a bulk
    frame falls back to plain CRLF splitting.
    """
    segments = []
    pos = 0
    end = len(data)
    while pos < end:
        idx = data.find(b"\r\n", pos)
        if idx == -1:
            segments.append(Segment(_text(data[pos:])))
            break
        line = data[pos:idx]
        segments.append(Segment(_text(line)))
        pos = idx + 2
        if line[:1] == b"$" and line[1:].isdigit() and len(line) <= 20:
            length = int(line[1:])
            if data[pos + length:pos + length + 2] == b"\r\n":
                segments.append(Segment(_text(data[pos:pos + length]), payload=True))
                pos += length + 2
    return segments


def escape_wire(data: Union[bytes, str]) -> str:
    """Render CR and LF as the two-character escapes \\r and \\n."""
    if isinstance(data, bytes):
        data = _text(data)
    return data.replace("\r", "\\r").replace("\n", "\\n")


def unescape_wire(text: str) -> bytes:
    """Inverse of escape_wire for text pasted by a user"""
    return (text.replace("\\r", "\r")
                .replace("\\n", "\n")
                .encode("utf-8"))


def render_text(lines: Iterable[DisplayLine]) -> str:
    """Plain-text rendering, one display line per row."""
    rows = []
    for line in lines:
        if line.display_class == FAILURE_CLASS:
            rows.append(f"(error) {line.label}: {escape_wire(line.raw)}")
        else:
            rows.append(f"{escape_wire(line.raw)}\\r\\n".ljust(24) + f"  {line.label}")
    return "\n".join(rows)


def render_html(lines: Iterable[DisplayLine]) -> str:
    rows = []
    for line in lines:
        crlf = "" if line.display_class == FAILURE_CLASS else '<span class="resp-crlf">\\r\\n</span>'
        rows.append(
            '<div class="resp-line">'
            f'<span class="{line.display_class}">{html.escape(escape_wire(line.raw))}</span>'
            f'{crlf}'
            f'<span class="resp-label">{html.escape(line.label)}</span>'
            '</div>'
        )
    return "\n".join(rows)


def describe_value(value: RESPValue, indent: int = 0) -> str:
    """redis-cli style rendering of a decoded value"""
    if isinstance(value, SimpleString):
        return value.text
    if isinstance(value, Error):
        return f"(error) {value.text}"
    if isinstance(value, Integer):
        return f"(integer) {value.value}"
    if isinstance(value, BulkString):
        if value.data is None:
            return "(nil)"
        return f'"{escape_wire(value.text())}"'
    if isinstance(value, Array):
        if value.items is None:
            return "(nil)"
        if not value.items:
            return "(empty array)"
        pad = " " * indent
        rows = []
        for i, item in enumerate(value.items, 1):
            prefix = f"{i}) "
            rows.append(f"{pad if i > 1 else ''}{prefix}{describe_value(item, indent + len(prefix))}")
        return "\n".join(rows)
    raise TypeError(f"Not a RESP value: {value!r}")
