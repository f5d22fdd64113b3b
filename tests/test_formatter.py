from resp_playground.errors import INCOMPLETE, InvalidArgument, ProtocolError, ResourceLimitExceeded
from resp_playground.formatter import (
    FAILURE_CLASS, LEGEND, DisplayLine, Segment, describe_value, error_line, escape_wire,
    format_segments, render_html, render_text, unescape_wire, wire_segments,
)
from resp_playground.resp_types import Array, BulkString, Error, Integer, SimpleString


def test_labels_follow_leading_character():
    lines = format_segments(["*3", "$3", "SET", "+OK", "-ERR", ":1", ""])
    assert lines == [
        DisplayLine("*3", "Array length", "resp-array"),
        DisplayLine("$3", "String length", "resp-bulk"),
        DisplayLine("SET", "Data", "resp-data"),
        DisplayLine("+OK", "Simple string", "resp-simple"),
        DisplayLine("-ERR", "Error", "resp-error"),
        DisplayLine(":1", "Integer", "resp-integer"),
    ]


def test_blank_segments_are_suppressed():
    assert format_segments(["", Segment(""), Segment("", payload=True)]) == []


def test_payload_segments_are_always_data():
    assert format_segments([Segment("*x", payload=True)]) == [DisplayLine("*x", "Data", "resp-data")]


def test_format_does_not_mutate_input():
    segments = ["*1", "$4", "PING", ""]
    format_segments(segments)
    assert segments == ["*1", "$4", "PING", ""]


def test_wire_segments_honor_bulk_lengths():
    assert wire_segments(b"*1\r\n$4\r\na\r\nb\r\n") == [
        Segment("*1"),
        Segment("$4"),
        Segment("a\r\nb", payload=True),
    ]


def test_wire_segments_fall_back_on_broken_input():
    assert wire_segments(b"$9\r\nshort\r\ntail") == [Segment("$9"), Segment("short"), Segment("tail")]


def test_error_lines_are_distinct():
    assert error_line(ProtocolError("Unknown type prefix b'?'")) == DisplayLine(
        "Unknown type prefix b'?'", "Protocol error", FAILURE_CLASS)
    assert error_line(ResourceLimitExceeded("Bulk string length", 10, 5)).label == "Resource limit exceeded"
    assert error_line(InvalidArgument("bad")).label == "Invalid argument"
    assert error_line(INCOMPLETE) == DisplayLine("waiting for more input", "Incomplete input", FAILURE_CLASS)


def test_escape_wire():
    assert escape_wire(b"*1\r\n$4\r\nPING\r\n") == "*1\\r\\n$4\\r\\nPING\\r\\n"
    assert unescape_wire("+OK\\r\\n") == b"+OK\r\n"


def test_render_text():
    text = render_text([DisplayLine("*1", "Array length", "resp-array"), error_line(ProtocolError("boom"))])
    first, second = text.splitlines()
    assert first.startswith("*1\\r\\n")
    assert first.endswith("Array length")
    assert second == "(error) Protocol error: boom"


def test_render_html_escapes_payload():
    html = render_html([DisplayLine("<b>", "Data", "resp-data")])
    assert "&lt;b&gt;" in html
    assert 'class="resp-data"' in html


def test_describe_value():
    assert describe_value(SimpleString("OK")) == "OK"
    assert describe_value(Error("ERR x")) == "(error) ERR x"
    assert describe_value(Integer(5)) == "(integer) 5"
    assert describe_value(BulkString(None)) == "(nil)"
    assert describe_value(Array([])) == "(empty array)"
    nested = Array([BulkString(b"a"), Array([Integer(1), Integer(2)])])
    assert describe_value(nested) == '1) "a"\n2) 1) (integer) 1\n   2) (integer) 2'


def test_legend_covers_every_prefix():
    assert [prefix for prefix, _, _ in LEGEND] == ["*", "$", "+", ":", "-"]


def test_rendered_rows_escape_line_breaks():
    lines = [DisplayLine("$4", "String length", "resp-bulk"), DisplayLine("a\r\nb", "Data", "resp-data")]
    text = render_text(lines)
    rows = text.split("\n")
    assert len(rows) == 2
    assert "\r" not in text
    assert rows[1].startswith("a\\r\\nb\\r\\n")
    html = render_html(lines)
    assert "\r" not in html
    assert "a\\r\\nb" in html


def test_wire_segments_skip_huge_lengths():
    data = b"$" + b"1" * 5000 + b"\r\nrest"
    assert wire_segments(data) == [Segment("$" + "1" * 5000), Segment("rest")]


def test_describe_value_escapes_payload():
    assert describe_value(BulkString(b"a\r\nb")) == '"a\\r\\nb"'
