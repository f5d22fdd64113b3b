import pytest

from resp_playground.decoder import DecoderLimits, DecoderState, RESPDecoder, decode_all
from resp_playground.encoder import encode_command
from resp_playground.errors import INCOMPLETE, IncompleteInput, ProtocolError, ResourceLimitExceeded
from resp_playground.formatter import Segment
from resp_playground.resp_types import Array, BulkString, Error, Integer, SimpleString


def test_simple_types():
    assert decode_all(b"+OK\r\n") == [SimpleString("OK")]
    assert decode_all(b"-ERR unknown command\r\n") == [Error("ERR unknown command")]
    assert decode_all(b":1000\r\n") == [Integer(1000)]
    assert decode_all(b":-7\r\n") == [Integer(-7)]
    assert decode_all(b"$5\r\nHello\r\n") == [BulkString(b"Hello")]


def test_resume_after_partial_bulk_string():
    decoder = RESPDecoder()
    result = decoder.decode(b"$5\r\nHel")
    assert result is INCOMPLETE
    assert isinstance(result, IncompleteInput)
    assert decoder.state is DecoderState.EXPECT_BULK_BYTES
    assert decoder.decode(b"lo\r\n") == BulkString(b"Hello")
    assert decoder.state is DecoderState.DONE


def test_nulls_differ_from_empties():
    assert decode_all(b"*-1\r\n") == [Array(None)]
    assert decode_all(b"$-1\r\n") == [BulkString(None)]
    assert decode_all(b"*0\r\n") == [Array([])]
    assert decode_all(b"$0\r\n\r\n") == [BulkString(b"")]
    assert Array(None) != Array([])
    assert BulkString(None) != BulkString(b"")


def test_huge_bulk_length_is_rejected_before_reading():
    decoder = RESPDecoder()
    with pytest.raises(ResourceLimitExceeded) as excinfo:
        decoder.decode(b"$999999999999\r\n")
    assert excinfo.value.declared == 999999999999
    assert decoder.state is DecoderState.ERROR


def test_nested_arrays():
    data = b"*2\r\n*2\r\n:1\r\n:2\r\n*1\r\n+x\r\n"
    assert decode_all(data) == [Array([Array([Integer(1), Integer(2)]), Array([SimpleString("x")])])]


def test_byte_at_a_time_feed():
    data = b"*3\r\n$3\r\nSET\r\n$5\r\nmykey\r\n$5\r\nHello\r\n"
    decoder = RESPDecoder()
    for i in range(len(data) - 1):
        assert decoder.decode(data[i:i + 1]) is INCOMPLETE
    assert decoder.decode(data[-1:]) == Array([BulkString(b"SET"), BulkString(b"mykey"), BulkString(b"Hello")])


def test_array_state_is_kept_between_chunks():
    decoder = RESPDecoder()
    assert decoder.decode(b"*2\r\n:1\r\n") is INCOMPLETE
    assert decoder.state is DecoderState.EXPECT_ARRAY_ELEMENTS
    assert decoder.depth == 1
    assert decoder.pending_elements == 1
    assert decoder.decode(b":2\r\n") == Array([Integer(1), Integer(2)])
    assert decoder.depth == 0


def test_several_frames_in_one_chunk():
    decoder = RESPDecoder()
    decoder.feed(b"+OK\r\n:1\r\n$-1\r\n+PAR")
    assert list(decoder.values()) == [SimpleString("OK"), Integer(1), BulkString(None)]
    assert decoder.decode(b"TIAL\r\n") == SimpleString("PARTIAL")


def test_bulk_payload_is_binary_safe():
    assert decode_all(b"$4\r\na\r\nb\r\n") == [BulkString(b"a\r\nb")]
    assert decode_all(b"$2\r\n\x00\xff\r\n") == [BulkString(b"\x00\xff")]


def test_segments_are_recorded_on_request():
    decoder = RESPDecoder(record_segments=True)
    decoder.decode(b"*2\r\n$3\r\n+OK\r\n:5\r\n")
    assert decoder.segments == [
        Segment("*2"),
        Segment("$3"),
        Segment("+OK", payload=True),
        Segment(":5"),
    ]


@pytest.mark.parametrize("data", [
    b"?what\r\n",
    b"$abc\r\n",
    b"$-2\r\n",
    b"*-5\r\n",
    b":12a\r\n",
    b":\r\n",
    b"+OK\n",
    b"+O\rK\r\n",
    b"$3\r\nfooXX",
])
def test_malformed_frames(data):
    with pytest.raises(ProtocolError) as excinfo:
        decode_all(data)
    assert type(excinfo.value) is ProtocolError


def test_integer_outside_64_bits():
    with pytest.raises(ProtocolError):
        decode_all(b":9223372036854775808\r\n")
    assert decode_all(b":-9223372036854775808\r\n") == [Integer(-(2 ** 63))]


def test_decoder_is_unusable_after_error():
    decoder = RESPDecoder()
    with pytest.raises(ProtocolError):
        decoder.decode(b"!\r\n")
    with pytest.raises(ProtocolError):
        decoder.decode(b"+OK\r\n")


def test_array_length_limit():
    decoder = RESPDecoder(DecoderLimits(max_array_length=2))
    with pytest.raises(ResourceLimitExceeded):
        decoder.decode(b"*3\r\n")


def test_nesting_depth_limit():
    decoder = RESPDecoder(DecoderLimits(max_nesting_depth=2))
    with pytest.raises(ResourceLimitExceeded):
        decoder.decode(b"*1\r\n*1\r\n*1\r\n:1\r\n")


def test_unterminated_line_limit():
    decoder = RESPDecoder(DecoderLimits(max_line_length=8))
    with pytest.raises(ResourceLimitExceeded):
        decoder.decode(b"+" + b"a" * 20)


def test_truncated_input_fails_decode_all():
    with pytest.raises(ProtocolError):
        decode_all(b"*2\r\n$3\r\nfoo\r\n")


@pytest.mark.parametrize("tokens", [
    ["PING"],
    ["SET", "mykey", "Hello"],
    ["GET", "mykey"],
    ["ZADD", "leaderboard", "100", "player1"],
    ["*", "$", "+OK", "-ERR", ":1", "a~b!c"],
])
def test_round_trip(tokens):
    decoded = decode_all(encode_command(tokens))
    assert decoded == [Array([BulkString(token.encode()) for token in tokens])]


def test_oversized_integer_field_is_a_protocol_error():
    decoder = RESPDecoder()
    with pytest.raises(ProtocolError) as excinfo:
        decoder.decode(b":" + b"9" * 5000 + b"\r\n")
    assert type(excinfo.value) is ProtocolError
    assert decoder.state is DecoderState.ERROR


@pytest.mark.parametrize("prefix", [b"$", b"*"])
def test_oversized_length_field_exceeds_limit(prefix):
    decoder = RESPDecoder()
    with pytest.raises(ResourceLimitExceeded) as excinfo:
        decoder.decode(prefix + b"1" * 5000 + b"\r\n")
    assert "5000 digits" in str(excinfo.value)
    assert decoder.state is DecoderState.ERROR


def test_oversized_negative_length_is_a_protocol_error():
    with pytest.raises(ProtocolError) as excinfo:
        decode_all(b"$-" + b"1" * 30 + b"\r\n")
    assert type(excinfo.value) is ProtocolError


def test_segments_are_not_kept_by_default():
    decoder = RESPDecoder()
    for _ in range(1000):
        assert decoder.decode(b"$5\r\nHello\r\n") == BulkString(b"Hello")
    assert decoder.segments == []
    assert decoder.buffered == 0
