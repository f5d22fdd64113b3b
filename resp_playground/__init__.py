"""
RESP Playground - an interactive RESP encoder, decoder and visualizer.
"""

__version__ = "0.1.0"

from .decoder import DecoderLimits, DecoderState, RESPDecoder, decode_all
from .encoder import command_segments, encode_command, encode_value
from .errors import (
    INCOMPLETE, IncompleteInput, InvalidArgument, ProtocolError,
    RESPError, ResourceLimitExceeded,
)
from .formatter import DisplayLine, Segment, format_segments
from .resp_types import Array, BulkString, Error, Integer, RESPValue, SimpleString
from .tokenizer import tokenize

__all__ = [
    "Array", "BulkString", "Error", "Integer", "RESPValue", "SimpleString",
    "tokenize", "encode_command", "encode_value", "command_segments",
    "RESPDecoder", "DecoderLimits", "DecoderState", "decode_all",
    "format_segments", "Segment", "DisplayLine",
    "RESPError", "InvalidArgument", "ProtocolError", "ResourceLimitExceeded",
    "IncompleteInput", "INCOMPLETE", "__version__",
]
