"""
Error taxonomy for the RESP codec.

Encoder and tokenizer failures are raised immediately. The decoder raises
only terminal errors; running out of input is signalled by returning
INCOMPLETE.
"""

from typing import Optional


class RESPError(Exception):
    """Base class for every codec failure."""

    label = "Error"


class InvalidArgument(RESPError):
    """An argument or value cannot be represented on the wire."""

    label = "Invalid argument"


class ProtocolError(RESPError):
    """The byte stream is not a well-formed RESP frame."""

    label = "Protocol error"


class ResourceLimitExceeded(ProtocolError):
    """A declared length, count or depth is above the configured ceiling."""

    label = "Resource limit exceeded"

    def __init__(self, what: str, declared: Optional[int], limit: int, digits: int = 0):
        if digits:
            super().__init__(f"{what} of {digits} digits exceeds limit {limit}")
        else:
            super().__init__(f"{what} {declared} exceeds limit {limit}")
        self.what = what
        self.declared = declared
        self.limit = limit


class IncompleteInput:
    """Returned by the decoder when more bytes are needed."""

    label = "Incomplete input"

    def __repr__(self):
        return "INCOMPLETE"

    def __bool__(self):
        return False


INCOMPLETE = IncompleteInput()
