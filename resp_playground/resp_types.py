"""RESP2 value types produced by the decoder and accepted by the encoder."""

from dataclasses import dataclass
from typing import ClassVar, List, Optional, Union


@dataclass(frozen=True)
class SimpleString:
    """Status reply, e.g. +OK"""
    text: str
    prefix: ClassVar[str] = "+"


@dataclass(frozen=True)
class Error:
    """Error reply, e.g. -ERR unknown command"""
    text: str
    prefix: ClassVar[str] = "-"


@dataclass(frozen=True)
class Integer:
    value: int
    prefix: ClassVar[str] = ":"


@dataclass(frozen=True)
class BulkString:
    """Binary safe string. None is the null bulk string ($-1)."""
    data: Optional[bytes]
    prefix: ClassVar[str] = "$"

    @property
    def is_null(self) -> bool:
        return self.data is None

    def text(self, errors: str = "replace") -> Optional[str]:
        if self.data is None:
            return None
        return self.data.decode("utf-8", errors=errors)


@dataclass(frozen=True)
class Array:
    """Ordered frames. None is the null array (*-1)."""
    items: Optional[List["RESPValue"]]
    prefix: ClassVar[str] = "*"

    @property
    def is_null(self) -> bool:
        return self.items is None


RESPValue = Union[SimpleString, Error, Integer, BulkString, Array]

# Signed 64-bit range for RESP integers
INT64_MIN = -(2 ** 63)
INT64_MAX = 2 ** 63 - 1

TYPE_NAMES = {
    "*": "Array",
    "$": "Bulk String",
    "+": "Simple String",
    ":": "Integer",
    "-": "Error",
}
