"""Bounds-checked reads over an in-memory byte buffer."""

import struct
from typing import Optional

from ..errors import TagTruncatedError


class ByteCursor:
    """Sequential reader over a byte buffer.

    Every read checks the remaining length first and raises
    TagTruncatedError instead of running past the end.
    """

    def __init__(self, data: bytes, path: Optional[str] = None, format: Optional[str] = None):
        self.data = bytes(data)
        self.pos = 0
        self.path = path
        self.format = format

    def __len__(self):
        return len(self.data)

    @property
    def remaining(self) -> int:
        return len(self.data) - self.pos

    def at_end(self) -> bool:
        return self.pos >= len(self.data)

    def truncated(self, what: str) -> TagTruncatedError:
        return TagTruncatedError(
            f"{what} at offset {self.pos} runs past the end of the data "
            f"({self.remaining} bytes left)",
            self.path,
            self.format,
        )

    def read(self, n: int, what: str = "field") -> bytes:
        if n < 0 or n > self.remaining:
            raise self.truncated(f"{what} of {n} bytes")
        chunk = self.data[self.pos : self.pos + n]
        self.pos += n
        return chunk

    def skip(self, n: int, what: str = "field") -> None:
        if n < 0 or n > self.remaining:
            raise self.truncated(f"{what} of {n} bytes")
        self.pos += n

    def rest(self) -> bytes:
        return self.read(self.remaining)

    def sub(self, n: int, what: str = "block") -> "ByteCursor":
        """Consume n bytes and return a cursor over just those bytes."""
        return ByteCursor(self.read(n, what), self.path, self.format)

    def u8(self) -> int:
        return self.read(1, "byte")[0]

    def u32_be(self) -> int:
        return struct.unpack(">I", self.read(4, "32-bit integer"))[0]

    def u32_le(self) -> int:
        return struct.unpack("<I", self.read(4, "32-bit integer"))[0]

    def u64_be(self) -> int:
        return struct.unpack(">Q", self.read(8, "64-bit integer"))[0]

    def cstring(self) -> bytes:
        """Read a NUL-terminated string and step past the terminator.

        A string missing its terminator runs to the end of the buffer.
        """
        end = self.data.find(b"\x00", self.pos)
        if end < 0:
            end = len(self.data)
        value = self.data[self.pos : end]
        self.pos = min(end + 1, len(self.data))
        return value


def decode_syncsafe(data: bytes) -> int:
    """Decode a big-endian integer that uses only the low 7 bits of each byte."""
    value = 0
    for byte in data:
        value = (value << 7) | (byte & 0x7F)
    return value
