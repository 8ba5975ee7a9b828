"""Text encoding conversion for tag fields.

Every decoder here returns UTF-8 and never raises: malformed UTF-16 turns
into replacement characters, and ISO-8859-1 can represent any byte.
"""

import struct
from enum import IntEnum

from ..constants import (
    ENCODING,
    ENCODING_ISO8859_1,
    ENCODING_UTF16,
    ENCODING_UTF16_BOM,
    ENCODING_UTF8,
)

REPLACEMENT_CHAR = 0xFFFD

_SURROGATE_HIGH_START = 0xD800
_SURROGATE_HIGH_END = 0xDBFF
_SURROGATE_LOW_START = 0xDC00
_SURROGATE_LOW_END = 0xDFFF
_HALF_BASE = 0x10000
_HALF_SHIFT = 10

_BOM_BIG_ENDIAN = b"\xfe\xff"
_BOM_LITTLE_ENDIAN = b"\xff\xfe"


class TextEncoding(IntEnum):
    """ID3v2 text encoding selectors."""

    ISO8859_1 = ENCODING_ISO8859_1
    UTF16_BOM = ENCODING_UTF16_BOM
    UTF16 = ENCODING_UTF16
    UTF8 = ENCODING_UTF8


def truncate_at_nul(data: bytes) -> bytes:
    """Return data up to (not including) the first NUL byte."""
    return data.partition(b"\x00")[0]


def iso8859_to_utf8(data: bytes) -> bytes:
    """Convert ISO-8859-1 bytes to UTF-8.

    Bytes below 0x80 pass through; the rest become the two byte sequence
    0xC2/0xC3 followed by (byte & 0x3F) | 0x80.
    """
    return data.decode("latin-1").encode(ENCODING)


def utf16_to_utf8(data: bytes, has_bom: bool = False) -> bytes:
    """Convert UTF-16 bytes to UTF-8.

    Args:
        data: Raw UTF-16 bytes. A trailing odd byte is ignored.
        has_bom: If True, a leading byte-order mark selects the byte order
            and is skipped. Without one the data is read big-endian.

    Returns:
        UTF-8 bytes. Output stops early when the input ends in the middle
        of a surrogate pair.
    """
    byteorder = ">"
    if has_bom:
        if data[:2] == _BOM_LITTLE_ENDIAN:
            byteorder = "<"
            data = data[2:]
        elif data[:2] == _BOM_BIG_ENDIAN:
            data = data[2:]

    count = len(data) // 2
    units = struct.unpack(f"{byteorder}{count}H", data[: count * 2])

    chars = []
    i = 0
    while i < count:
        ch = units[i]
        i += 1
        if _SURROGATE_HIGH_START <= ch <= _SURROGATE_HIGH_END:
            if i >= count:
                # Source exhausted: drop the dangling half of the pair
                break
            low = units[i]
            if _SURROGATE_LOW_START <= low <= _SURROGATE_LOW_END:
                ch = (
                    ((ch - _SURROGATE_HIGH_START) << _HALF_SHIFT)
                    + (low - _SURROGATE_LOW_START)
                    + _HALF_BASE
                )
                i += 1
            else:
                ch = REPLACEMENT_CHAR
        elif _SURROGATE_LOW_START <= ch <= _SURROGATE_LOW_END:
            ch = REPLACEMENT_CHAR
        chars.append(chr(ch))

    return "".join(chars).encode(ENCODING)


def to_utf8(encoding: int, data: bytes) -> bytes:
    """Convert a tag field to UTF-8 bytes, stopping at the first NUL.

    Unknown encodings are treated as ISO-8859-1.
    """
    if encoding == TextEncoding.UTF8:
        converted = data
    elif encoding == TextEncoding.UTF16_BOM:
        converted = utf16_to_utf8(data, has_bom=True)
    elif encoding == TextEncoding.UTF16:
        converted = utf16_to_utf8(data, has_bom=False)
    else:
        converted = iso8859_to_utf8(data)
    return truncate_at_nul(converted)


def decode(encoding: int, data: bytes) -> str:
    """Decode a tag field to text."""
    return to_utf8(encoding, data).decode(ENCODING, errors="replace")
