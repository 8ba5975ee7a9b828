"""Vorbis comment block parser, shared by the FLAC and Ogg readers.

Block layout (all lengths little-endian)::

    vendor_length[4] vendor_string
    comment_count[4]
    comment_count x (length[4] "KEY=VALUE")
"""

from typing import Optional

from ...config import ReaderConfig
from ...constants import ENCODING
from ..collection import TagCollection
from ..encoding import truncate_at_nul
from .base import debug
from .cursor import ByteCursor

# Smallest possible comment: a zero length field
_MIN_COMMENT_SIZE = 4


def parse_vorbis_comments(
    data: bytes,
    tags: TagCollection,
    config: Optional[ReaderConfig] = None,
    path: Optional[str] = None,
    format: str = "vorbis",
) -> TagCollection:
    """Append every KEY=VALUE comment in data to tags.

    Comments without an '=' are dropped. Keys keep their case and values are
    copied verbatim, since Vorbis comments are UTF-8 already.

    Raises:
        TagTruncatedError: If any declared length runs past the data
    """
    config = config or ReaderConfig()
    cursor = ByteCursor(data, path, format)

    vendor_length = cursor.u32_le()
    vendor = cursor.read(vendor_length, "vendor string")
    tags.vendor = vendor.decode(ENCODING, errors="replace")
    debug(config, "Vorbis vendor string %r", tags.vendor)

    count = cursor.u32_le()
    if count * _MIN_COMMENT_SIZE > cursor.remaining:
        raise cursor.truncated(f"comment count of {count}")
    debug(config, "Block contains %d comments", count)

    for _ in range(count):
        length = cursor.u32_le()
        comment = truncate_at_nul(cursor.read(length, "comment"))
        key, sep, value = comment.partition(b"=")
        if not sep:
            debug(config, "Dropping comment without '=': %r", comment)
            continue
        key_text = key.decode(ENCODING, errors="replace")
        debug(config, "key=%s, value=%r", key_text, value)
        tags.add_text(key_text, value)

    return tags
