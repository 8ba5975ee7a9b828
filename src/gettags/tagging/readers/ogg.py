"""Ogg Vorbis reader.

The Vorbis comment header is the second packet of the stream and, for all
the files we care about, starts the second Ogg page. We skip the first page
using its segment table, skip the second page's header and the seven byte
packet prefix, then parse a fixed window of what follows.

This is not a general Ogg demultiplexer: comment headers larger than the
window, or spread over more than two pages, are not supported.
"""

from typing import BinaryIO, Optional, Tuple

from ...config import ReaderConfig
from ...constants import (
    OGG_MAGIC,
    OGG_PACKET_PREFIX_SIZE,
    OGG_PAGE_HEADER_SIZE,
    OGG_SEGMENT_COUNT_OFFSET,
)
from ..collection import TagCollection
from ..errors import NotRecognizedError, TagOutOfMemoryError
from .base import check_alloc, debug, open_tag_file
from .vorbis import parse_vorbis_comments

FORMAT = "ogg"


def _page_header_size(f: BinaryIO, page_start: int, path: str) -> Tuple[int, int]:
    """Return (header size, total page size) of the page at page_start."""
    f.seek(page_start)
    header = f.read(OGG_PAGE_HEADER_SIZE)
    if len(header) != OGG_PAGE_HEADER_SIZE or header[:4] != OGG_MAGIC:
        raise NotRecognizedError(f"No Ogg page at offset {page_start}", path, FORMAT)

    segments = header[OGG_SEGMENT_COUNT_OFFSET]
    table = f.read(segments)
    if len(table) != segments:
        raise NotRecognizedError(f"Ogg page at offset {page_start} is incomplete", path, FORMAT)

    header_size = OGG_PAGE_HEADER_SIZE + segments
    return header_size, header_size + sum(table)


def read_ogg(path: str, config: Optional[ReaderConfig] = None) -> TagCollection:
    """Read the Vorbis comments of an Ogg file.

    Raises:
        NotRecognizedError: If either of the first two pages is not an Ogg page
        TagTruncatedError: If the comment header does not fit the window
        TagOutOfMemoryError: If the window is larger than the allocation cap
        TagReadError: If the file can't be opened or read
    """
    path = str(path)
    config = config or ReaderConfig()
    tags = TagCollection(FORMAT)

    with open_tag_file(path, FORMAT) as f:
        _, page_size = _page_header_size(f, 0, path)
        debug(config, "Ogg page size is %d", page_size)

        header_size, _ = _page_header_size(f, page_size, path)
        f.seek(page_size + header_size + OGG_PACKET_PREFIX_SIZE)
        check_alloc(config.ogg_window, config, path, FORMAT)
        try:
            window = f.read(config.ogg_window)
        except MemoryError as e:
            raise TagOutOfMemoryError("Out of memory reading the Ogg comment window", path, FORMAT) from e

    debug(config, "Parsing %d bytes of the second Ogg page", len(window))
    parse_vorbis_comments(window, tags, config, path, FORMAT)
    return tags.freeze()
