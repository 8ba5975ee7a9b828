"""FLAC reader: finds the VORBIS_COMMENT metadata block.

After the "fLaC" marker the file holds a chain of metadata blocks, each
with a one byte header (bit 7: last block, bits 0-6: type) and a three byte
big-endian size.
"""

import os
from typing import Optional

from ...config import ReaderConfig
from ...constants import FLAC_BLOCK_VORBIS_COMMENT, FLAC_LAST_BLOCK, FLAC_MAGIC
from ..collection import TagCollection
from ..errors import NotRecognizedError
from .base import debug, open_tag_file, read_exact
from .vorbis import parse_vorbis_comments

FORMAT = "flac"


def read_flac(path: str, config: Optional[ReaderConfig] = None) -> TagCollection:
    """Read the Vorbis comments of a FLAC file.

    Only the first VORBIS_COMMENT block is read.

    Raises:
        NotRecognizedError: If the file is not FLAC or has no comment block
        TagTruncatedError: If the comment block is shorter than declared
        TagOutOfMemoryError: If the comment block declares an unreasonable size
        TagReadError: If the file can't be opened or read
    """
    path = str(path)
    config = config or ReaderConfig()
    tags = TagCollection(FORMAT)

    with open_tag_file(path, FORMAT) as f:
        if f.read(4) != FLAC_MAGIC:
            raise NotRecognizedError("No fLaC marker", path, FORMAT)

        last_block = False
        while not last_block:
            header = f.read(4)
            if len(header) != 4:
                debug(config, "FLAC file ends before the last metadata block")
                break

            block_type = header[0] & 0x7F
            last_block = bool(header[0] & FLAC_LAST_BLOCK)
            block_size = int.from_bytes(header[1:4], "big")
            debug(config, "Metadata block type %d, size %d, last %s", block_type, block_size, last_block)

            if block_type == FLAC_BLOCK_VORBIS_COMMENT:
                block = read_exact(f, block_size, config, path, FORMAT, "VORBIS_COMMENT block")
                parse_vorbis_comments(block, tags, config, path, FORMAT)
                return tags.freeze()

            f.seek(block_size, os.SEEK_CUR)

    raise NotRecognizedError("No VORBIS_COMMENT block", path, FORMAT)
