"""MP4 / QuickTime (M4A, M4B) reader.

iTunes-style metadata lives at moov/udta/meta/ilst. Every atom is::

    size[4, big-endian] type[4] payload

where size 1 means a 64-bit size follows the type and size 0 means the atom
runs to the end of its parent. Each ilst item holds a data atom::

    size[4] type[4] data_len[4] "data" data_type[4] locale[4] value
"""

import os
import struct
from typing import Iterator, Optional, Tuple

from ...config import ReaderConfig
from ...constants import (
    MP4_ATOM_HEADER_SIZE,
    MP4_COPYRIGHT_SIGN,
    MP4_DATA_IMPLICIT,
    MP4_DATA_JPEG,
    MP4_DATA_TEXT,
)
from ..collection import CoverArt, TagCollection
from ..encoding import truncate_at_nul
from ..errors import NotRecognizedError, TagTruncatedError
from .base import debug, open_tag_file, read_exact
from .cursor import ByteCursor

FORMAT = "mp4"

# Track and disc numbers: reserved[2] number[2] total[2]
_NUMBER_PAIR_ITEMS = (b"trkn", b"disk")
# Size of data_len, "data", data_type and locale
_DATA_HEADER_SIZE = 16


def iter_atoms(cursor: ByteCursor) -> Iterator[Tuple[bytes, ByteCursor]]:
    """Yield (type, payload cursor) for each child atom in cursor.

    A tail shorter than an atom header is ignored, since QuickTime writers
    sometimes end a udta atom with a four byte zero terminator.

    Raises:
        TagTruncatedError: If an atom is smaller than its header or larger
            than its parent
    """
    while cursor.remaining >= MP4_ATOM_HEADER_SIZE:
        size = cursor.u32_be()
        kind = cursor.read(4)
        header_size = MP4_ATOM_HEADER_SIZE
        if size == 1:
            size = cursor.u64_be()
            header_size += 8
        elif size == 0:
            size = header_size + cursor.remaining
        if size < header_size:
            raise cursor.truncated(f"atom {kind!r} of size {size}")
        yield kind, cursor.sub(size - header_size, f"atom {kind!r}")


def item_name(kind: bytes) -> str:
    """Tag name for an ilst item: '\\xa9nam' becomes 'nam', 'aART' stays 'aART'."""
    if kind[0] == MP4_COPYRIGHT_SIGN:
        return kind[1:4].decode("latin-1")
    return kind.decode("latin-1")


class MP4Reader:
    """Reads the iTunes metadata of one MP4 file."""

    def __init__(self, path: str, config: Optional[ReaderConfig] = None):
        self.path = str(path)
        self.config = config or ReaderConfig()
        self.tags = TagCollection(FORMAT)

    def read(self) -> TagCollection:
        with open_tag_file(self.path, FORMAT) as f:
            file_size = os.fstat(f.fileno()).st_size
            while True:
                start = f.tell()
                header = f.read(MP4_ATOM_HEADER_SIZE)
                if len(header) != MP4_ATOM_HEADER_SIZE:
                    debug(self.config, "Reached end of MP4 file")
                    break

                size, kind = struct.unpack(">I4s", header)
                header_size = MP4_ATOM_HEADER_SIZE
                if size == 1:
                    extended = f.read(8)
                    if len(extended) != 8:
                        break
                    size = struct.unpack(">Q", extended)[0]
                    header_size += 8
                elif size == 0:
                    size = file_size - start
                if size < header_size:
                    break

                if kind == b"moov":
                    debug(self.config, "Found MP4 moov atom of size %d", size)
                    self.read_moov(f, size - header_size, file_size - start - header_size)
                    return self.tags.freeze()

                f.seek(start + size)

        raise NotRecognizedError("No moov atom", self.path, FORMAT)

    def read_moov(self, f, payload_size: int, available: int) -> None:
        if payload_size > available:
            raise TagTruncatedError(
                f"moov atom declares {payload_size} bytes but only {available} remain",
                self.path,
                FORMAT,
            )
        moov = ByteCursor(read_exact(f, payload_size, self.config, self.path, FORMAT, "moov atom"), self.path, FORMAT)
        for kind, udta in iter_atoms(moov):
            if kind == b"udta":
                self.read_udta(udta)

    def read_udta(self, udta: ByteCursor) -> None:
        debug(self.config, "Found MP4 udta atom")
        for kind, meta in iter_atoms(udta):
            if kind == b"meta":
                self.read_meta(meta)

    def read_meta(self, meta: ByteCursor) -> None:
        debug(self.config, "Found MP4 meta atom")
        # ISO files put version/flags before the children, QuickTime files don't
        if meta.data[4:8] != b"hdlr":
            meta.skip(4, "meta version")
        for kind, ilst in iter_atoms(meta):
            if kind == b"ilst":
                self.read_ilst(ilst)

    def read_ilst(self, ilst: ByteCursor) -> None:
        debug(self.config, "Found MP4 ilst atom")
        for kind, item in iter_atoms(ilst):
            if item.remaining < _DATA_HEADER_SIZE:
                debug(self.config, "Skipping ilst item %r without a data atom", kind)
                continue
            data_len = item.u32_be()
            item.skip(4)  # "data"
            data_type = item.u32_be()
            item.skip(4)  # locale
            value = item.read(min(max(data_len - _DATA_HEADER_SIZE, 0), item.remaining))
            self.handle_item(kind, data_type, value)

    def handle_item(self, kind: bytes, data_type: int, value: bytes) -> None:
        if kind == b"covr":
            mime = "image/jpeg" if data_type == MP4_DATA_JPEG else "image/png"
            debug(self.config, "Cover image, %s, %d bytes", mime, len(value))
            self.tags.cover = CoverArt(mime, value)
        elif data_type == MP4_DATA_TEXT:
            name = item_name(kind)
            text = truncate_at_nul(value)
            debug(self.config, "Text tag: name=%s, value=%r", name, text)
            self.tags.add_text(name, text)
        elif data_type == MP4_DATA_IMPLICIT and kind in _NUMBER_PAIR_ITEMS and len(value) >= 6:
            number, total = struct.unpack(">HH", value[2:6])
            text = f"{number}/{total}" if total else str(number)
            debug(self.config, "Number tag: name=%s, value=%s", kind.decode("latin-1"), text)
            self.tags.add_text(kind.decode("latin-1"), text.encode("ascii"))
        else:
            debug(self.config, "Skipping ilst item %r of data type %d", kind, data_type)


def read_mp4(path: str, config: Optional[ReaderConfig] = None) -> TagCollection:
    """Read the iTunes metadata of an MP4 file.

    Raises:
        NotRecognizedError: If no moov atom is found at the top level
        TagTruncatedError: If the moov atom or anything inside it is shorter than declared
        TagOutOfMemoryError: If the moov atom declares an unreasonable size
        TagReadError: If the file can't be opened or read
    """
    return MP4Reader(path, config).read()
