"""ID3v2 (MP3) tag reader.

Handles ID3v2.2, v2.3 and v2.4 tags at the start of a file. Text frames,
comments with an empty short description and the front cover picture are
read; every other frame is skipped, as is a v2.3 or v2.4 extended header.

Tag header (10 bytes)::

    "ID3" major minor flags size[4, syncsafe]

Frame header::

    v2.2:        id[3] size[3]
    v2.3/v2.4:   id[4] size[4] flags[2]   (size syncsafe from v2.4)
"""

from typing import BinaryIO, Optional, Tuple

from ...config import ReaderConfig
from ...constants import (
    ID3_FLAG_EXTENDED_HEADER,
    ID3_FLAG_UNSYNCHRONISATION,
    ID3_FRAME_HEADER_SIZE,
    ID3_HEADER_SIZE,
    ID3_MAGIC,
    ID3_MAX_MIME_LENGTH,
    ID3_PICTURE_FRONT_COVER,
    ID3_V22_FRAME_HEADER_SIZE,
)
from ..collection import CoverArt, TagCollection
from ..encoding import TextEncoding, to_utf8
from ..errors import NotRecognizedError, TagTruncatedError, UnsupportedFormatError
from .base import debug, open_tag_file, read_exact
from .cursor import ByteCursor, decode_syncsafe

FORMAT = "id3v2"

_UTF16_BOMS = (b"\xff\xfe", b"\xfe\xff")
_KNOWN_ENCODINGS = frozenset(TextEncoding)

# ID3v2.2 PIC frames name the image format instead of giving a MIME type
_V22_IMAGE_FORMATS = {
    "JPG": "image/jpeg",
    "PNG": "image/png",
    "GIF": "image/gif",
}


class Frame:
    """A raw frame: its id and body.

    The body carries one extra NUL past the declared size, because some
    encoders leave the terminator off UTF-8 text.
    """

    def __init__(self, id: str, size: int, body: bytes, header_size: int):
        self.id = id
        self.size = size
        self.body = body + b"\x00"
        self.header_size = header_size

    @property
    def data(self) -> bytes:
        """The body exactly as declared, without the padding byte."""
        return self.body[: self.size]

    @property
    def total_size(self) -> int:
        return self.header_size + self.size

    def __repr__(self):
        return f"Frame({self.id!r}, {self.size} bytes)"


def decode_text_field(selector: int, body: bytes, offset: int) -> bytes:
    """Decode the text in body starting at offset, according to selector.

    This is shared by text and comment frames. An unknown selector means
    the body has no selector byte at all, so the whole body (selector
    included) is read as ISO-8859-1.
    """
    if selector in _KNOWN_ENCODINGS:
        return to_utf8(selector, body[offset:])
    return to_utf8(TextEncoding.ISO8859_1, body)


def comment_text_offset(selector: int, body: bytes) -> Optional[int]:
    """Where the comment text starts in a COMM body, or None to skip it.

    Only comments with an empty short description are read. The body is
    selector[1] language[3] description text.
    """
    if selector in (TextEncoding.UTF16_BOM, TextEncoding.UTF16):
        if body[4:6] == b"\x00\x00":
            return 6
        if selector == TextEncoding.UTF16_BOM and body[4:6] in _UTF16_BOMS and body[6:8] == b"\x00\x00":
            return 8
        return None
    if body[4:5] == b"\x00":
        return 5
    return None


class ID3v2Reader:
    """Reads the ID3v2 tag at the start of one file."""

    def __init__(self, path: str, config: Optional[ReaderConfig] = None):
        self.path = str(path)
        self.config = config or ReaderConfig()
        self.major = 0
        self.minor = 0
        self.tags = TagCollection(FORMAT)

    def read(self) -> TagCollection:
        with open_tag_file(self.path, FORMAT) as f:
            size, extended = self.read_header(f)
            consumed = self.skip_extended_header(f, size) if extended else 0
            while consumed < size:
                frame = self.read_frame(f)
                if frame is None:
                    debug(self.config, "Got a null frame id, end of frames")
                    break
                consumed += frame.total_size
                debug(self.config, "Read %d of %d tag bytes", consumed, size)
                self.handle_frame(frame)
        return self.tags.freeze()

    def read_header(self, f: BinaryIO) -> Tuple[int, bool]:
        """Check the tag header.

        Returns:
            The declared tag size, and whether an extended header follows
        """
        header = f.read(ID3_HEADER_SIZE)
        if len(header) != ID3_HEADER_SIZE or header[:3] != ID3_MAGIC:
            raise NotRecognizedError("No ID3v2 tag", self.path, FORMAT)

        self.major, self.minor, flags = header[3], header[4], header[5]
        self.tags.version = f"2.{self.major}.{self.minor}"
        debug(self.config, "ID3v2 version = %d.%d", self.major, self.minor)

        if flags & ID3_FLAG_UNSYNCHRONISATION:
            raise UnsupportedFormatError("Unsynchronised ID3v2 tags are not supported", self.path, FORMAT)
        extended = bool(flags & ID3_FLAG_EXTENDED_HEADER)
        if extended and self.major < 3:
            raise UnsupportedFormatError("Compressed ID3v2.2 tags are not supported", self.path, FORMAT)

        size = decode_syncsafe(header[6:10])
        debug(self.config, "ID3v2 tag size = %d", size)
        return size, extended

    def skip_extended_header(self, f: BinaryIO, tag_size: int) -> int:
        """Skip the extended header and return how many tag bytes it used.

        The v2.3 size is a plain integer that leaves out the size field
        itself; the v2.4 size is syncsafe and counts the whole header.
        """
        size_field = f.read(4)
        if len(size_field) != 4:
            raise TagTruncatedError("File ends inside the extended header", self.path, FORMAT)
        if self.major >= 4:
            total = decode_syncsafe(size_field)
        else:
            total = int.from_bytes(size_field, "big") + 4
        if total < 6 or total > tag_size:
            raise TagTruncatedError(f"Extended header of {total} bytes in a {tag_size} byte tag", self.path, FORMAT)
        debug(self.config, "Skipping %d byte extended header", total)
        read_exact(f, total - 4, self.config, self.path, FORMAT, "Extended header")
        return total

    def read_frame(self, f: BinaryIO) -> Optional[Frame]:
        """Read the next frame, or return None at the padding after the last one."""
        if self.major >= 3:
            id_size, header_size = 4, ID3_FRAME_HEADER_SIZE
        else:
            id_size, header_size = 3, ID3_V22_FRAME_HEADER_SIZE

        frame_id = f.read(id_size)
        if len(frame_id) != id_size:
            raise TagTruncatedError("File ends inside a frame header", self.path, FORMAT)
        if frame_id[0] == 0:
            return None

        size_field = f.read(header_size - id_size)
        if len(size_field) != header_size - id_size:
            raise TagTruncatedError("File ends inside a frame header", self.path, FORMAT)

        if self.major >= 4:
            size = decode_syncsafe(size_field[:4])
        elif self.major == 3:
            size = int.from_bytes(size_field[:4], "big")
        else:
            size = int.from_bytes(size_field[:3], "big")

        frame_id = frame_id.decode("latin-1")
        debug(self.config, "Found frame of type %s, length %d", frame_id, size)

        if size < 1:
            raise TagTruncatedError(f"Frame {frame_id} has no body", self.path, FORMAT)

        body = read_exact(f, size, self.config, self.path, FORMAT, f"Frame {frame_id}")
        return Frame(frame_id, size, body, header_size)

    def handle_frame(self, frame: Frame) -> None:
        if frame.id.startswith("T"):
            self.handle_text(frame)
        elif frame.id == "APIC":
            self.handle_picture(frame)
        elif frame.id == "PIC" and self.major == 2:
            self.handle_v22_picture(frame)
        elif frame.id in ("COMM", "COM"):
            self.handle_comment(frame)
        else:
            debug(self.config, "Skipping frame %s", frame.id)

    def handle_text(self, frame: Frame) -> None:
        selector = frame.body[0]
        text = decode_text_field(selector, frame.body, 1)
        debug(self.config, "Text frame %s, encoding %d: %r", frame.id, selector, text)
        self.tags.add_text(frame.id, text)

    def handle_comment(self, frame: Frame) -> None:
        selector = frame.body[0]
        offset = comment_text_offset(selector, frame.data)
        if offset is None:
            debug(self.config, "Skipping %s frame with a short description", frame.id)
            return
        text = decode_text_field(selector, frame.body, offset)
        debug(self.config, "Comment frame, encoding %d: %r", selector, text)
        self.tags.add_text(frame.id, text)

    def handle_picture(self, frame: Frame) -> None:
        """APIC: selector, MIME type, picture type, description, image data."""
        if frame.body[0] != TextEncoding.ISO8859_1:
            debug(self.config, "Skipping APIC frame with encoding %d", frame.body[0])
            return
        cursor = ByteCursor(frame.data, self.path, FORMAT)
        cursor.skip(1)
        mime = cursor.cstring()[:ID3_MAX_MIME_LENGTH].decode("latin-1")
        self.store_cover(cursor, mime)

    def handle_v22_picture(self, frame: Frame) -> None:
        """PIC: selector, 3 character image format, picture type, description, data."""
        if frame.body[0] != TextEncoding.ISO8859_1 or frame.size < 5:
            debug(self.config, "Skipping PIC frame")
            return
        cursor = ByteCursor(frame.data, self.path, FORMAT)
        cursor.skip(1)
        image_format = cursor.read(3).decode("latin-1").upper()
        mime = _V22_IMAGE_FORMATS.get(image_format, f"image/{image_format.lower()}")
        self.store_cover(cursor, mime)

    def store_cover(self, cursor: ByteCursor, mime: str) -> None:
        if cursor.at_end():
            debug(self.config, "Picture frame has no picture type")
            return
        picture_type = cursor.u8()
        debug(self.config, "Picture MIME %s, type %d", mime, picture_type)
        if picture_type != ID3_PICTURE_FRONT_COVER:
            return
        cursor.cstring()  # description
        # A later front cover replaces an earlier one
        self.tags.cover = CoverArt(mime, cursor.rest())


def read_id3v2(path: str, config: Optional[ReaderConfig] = None) -> TagCollection:
    """Read the ID3v2 tag of path.

    Raises:
        NotRecognizedError: If the file does not start with an ID3v2 tag
        UnsupportedFormatError: If the tag is unsynchronised, or a compressed v2.2 tag
        TagTruncatedError: If a frame runs past the end of the file
        TagOutOfMemoryError: If a frame declares an unreasonable size
        TagReadError: If the file can't be opened or read
    """
    return ID3v2Reader(path, config).read()
