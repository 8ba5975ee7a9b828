"""Containers for the tags read from one audio file."""

from enum import IntEnum
from typing import Iterator, List, Optional

from ..constants import ENCODING, MIME_EXTENSIONS


class TagType(IntEnum):
    TEXT = 0
    BINARY = 1


class TagEntry:
    """One key/value tag, keyed by the format's own field name.

    Text values are stored as UTF-8 bytes; use .text to get a str.
    """

    def __init__(self, id: str, value: bytes, kind: TagType = TagType.TEXT):
        self.__id = id
        self.__value = bytes(value)
        self.__kind = TagType(kind)

    @property
    def id(self) -> str:
        return self.__id

    @property
    def value(self) -> bytes:
        return self.__value

    @property
    def kind(self) -> TagType:
        return self.__kind

    @property
    def text(self) -> Optional[str]:
        """The value as text, or None for binary entries."""
        if self.__kind != TagType.TEXT:
            return None
        return self.__value.decode(ENCODING, errors="replace")

    def matches(self, id: str) -> bool:
        return self.__id.lower() == id.lower()

    def __eq__(self, other):
        if not isinstance(other, TagEntry):
            return NotImplemented
        return (self.id, self.kind, self.value) == (other.id, other.kind, other.value)

    def __hash__(self):
        return hash((self.id, self.kind, self.value))

    def __repr__(self):
        if self.kind == TagType.TEXT:
            return f"TagEntry({self.id!r}, {self.text!r})"
        return f"TagEntry({self.id!r}, <{len(self.value)} bytes>)"


class CoverArt:
    """An embedded front cover image."""

    def __init__(self, mime: str, data: bytes):
        self.__mime = mime
        self.__data = bytes(data)

    @property
    def mime(self) -> str:
        return self.__mime

    @property
    def data(self) -> bytes:
        return self.__data

    @property
    def extension(self) -> Optional[str]:
        """File extension for the image type, or None if we don't know it."""
        return MIME_EXTENSIONS.get(self.__mime.lower())

    def __len__(self):
        return len(self.__data)

    def __repr__(self):
        return f"CoverArt({self.mime!r}, <{len(self)} bytes>)"


class TagCollection:
    """The tags found in one file, in the order the file stores them.

    Duplicate ids are kept; lookups return the first one. Readers call
    freeze() when they are done, after which the collection is read-only.
    """

    def __init__(self, format: Optional[str] = None, entries=None):
        self.__format = format
        self.__version: Optional[str] = None
        self.__vendor: Optional[str] = None
        self.__entries: List[TagEntry] = []
        self.__cover: Optional[CoverArt] = None
        self.__frozen = False
        if entries is not None:
            for entry in entries:
                self.append(entry)

    def __check_writable(self):
        if self.__frozen:
            raise TypeError("TagCollection is read-only once parsing has finished")

    def __contains__(self, id):
        return self.find(id) is not None

    def __getitem__(self, id: str) -> TagEntry:
        entry = self.find(id)
        if entry is None:
            raise KeyError(id)
        return entry

    def __iter__(self) -> Iterator[TagEntry]:
        return iter(self.__entries)

    def __len__(self):
        return len(self.__entries)

    def __repr__(self):
        return f"TagCollection({self.format!r}, {len(self)} entries, cover={self.cover!r})"

    @property
    def count(self) -> int:
        return len(self.__entries)

    @property
    def entries(self) -> tuple:
        return tuple(self.__entries)

    @property
    def frozen(self) -> bool:
        return self.__frozen

    def __get_cover(self):
        return self.__cover

    def __set_cover(self, cover):
        self.__check_writable()
        self.__cover = cover

    cover = property(__get_cover, __set_cover)

    def __get_format(self):
        return self.__format

    def __set_format(self, format):
        self.__check_writable()
        self.__format = format

    format = property(__get_format, __set_format)

    def __get_version(self):
        return self.__version

    def __set_version(self, version):
        self.__check_writable()
        self.__version = version

    version = property(__get_version, __set_version, doc="Tag version, e.g. \"2.4.0\" for ID3v2")

    def __get_vendor(self):
        return self.__vendor

    def __set_vendor(self, vendor):
        self.__check_writable()
        self.__vendor = vendor

    vendor = property(__get_vendor, __set_vendor, doc="Vorbis comment vendor string")

    def append(self, entry: TagEntry) -> None:
        self.__check_writable()
        self.__entries.append(entry)

    def add_text(self, id: str, value: bytes) -> TagEntry:
        """Append a text entry whose value is already UTF-8."""
        entry = TagEntry(id, value, TagType.TEXT)
        self.append(entry)
        return entry

    def find(self, id: str) -> Optional[TagEntry]:
        """Return the first entry whose id matches, ignoring case."""
        for entry in self.__entries:
            if entry.matches(id):
                return entry
        return None

    def freeze(self) -> "TagCollection":
        self.__frozen = True
        return self
