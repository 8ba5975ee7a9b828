"""Common field names and the format-specific keys that carry them.

Frame ids differ between ID3v2 revisions, and again in Vorbis comments and
MP4 atoms, so each common field maps to an ordered list of candidate keys.
The first candidate present in a file wins.
"""

from enum import Enum
from typing import Dict, Optional, Tuple

from .collection import TagCollection


class CanonicalField(Enum):
    TITLE = "title"
    ALBUM = "album"
    ARTIST = "artist"
    ALBUM_ARTIST = "album-artist"
    COMPOSER = "composer"
    DATE = "date"
    # MP4 brought full dates; year and date read the same fields
    YEAR = "date"
    GENRE = "genre"
    TRACK = "track"
    COMMENT = "comment"


# Keys per tag vocabulary, in the order the vocabularies are searched
VOCABULARIES: Dict[str, Dict[CanonicalField, Tuple[str, ...]]] = {
    "id3v2.3": {
        CanonicalField.TITLE: ("TIT2",),
        CanonicalField.ARTIST: ("TPE1",),
        CanonicalField.ALBUM_ARTIST: ("TPE2",),
        CanonicalField.GENRE: ("TCON",),
        CanonicalField.ALBUM: ("TALB",),
        CanonicalField.COMPOSER: ("TCOM",),
        CanonicalField.DATE: ("TYER",),
        CanonicalField.TRACK: ("TRCK",),
        CanonicalField.COMMENT: ("COMM",),
    },
    "id3v2.4": {
        CanonicalField.DATE: ("TDRC",),
    },
    "id3v2.2": {
        CanonicalField.TITLE: ("TT2",),
        CanonicalField.ARTIST: ("TP1",),
        CanonicalField.ALBUM_ARTIST: ("TP2",),
        CanonicalField.GENRE: ("TCO",),
        CanonicalField.ALBUM: ("TAL",),
        CanonicalField.COMPOSER: ("TCM",),
        CanonicalField.DATE: ("TYE",),
        CanonicalField.TRACK: ("TRK",),
        CanonicalField.COMMENT: ("COM",),
    },
    "vorbis": {
        CanonicalField.TITLE: ("TITLE",),
        CanonicalField.ARTIST: ("ARTIST", "PERFORMER"),
        CanonicalField.ALBUM_ARTIST: ("ALBUMARTIST",),
        CanonicalField.GENRE: ("GENRE",),
        CanonicalField.ALBUM: ("ALBUM",),
        CanonicalField.COMPOSER: ("COMPOSER",),
        CanonicalField.DATE: ("DATE",),
        CanonicalField.TRACK: ("TRACKNUMBER",),
        CanonicalField.COMMENT: ("DESCRIPTION", "COMMENT"),
    },
    "mp4": {
        CanonicalField.TITLE: ("nam",),
        CanonicalField.ARTIST: ("ART",),
        CanonicalField.ALBUM_ARTIST: ("aART",),
        CanonicalField.GENRE: ("gen", "gnre"),
        CanonicalField.ALBUM: ("alb",),
        CanonicalField.COMPOSER: ("wrt",),
        CanonicalField.DATE: ("day",),
        CanonicalField.TRACK: ("trkn",),
        CanonicalField.COMMENT: ("cmt",),
    },
}


def _build_alias_table() -> Dict[CanonicalField, Tuple[str, ...]]:
    table: Dict[CanonicalField, Tuple[str, ...]] = {}
    for field in CanonicalField:
        keys = []
        for vocabulary in VOCABULARIES.values():
            keys.extend(vocabulary.get(field, ()))
        table[field] = tuple(keys)
    return table


ALIASES = _build_alias_table()

# Human-readable names accepted on the command line, in display order
COMMON_NAMES: Dict[str, CanonicalField] = {
    "album": CanonicalField.ALBUM,
    "album-artist": CanonicalField.ALBUM_ARTIST,
    "artist": CanonicalField.ARTIST,
    "comment": CanonicalField.COMMENT,
    "composer": CanonicalField.COMPOSER,
    "date": CanonicalField.DATE,
    "genre": CanonicalField.GENRE,
    "title": CanonicalField.TITLE,
    "track": CanonicalField.TRACK,
    "year": CanonicalField.YEAR,
}


def common_field(name: str) -> CanonicalField:
    """Map a human-readable name such as 'album-artist' to its CanonicalField.

    Raises:
        KeyError: If the name is not a common field
    """
    return COMMON_NAMES[name.strip().lower()]


def get_by_id(tags: TagCollection, id: str) -> Optional[str]:
    """Text of the first tag whose id matches, ignoring case, or None."""
    entry = tags.find(id)
    if entry is None:
        return None
    return entry.text


def get_common(tags: TagCollection, field: CanonicalField) -> Optional[str]:
    """Text of the first candidate key for field that the file has, or None."""
    for key in ALIASES[field]:
        value = get_by_id(tags, key)
        if value is not None:
            return value
    return None
