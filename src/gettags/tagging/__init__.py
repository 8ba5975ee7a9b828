"""
Tagging subpackage - Audio file tag reading.

This package reads ID3v2, FLAC, Ogg Vorbis and MP4 tags into a uniform
TagCollection, and resolves common fields (title, artist, ...) across the
naming conventions of each format.
"""

from .collection import CoverArt, TagCollection, TagEntry, TagType
from .errors import (
    NotRecognizedError,
    TagError,
    TagOutOfMemoryError,
    TagReadError,
    TagTruncatedError,
    UnsupportedFormatError,
)
from .formats import read, READERS, SUPPORTED_FORMATS
from .mappings import ALIASES, COMMON_NAMES, CanonicalField, common_field, get_by_id, get_common

__all__ = [
    'CoverArt',
    'TagCollection',
    'TagEntry',
    'TagType',
    'TagError',
    'TagReadError',
    'TagTruncatedError',
    'TagOutOfMemoryError',
    'UnsupportedFormatError',
    'NotRecognizedError',
    'read',
    'READERS',
    'SUPPORTED_FORMATS',
    'ALIASES',
    'COMMON_NAMES',
    'CanonicalField',
    'common_field',
    'get_by_id',
    'get_common',
]
