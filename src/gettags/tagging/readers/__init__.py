"""Container readers, one module per tag format.

Every reader takes a path and an optional ReaderConfig and returns a frozen
TagCollection, or raises NotRecognizedError when the file is not its format.
"""

from .id3v2 import read_id3v2
from .flac import read_flac
from .ogg import read_ogg
from .mp4 import read_mp4
from .vorbis import parse_vorbis_comments

__all__ = [
    'read_id3v2',
    'read_flac',
    'read_ogg',
    'read_mp4',
    'parse_vorbis_comments',
]
