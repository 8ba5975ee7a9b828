"""Format detection: hands a file to the first reader that recognizes it."""

import logging
from typing import Callable, List, Optional, Tuple

from ..config import ReaderConfig
from .collection import TagCollection
from .errors import NotRecognizedError, UnsupportedFormatError
from .readers import read_flac, read_id3v2, read_mp4, read_ogg

# Probe order matters: only NotRecognizedError moves on to the next reader
READERS: List[Tuple[str, Callable[..., TagCollection]]] = [
    ('id3v2', read_id3v2),
    ('flac', read_flac),
    ('ogg', read_ogg),
    ('mp4', read_mp4),
]

SUPPORTED_FORMATS = [name for name, _ in READERS]


def read(filename: str, config: Optional[ReaderConfig] = None) -> TagCollection:
    """
    Read the tags of an audio file.

    Args:
        filename: Path to the audio file
        config: Reader options; defaults are used when None

    Returns:
        The tags of the first format that recognizes the file

    Raises:
        UnsupportedFormatError: If no reader recognizes the file, or the tag
            uses a feature we can't read
        TagTruncatedError: If a recognized tag is shorter than it claims
        TagOutOfMemoryError: If a recognized tag declares an unreasonable size
        TagReadError: If the file can't be opened or read
    """
    filename = str(filename)
    config = config or ReaderConfig()

    for name, reader in READERS:
        try:
            tags = reader(filename, config)
        except NotRecognizedError as e:
            if config.debug:
                logging.debug(f"{filename}: not {name} ({e.message})")
            continue
        if config.debug:
            logging.debug(f"{filename}: read {tags.count} tags as {name}")
        return tags

    raise UnsupportedFormatError("Unsupported tag format or no tags in file", filename)
