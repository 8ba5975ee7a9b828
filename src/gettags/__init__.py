"""gettags - read the metadata tags of audio files.

Reads ID3v2 (2.2, 2.3, 2.4), FLAC and Ogg Vorbis comments, and MP4 (iTunes)
metadata into one TagCollection per file, and resolves common fields such
as title or artist across the naming conventions of each format.

Main modules:
    cli: Command-line interface (gettags command)
    tagging: Container readers, text decoding and field mappings

Core modules:
    config: Configuration management
    constants: Magic numbers and defaults
"""

try:
    from importlib.metadata import version, PackageNotFoundError

    __version__ = version("gettags")
except PackageNotFoundError:
    # Package not installed, read directly from pyproject.toml
    try:
        from pathlib import Path
        import tomllib

        pyproject_path = Path(__file__).parent.parent.parent / "pyproject.toml"
        with open(pyproject_path, "rb") as f:
            __version__ = tomllib.load(f)["project"]["version"]
    except (OSError, KeyError, tomllib.TOMLDecodeError):
        __version__ = "unknown"

from .config import Config, ReaderConfig
from .tagging import (
    CanonicalField,
    CoverArt,
    TagCollection,
    TagEntry,
    TagError,
    TagOutOfMemoryError,
    TagReadError,
    TagTruncatedError,
    UnsupportedFormatError,
    get_by_id,
    get_common,
    read,
)

__all__ = [
    # Sub-packages
    "cli",
    "tagging",
    # Core modules
    "config",
    "constants",
    # API
    "Config",
    "ReaderConfig",
    "CanonicalField",
    "CoverArt",
    "TagCollection",
    "TagEntry",
    "TagError",
    "TagReadError",
    "TagTruncatedError",
    "TagOutOfMemoryError",
    "UnsupportedFormatError",
    "get_by_id",
    "get_common",
    "read",
]
