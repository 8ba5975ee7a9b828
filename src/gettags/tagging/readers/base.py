"""File access helpers shared by the container readers."""

import logging
from contextlib import contextmanager
from typing import BinaryIO, Iterator

from ...config import ReaderConfig
from ..errors import TagOutOfMemoryError, TagReadError, TagTruncatedError


@contextmanager
def open_tag_file(path: str, format: str) -> Iterator[BinaryIO]:
    """Open path for binary reading, turning OS errors into TagReadError.

    The file is closed on every exit path, including errors raised by the
    reader while it holds the handle.
    """
    try:
        f = open(path, "rb")
    except OSError as e:
        raise TagReadError(f"Can't open file: {e.strerror or e}", path, format) from e
    with f:
        try:
            yield f
        except OSError as e:
            raise TagReadError(f"Can't read file: {e.strerror or e}", path, format) from e


def check_alloc(size: int, config: ReaderConfig, path: str, format: str) -> None:
    """Refuse declared lengths larger than the configured allocation cap."""
    if size > config.max_alloc:
        raise TagOutOfMemoryError(
            f"Declared size of {size} bytes exceeds the {config.max_alloc} byte limit",
            path,
            format,
        )


def read_exact(f: BinaryIO, size: int, config: ReaderConfig, path: str, format: str, what: str) -> bytes:
    """Read exactly size bytes or raise TagTruncatedError."""
    check_alloc(size, config, path, format)
    try:
        data = f.read(size)
    except MemoryError as e:
        raise TagOutOfMemoryError(f"Out of memory reading {what}", path, format) from e
    if len(data) != size:
        raise TagTruncatedError(
            f"{what} declares {size} bytes but only {len(data)} are present",
            path,
            format,
        )
    return data


def debug(config: ReaderConfig, message: str, *args) -> None:
    """Log a reader trace message when the reader runs in debug mode."""
    if config.debug:
        logging.debug(message, *args)
