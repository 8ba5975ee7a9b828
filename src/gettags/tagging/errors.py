"""Exceptions raised while reading tags.

Only NotRecognizedError lets the dispatcher move on to the next container
reader. Every other TagError is final for the file that raised it.
"""

from typing import Optional


class TagError(Exception):
    """Base class for all tag reading errors."""

    def __init__(
        self,
        message: str,
        path: Optional[str] = None,
        format: Optional[str] = None,
    ):
        super().__init__(message)
        self.message = message
        self.path = path
        self.format = format

    def __str__(self):
        text = self.message
        if self.format:
            text = f"{self.format}: {text}"
        if self.path:
            text = f"{text} ({self.path})"
        return text


class TagReadError(TagError):
    """The file could not be opened or read."""


class TagTruncatedError(TagError):
    """A recognized tag is shorter than its own declared size."""


class TagOutOfMemoryError(TagError):
    """A declared length asks for more memory than the reader allows."""


class UnsupportedFormatError(TagError):
    """The tag uses a feature we can't read, or no reader recognized the file."""


class NotRecognizedError(TagError):
    """The file is not in this reader's format. Never leaves the dispatcher."""
