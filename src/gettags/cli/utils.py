"""Utility functions for CLI operations."""

import logging
import sys
from enum import IntEnum
from typing import Optional, Tuple

from pydantic import BaseModel

from ..tagging import (
    TagError,
    TagOutOfMemoryError,
    TagReadError,
    TagTruncatedError,
    UnsupportedFormatError,
)


class ExitCode(IntEnum):
    """Process exit status.

    SUCCESS: every file was processed
    FAILURE: at least one file could not be read or lacked what was asked for
    INVALID_INPUT: bad command-line arguments or configuration
    """

    SUCCESS = 0
    FAILURE = 1
    INVALID_INPUT = 2


def setup_logging(level: str) -> None:
    """Configure logging based on user-specified level.

    Args:
        level: Logging level (debug, info, warning, error, critical)
    """
    numeric_level = getattr(logging, level.upper(), None)
    if not isinstance(numeric_level, int):
        raise ValueError(f"Invalid log level: {level}")

    logging.basicConfig(
        level=numeric_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )


def json_output(response: BaseModel, exit_code: Optional[int] = None) -> None:
    """Print a response model as one line of JSON.

    Args:
        response: Validated response to print
        exit_code: Exit with this status after printing, if given
    """
    print(response.model_dump_json(exclude_none=True))
    if exit_code is not None:
        sys.exit(exit_code)


def make_prefix(ok: bool, script: bool) -> str:
    """The OK / ERROR prefix printed in script mode."""
    if not script:
        return ""
    return "OK " if ok else "ERROR "


# Most specific class first
_ERROR_MESSAGES = [
    (TagReadError, "read_failed", "Can't read file"),
    (TagTruncatedError, "truncated", "Tag data is incomplete"),
    (TagOutOfMemoryError, "out_of_memory", "Out of memory processing file"),
    (UnsupportedFormatError, "unsupported", "Unsupported tag format or no tags in file"),
]


def describe_error(error: TagError) -> Tuple[str, str]:
    """Return (error code, user message) for a tag reading error."""
    for cls, code, message in _ERROR_MESSAGES:
        if isinstance(error, cls):
            return code, message
    return "tag_error", error.message
