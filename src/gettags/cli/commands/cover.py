"""Cover command - Extract the embedded front cover of an audio file."""

import argparse
import logging
import sys
from pathlib import Path

from rich.console import Console

from ...config import Config
from ...tagging import TagError, read
from ..schemas import CoverSuccessResponse, ErrorResponse
from ..utils import ExitCode, describe_error, json_output, make_prefix


def cmd_cover(args: argparse.Namespace) -> None:
    """Write the front cover of a file to BASENAME.<ext>.

    The extension comes from the image MIME type (jpg, png or gif).

    Args:
        args: Parsed command-line arguments

    Exit codes:
        0: Cover written
        1: File unreadable, no cover, unknown image type or write failed
        2: Invalid configuration
    """
    use_json = args.json
    console = Console(quiet=use_json, highlight=False, emoji=False, soft_wrap=True)
    err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

    config = Config(args.config)
    script = args.script or config.get_script_mode()

    def fail(code: str, message: str) -> None:
        if use_json:
            json_output(ErrorResponse(error=code, message=message, path=args.file), ExitCode.FAILURE)
        err_console.print(f"{make_prefix(False, script)}{message}", markup=False)
        sys.exit(ExitCode.FAILURE)

    try:
        reader_config = config.reader_config(debug=True if args.debug else None)
    except ValueError as e:
        logging.debug("Invalid reader configuration: %s", e)
        err_console.print(f"{make_prefix(False, script)}{e}", markup=False)
        sys.exit(ExitCode.INVALID_INPUT)

    try:
        tags = read(args.file, reader_config)
    except TagError as e:
        logging.debug("Reading %s failed: %s", args.file, e)
        code, message = describe_error(e)
        fail(code, f"{message} '{args.file}'")

    cover = tags.cover
    if cover is None:
        fail("no_cover", f"{args.file}: no cover image found")
    if cover.extension is None:
        fail("unknown_type", f"{args.file}: cover image found, but file type is unknown ({cover.mime})")

    destination = Path(f"{args.output}.{cover.extension}")
    try:
        destination.write_bytes(cover.data)
    except OSError as e:
        fail("write_failed", f"can't open file for writing: {destination} ({e.strerror})")

    logging.info("Wrote %d byte %s cover to %s", len(cover), cover.mime, destination)
    if use_json:
        json_output(
            CoverSuccessResponse(
                source=args.file,
                destination=str(destination),
                mime=cover.mime,
                size=len(cover),
            )
        )
    else:
        console.print(f"{make_prefix(True, script)}{destination}", markup=False)
