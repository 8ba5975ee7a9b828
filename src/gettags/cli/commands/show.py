"""Show command - Print the tags of audio files."""

import argparse
import logging
import sys
from typing import Optional

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from ...config import Config, ReaderConfig
from ...tagging import (
    COMMON_NAMES,
    CanonicalField,
    TagCollection,
    TagError,
    common_field,
    get_by_id,
    get_common,
    read,
)
from ..schemas import ErrorResponse, FieldResponse, ShowSuccessResponse, TagItem
from ..utils import ExitCode, describe_error, json_output, make_prefix

# Fields printed by --common-only, in display order
SUMMARY_FIELDS = [
    ("album", CanonicalField.ALBUM),
    ("artist", CanonicalField.ARTIST),
    ("album-artist", CanonicalField.ALBUM_ARTIST),
    ("comment", CanonicalField.COMMENT),
    ("composer", CanonicalField.COMPOSER),
    ("date", CanonicalField.DATE),
    ("genre", CanonicalField.GENRE),
    ("title", CanonicalField.TITLE),
    ("track", CanonicalField.TRACK),
]


def _summary(tags: TagCollection) -> dict:
    return {name: get_common(tags, field) for name, field in SUMMARY_FIELDS}


def _show_field(
    console: Console,
    err_console: Console,
    filename: str,
    name: str,
    value: Optional[str],
    script: bool,
    use_json: bool,
) -> bool:
    if use_json:
        json_output(
            FieldResponse(
                status="success" if value is not None else "missing",
                path=filename,
                field=name,
                value=value,
            )
        )
    elif value is not None:
        console.print(f"{make_prefix(True, script)}{value}", markup=False)
    else:
        err_console.print(f"{make_prefix(False, script)}Tag not found", markup=False)
    return value is not None


def _show_all(console: Console, filename: str, tags: TagCollection, script: bool) -> None:
    if script:
        # One "id value" line per tag, easy to cut and grep
        console.print("OK", markup=False)
        for entry in tags:
            text = entry.text if entry.text is not None else "(binary)"
            console.print(f"{entry.id} {text}", markup=False)
        return

    title = f"{filename} ({tags.format}"
    if tags.version:
        title += f" {tags.version}"
    title += ")"
    table = Table(title=escape(title), title_justify="left")
    table.add_column("Tag", style="cyan", no_wrap=True)
    table.add_column("Value")
    for entry in tags:
        if entry.text is None:
            table.add_row(escape(entry.id), "[dim](binary)[/dim]")
        else:
            table.add_row(escape(entry.id), escape(entry.text))
    if tags.cover is not None:
        table.add_row("[dim]cover[/dim]", f"[dim]{tags.cover.mime}, {len(tags.cover)} bytes[/dim]")
    console.print(table)


def _show_summary(console: Console, tags: TagCollection, script: bool) -> None:
    if script:
        console.print("OK", markup=False)
    for name, value in _summary(tags).items():
        if value is not None:
            console.print(f"{name} {value}", markup=False)


def show_file(
    filename: str,
    reader_config: ReaderConfig,
    args: argparse.Namespace,
    field: Optional[CanonicalField],
    script: bool,
    console: Console,
    err_console: Console,
) -> bool:
    """Print the tags of one file as the arguments ask.

    Returns:
        True if the file was read and had what was asked for
    """
    use_json = args.json
    try:
        tags = read(filename, reader_config)
    except TagError as e:
        code, message = describe_error(e)
        logging.debug("Reading %s failed: %s", filename, e)
        if use_json:
            json_output(ErrorResponse(error=code, message=message, path=filename))
        else:
            err_console.print(f"{make_prefix(False, script)}{message} '{filename}'", markup=False)
        return False

    if args.exact_name:
        value = get_by_id(tags, args.exact_name)
        return _show_field(console, err_console, filename, args.exact_name, value, script, use_json)

    if field is not None:
        value = get_common(tags, field)
        return _show_field(console, err_console, filename, args.common_name, value, script, use_json)

    if use_json:
        json_output(
            ShowSuccessResponse(
                path=filename,
                format=tags.format,
                version=tags.version,
                tags=[
                    TagItem(id=entry.id, value=entry.text, binary=entry.text is None)
                    for entry in tags
                ],
                cover=tags.cover.mime if tags.cover is not None else None,
                common=_summary(tags) if args.common_only else None,
            )
        )
    elif args.common_only:
        _show_summary(console, tags, script)
    else:
        _show_all(console, filename, tags, script)
    return True


def cmd_show(args: argparse.Namespace) -> None:
    """Print the tags of each file given on the command line.

    Args:
        args: Parsed command-line arguments

    Exit codes:
        0: Every file was read
        1: At least one file failed or lacked the requested tag
        2: Invalid arguments or configuration
    """
    console = Console(highlight=False, emoji=False, soft_wrap=True)
    err_console = Console(stderr=True, highlight=False, emoji=False, soft_wrap=True)

    config = Config(args.config)
    script = args.script or config.get_script_mode()

    if args.common_name == "help":
        console.print(f"common names: {' '.join(COMMON_NAMES)}", markup=False)
        return

    if not args.files:
        err_console.print(f"{make_prefix(False, script)}No files specified", markup=False)
        sys.exit(ExitCode.INVALID_INPUT)

    try:
        reader_config = config.reader_config(debug=True if args.debug else None)
    except ValueError as e:
        logging.debug("Invalid reader configuration: %s", e)
        err_console.print(f"{make_prefix(False, script)}{e}", markup=False)
        sys.exit(ExitCode.INVALID_INPUT)

    field = None
    if args.common_name:
        try:
            field = common_field(args.common_name)
        except KeyError:
            err_console.print(f"unknown common name '{args.common_name}'", markup=False)
            err_console.print("'gettags show --common-name help' for a list", markup=False)
            sys.exit(ExitCode.INVALID_INPUT)

    if field is not None and args.exact_name:
        err_console.print("ignoring common name because exact name was supplied", markup=False)

    failed = 0
    for filename in args.files:
        if not show_file(filename, reader_config, args, field, script, console, err_console):
            failed += 1

    if failed:
        logging.info("%d of %d files failed", failed, len(args.files))
        sys.exit(ExitCode.FAILURE)
