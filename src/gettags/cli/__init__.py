"""Command-line interface for gettags.

This package provides the 'gettags' command-line tool with two subcommands:
    show: Print the tags of audio files
    cover: Extract the embedded front cover of an audio file

Modules:
    commands/: Command implementations (show, cover)
    schemas.py: Pydantic models for --json output
    utils.py: CLI utility functions
"""

import argparse
import logging
import sys

from rich_argparse import RichHelpFormatter

from .. import __version__
from .utils import setup_logging
from .commands import cmd_cover, cmd_show

__all__ = [
    "main",
    "cmd_cover",
    "cmd_show",
    "setup_logging",
]


class RichRawHelpFormatter(RichHelpFormatter, argparse.RawDescriptionHelpFormatter):
    """Combines Rich formatting with the ability to keep line breaks (Raw)."""
    pass


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser with all subcommands."""

    # Parent parser for shared options
    parent_parser = argparse.ArgumentParser(add_help=False)

    parent_parser.add_argument(
        "-v",
        "--version",
        action="version",
        version=f"%(prog)s {__version__}",
    )
    parent_parser.add_argument(
        "-l",
        "--log-level",
        default=None,
        help="Set logging level (disabled by default)",
    )
    parent_parser.add_argument(
        "--config",
        default=None,
        help="Path to configuration file (default: ~/.gettags/config.toml)",
    )

    # Options shared by the commands that read files
    read_parser = argparse.ArgumentParser(add_help=False)
    read_parser.add_argument(
        "-d",
        "--debug",
        action="store_true",
        help="Log every frame, block and atom the readers visit",
    )
    read_parser.add_argument(
        "-s",
        "--script",
        action="store_true",
        help="Script mode: prefix results with OK or ERROR",
    )
    read_parser.add_argument(
        "--json",
        action="store_true",
        help="Print one JSON document per file",
    )

    parser = argparse.ArgumentParser(
        prog="gettags",
        usage="gettags <command> [options]",
        description=(
            "gettags - Read the tags of ID3v2, FLAC, Ogg Vorbis and MP4 audio files\n\n"
            "Examples:\n"
            "  gettags show song.mp3\n"
            "  gettags show -c title *.flac\n"
            "  gettags cover album.m4a -o cover"
        ),
        formatter_class=RichRawHelpFormatter,
        parents=[parent_parser],
    )

    # Subcommands
    subparsers = parser.add_subparsers(
        title="Commands",
        dest="command",
        metavar="",
    )

    # ──────────────────────────────
    # show
    # ──────────────────────────────
    show_parser = subparsers.add_parser(
        "show",
        help="Show the tags of audio files",
        usage="gettags show <files...> [options]",
        description="Print all tags, a single field, or the common-field summary of each file",
        parents=[parent_parser, read_parser],
        formatter_class=RichHelpFormatter,
    )
    show_parser.add_argument("files", nargs="*", help="Audio files to read")
    show_parser.add_argument(
        "-c",
        "--common-name",
        metavar="NAME",
        help="Show only the tag matching this common name ('help' lists them)",
    )
    show_parser.add_argument(
        "-e",
        "--exact-name",
        metavar="NAME",
        help="Show only the tag with this exact name (e.g. TIT2, ARTIST, nam)",
    )
    show_parser.add_argument(
        "-C",
        "--common-only",
        action="store_true",
        help="Show only the common tags (album, artist, title, ...)",
    )
    show_parser.set_defaults(func=cmd_show)

    # ──────────────────────────────
    # cover
    # ──────────────────────────────
    cover_parser = subparsers.add_parser(
        "cover",
        help="Extract the cover image",
        usage="gettags cover <file> -o <basename> [options]",
        description="Write the embedded front cover to BASENAME.jpg, .png or .gif",
        parents=[parent_parser, read_parser],
        formatter_class=RichHelpFormatter,
    )
    cover_parser.add_argument("file", help="Audio file to read")
    cover_parser.add_argument(
        "-o",
        "--output",
        required=True,
        metavar="BASENAME",
        help="Output file name without extension",
    )
    cover_parser.set_defaults(func=cmd_cover)

    return parser


def main() -> None:
    """Main CLI entry point."""
    parser = build_parser()

    # Parse args
    args = parser.parse_args()

    # Show help if no command is provided
    if not args.command:
        parser.print_help()
        sys.exit(1)

    # Logging setup; --debug is useless without debug logging
    if args.log_level:
        level = args.log_level
    elif args.debug:
        level = "debug"
    else:
        level = "critical"
    try:
        setup_logging(level)
    except ValueError as e:
        parser.error(str(e))

    # Execute command
    try:
        args.func(args)
    except KeyboardInterrupt:
        logging.info("\nOperation cancelled by user")
        sys.exit(130)
    except Exception as e:
        logging.error(f"Error: {e}", exc_info=level == "debug")
        sys.exit(1)


if __name__ == "__main__":
    main()
