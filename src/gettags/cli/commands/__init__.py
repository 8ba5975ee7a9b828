"""CLI command implementations.

Each module in this package implements a specific gettags subcommand:
    show.py: Print all tags, one field, or the common-field summary
    cover.py: Extract the embedded front cover image
"""

from .cover import cmd_cover
from .show import cmd_show

__all__ = [
    "cmd_cover",
    "cmd_show",
]
