"""
Logging setup for the command line front end.
"""

import logging

from rich.console import Console
from rich.logging import RichHandler

LOG_FORMAT = "%(name)s: %(message)s"


def setup_logging(level: str = "INFO", console: Console = None) -> None:
    """
    Route log records through Rich on stderr.

    Args:
        level: Standard level name
        console: Console to write to (defaults to a stderr console)
    """
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        rich_tracebacks=True,
    )
    logging.basicConfig(
        level=level.upper(),
        format=LOG_FORMAT,
        datefmt="[%X]",
        handlers=[handler],
        force=True,
    )
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
