"""
Rich logging for docpress.

Provides colorful console logging using the rich library. Library modules
only create loggers with ``logging.getLogger(__name__)``; handlers are
installed here, by applications such as the CLI.
"""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Union

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

ROOT_LOGGER_NAME = "docpress"


def setup_logging(
    level: Union[str, int] = "INFO",
    console: Optional[Console] = None,
    show_path: bool = False,
) -> logging.Logger:
    """Install a RichHandler on the ``docpress`` logger.

    Calling it again replaces the previous handler instead of stacking a
    second one.

    Args:
        level: Log level name or number
        console: Console to log to (defaults to stderr)
        show_path: Show the emitting module path next to each record

    Returns:
        The configured ``docpress`` logger
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(level)
    for handler in list(logger.handlers):
        if isinstance(handler, RichHandler):
            logger.removeHandler(handler)

    handler = RichHandler(
        console=console or Console(stderr=True),
        show_time=True,
        show_path=show_path,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter(fmt="%(message)s", datefmt="[%X]"))
    logger.addHandler(handler)
    return logger


def set_debug(enabled: bool) -> None:
    """Raise or restore the verbosity of the ``docpress`` logger without touching handlers."""
    logger = logging.getLogger(ROOT_LOGGER_NAME)
    logger.setLevel(logging.DEBUG if enabled else logging.NOTSET)


def render_table(title: str, data: Dict[str, Any], console: Optional[Console] = None) -> None:
    """Display key/value data in a rich table."""
    table = Table(title=title)
    table.add_column("Property", style="cyan")
    table.add_column("Value", style="magenta")
    for key, value in data.items():
        table.add_row(str(key), str(value))
    (console or Console()).print(table)
