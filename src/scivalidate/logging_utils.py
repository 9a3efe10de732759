"""Logging utilities for colorized terminal output.

This module provides a ColoredFormatter and setup function for consistent
logging with visual emphasis on warnings and errors in terminal output.
The library itself never calls :func:`setup_logging`; the CLI does.
"""

from __future__ import annotations

import logging
import sys


class ColoredFormatter(logging.Formatter):
    """Formatter that adds ANSI color codes for WARNING and ERROR levels.

    Colors are only applied when output is to an interactive terminal (TTY).
    When redirecting to a file or pipe, plain text is used.
    """

    COLORS = {
        logging.WARNING: "\033[93m",  # Yellow
        logging.ERROR: "\033[91m",  # Red
        logging.CRITICAL: "\033[91m",
    }
    RESET = "\033[0m"

    def format(self, record: logging.LogRecord) -> str:
        message = super().format(record)
        color = self.COLORS.get(record.levelno)
        if color and sys.stderr.isatty():
            return f"{color}{message}{self.RESET}"
        return message


def setup_logging(quiet: bool = False, debug: bool = False) -> None:
    """Set up logging with colored output for warnings and errors.

    Parameters
    ----------
    quiet : bool, optional
        Show only WARNING and above.
    debug : bool, optional
        Show DEBUG and above. Takes precedence over ``quiet``.

    Examples
    --------
    >>> from scivalidate.logging_utils import setup_logging
    >>> setup_logging(debug=True)
    """
    if debug:
        level = logging.DEBUG
    elif quiet:
        level = logging.WARNING
    else:
        level = logging.INFO

    handler = logging.StreamHandler(sys.stderr)
    fmt = "%(levelname)s %(name)s: %(message)s" if debug else "%(message)s"
    handler.setFormatter(ColoredFormatter(fmt))

    logging.root.handlers = []
    logging.root.addHandler(handler)
    logging.root.setLevel(level)

    # matplotlib is chatty at DEBUG (font manager)
    logging.getLogger("matplotlib").setLevel(logging.WARNING)
