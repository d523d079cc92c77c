"""Logging helpers for statelex.

Every statelex module logs through a stdlib logger under the "statelex"
namespace. Run lifecycle (start, finish, counts) goes to DEBUG; a failed
background run goes to ERROR with its traceback.

The library never installs handlers on import. Applications configure
logging themselves, or call enable_debug_logging() while developing a
grammar to watch runs as they happen.

Example:
    >>> from statelex.utils.logger import enable_debug_logging
    >>> handler = enable_debug_logging()
    >>> lex("123", number_state)
    statelex.lexer.core DEBUG lexer run started: mode=SYNC, 3 bytes
    ...
    >>> disable_debug_logging(handler)
"""

from __future__ import annotations

import logging
from typing import TextIO

ROOT_LOGGER_NAME = "statelex"

# Thread name is included since background runs log from their workers
DEBUG_FORMAT = "%(name)s %(levelname)s [%(threadName)s] %(message)s"


def get_logger(name: str) -> logging.Logger:
    """Get a logger under the statelex namespace.

    Args:
        name: Logger name (typically __name__); prefixed with "statelex."
            unless it already lives in that namespace

    Example:
        >>> get_logger("mygrammar").name
        'statelex.mygrammar'
    """
    if not (name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + ".")):
        name = f"{ROOT_LOGGER_NAME}.{name}"
    return logging.getLogger(name)


def enable_debug_logging(stream: TextIO | None = None) -> logging.Handler:
    """Send statelex DEBUG records to stream (stderr by default).

    Returns:
        The installed handler, to pass to disable_debug_logging().
    """
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter(DEBUG_FORMAT))
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.addHandler(handler)
    root.setLevel(logging.DEBUG)
    return handler


def disable_debug_logging(handler: logging.Handler) -> None:
    """Remove a handler installed by enable_debug_logging()."""
    root = logging.getLogger(ROOT_LOGGER_NAME)
    root.removeHandler(handler)
    handler.close()
    if not root.handlers:
        root.setLevel(logging.NOTSET)
