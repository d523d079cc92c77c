"""Lexer run modes and rune constants.

This module defines the lifecycle modes of a lexer run and the reserved
rune values returned by the cursor.
"""

from __future__ import annotations

from enum import Enum, auto
from typing import Final


class RunMode(Enum):
    """How a lexer run is driven.

    A lexer starts IDLE and moves to exactly one of the other modes:
    - BACKGROUND: runner on a worker thread, caller pulls concurrently
    - SYNC: runner completes on the calling thread before any pull
    - LAZY: runner advanced one transition at a time by a generator

    """

    IDLE = auto()  # Constructed, not started
    BACKGROUND = auto()  # start()
    SYNC = auto()  # start_sync()
    LAZY = auto()  # tokenize()


# Returned by next()/peek() at end of input. Not a code point, so it can
# never be decoded from the source.
EOF_RUNE: Final[str] = ""

# Malformed UTF-8 decodes to this, one byte at a time.
RUNE_ERROR: Final[str] = "\ufffd"
