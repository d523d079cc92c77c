"""Exception classes for statelex.

Lexical errors found by a grammar are not exceptions: they travel through
the token stream as a single ERROR token (see Lexer.error). The classes here
cover misuse of the engine and failures inside caller transitions.
"""

from __future__ import annotations


class StatelexError(Exception):
    """Base exception for all statelex errors.

    Subclass this for specific error categories.
    """

    pass


class LexerStateError(StatelexError):
    """The lexer was used in a way its lifecycle does not allow.

    Raised when a run is started twice on the same instance, or when a
    token channel is given an invalid capacity.
    """

    pass


class ChannelClosedError(StatelexError):
    """A token was sent on a channel that has already been closed."""

    pass


class TransitionError(StatelexError):
    """A caller transition raised while the lexer was running.

    The original exception is chained as ``__cause__``.
    """

    def __init__(
        self,
        transition: str,
        position: int,
        line: int,
        message: str | None = None,
    ) -> None:
        """Initialize transition error with the cursor location.

        Args:
            transition: Name of the transition that raised
            position: Byte offset of the cursor when it raised
            line: Line number when it raised (1-indexed)
            message: Description of the failure (optional)
        """
        self.transition = transition
        self.position = position
        self.line = line

        text = f"transition {transition!r} failed at offset {position} (line {line})"
        if message:
            text = f"{text}: {message}"
        super().__init__(text)
