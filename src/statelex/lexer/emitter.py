"""Emitter mixin: boundary operations.

A boundary closes the pending span. emit() turns it into a token, ignore()
discards it. Both advance the line counter over the span, move the span
start up to the cursor and clear the backtracking history.
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from statelex.lexer.channel import TokenChannel
from statelex.lexer.history import RuneStack
from statelex.tokens import Token, TokenType
from statelex.utils.logger import get_logger

logger = get_logger(__name__)


class EmitterMixin:
    """Mixin providing emit, ignore and error."""

    _source: bytes
    _start: int
    _position: int
    _line: int
    _history: RuneStack
    _channel: TokenChannel
    _halted: bool
    _emitted: int

    if TYPE_CHECKING:

        def current(self) -> str:
            """Return the pending span. Implemented by CursorMixin."""

    def emit(self, token_type: int) -> None:
        """Send the pending span to the consumer as a token of token_type.

        The token carries the cursor position and the line number as they
        are before the span's own newlines are counted.
        """
        token = Token(
            type=token_type,
            value=self.current(),
            position=self._position,
            line=self._line,
        )
        self._channel.put(token)
        self._emitted += 1
        self._commit()

    def ignore(self) -> None:
        """Discard the pending span without producing a token."""
        self._commit()

    def error(self, message: str, *args: object) -> None:
        """Report a lexical error and halt the run.

        Args:
            message: Error message, printf-style when args are given
            *args: Values interpolated into message with %

        Returns:
            None, so transitions can ``return lexer.error(...)``.
        """
        if args:
            message = message % args
        logger.debug("lexical error at offset %d (line %d): %s", self._position, self._line, message)
        self._channel.put(
            Token(
                type=TokenType.ERROR,
                value=message,
                position=self._position,
                line=self._line,
            )
        )
        self._emitted += 1
        self._halted = True
        return None

    def _commit(self) -> None:
        """Move the boundary up to the cursor."""
        self._line += self._source.count(b"\n", self._start, self._position)
        self._start = self._position
        self._history.clear()
