"""Cursor mixin: rune decoding, lookahead and backtracking.

The source is held as UTF-8 bytes and decoded one code point at a time.
Every successful read is recorded on the history stack so it can be undone
with backup() until the next boundary (emit or ignore).

Malformed input is not an error here: any byte that does not start a valid
UTF-8 sequence decodes as RUNE_ERROR with a width of one byte, and the
caller's transitions decide what to do with it.
"""

from __future__ import annotations

from collections.abc import Container
from typing import TYPE_CHECKING

from statelex.lexer.history import RuneStack
from statelex.lexer.modes import EOF_RUNE, RUNE_ERROR
from statelex.tokens import TokenType


def _sequence_width(lead: int) -> int:
    """Byte length implied by a UTF-8 lead byte, or 0 if it cannot lead."""
    if lead < 0x80:
        return 1
    if 0xC2 <= lead <= 0xDF:
        return 2
    if 0xE0 <= lead <= 0xEF:
        return 3
    if 0xF0 <= lead <= 0xF4:
        return 4
    return 0


def decode_rune(source: bytes, pos: int) -> tuple[str, int]:
    """Decode the code point starting at pos.

    Args:
        source: UTF-8 encoded buffer
        pos: Byte offset to decode from

    Returns:
        (rune, width). (EOF_RUNE, 0) at or past the end of the buffer,
        (RUNE_ERROR, 1) for an invalid or truncated sequence.
    """
    if pos >= len(source):
        return EOF_RUNE, 0
    width = _sequence_width(source[pos])
    if width == 0:
        return RUNE_ERROR, 1
    if width == 1:
        return chr(source[pos]), 1
    try:
        # Strict decoding rejects overlongs, surrogates and > U+10FFFF
        return source[pos : pos + width].decode("utf-8"), width
    except UnicodeDecodeError:
        return RUNE_ERROR, 1


class CursorMixin:
    """Mixin providing character-level navigation over the source.

    State lives on the Lexer:
        _source: UTF-8 source buffer (never mutated)
        _start: Byte offset where the pending span begins
        _position: Byte offset of the next unread byte
        _history: Runes read since the last boundary
    """

    _source: bytes
    _start: int
    _position: int
    _history: RuneStack

    if TYPE_CHECKING:

        def emit(self, token_type: int) -> None:
            """Emit the pending span as a token. Implemented by EmitterMixin."""

    def current(self) -> str:
        """Return the pending span (from the last boundary to the cursor)."""
        return self._source[self._start : self._position].decode("utf-8", errors="replace")

    def next(self) -> str:
        """Read one rune and advance past it.

        Returns:
            The decoded rune, or EOF_RUNE at end of input (position
            unchanged).
        """
        rune, width = decode_rune(self._source, self._position)
        self._position += width
        # EOF is recorded too (zero width) so backup() undoes this read only
        self._history.push(rune, width)
        return rune

    def peek(self) -> str:
        """Return the next rune without consuming it."""
        rune = self.next()
        self.backup()
        return rune

    def backup(self) -> None:
        """Undo the most recent read.

        Does nothing when no reads happened since the last boundary; the
        cursor never moves before the start of the pending span.
        """
        _, width = self._history.pop()
        if width:
            self._position = max(self._position - width, self._start)

    def accept(self, valid: Container[str]) -> bool:
        """Consume the next rune if it is in valid.

        Args:
            valid: Acceptable runes (a str or a set of one-char strings)

        Returns:
            True if a rune was consumed.
        """
        rune = self.next()
        if rune != EOF_RUNE and rune in valid:
            return True
        self.backup()
        return False

    def accept_run(self, valid: Container[str]) -> int:
        """Consume the longest run of runes from valid.

        Returns:
            Number of runes consumed.
        """
        count = 0
        while True:
            rune = self.next()
            if rune == EOF_RUNE or rune not in valid:
                break
            count += 1
        self.backup()
        return count

    def skip_whitespace(self) -> None:
        """Consume consecutive whitespace runes.

        Reaching end of input while skipping emits a TokenType.EOF token
        carrying the pending span.
        """
        while True:
            rune = self.next()
            if rune == EOF_RUNE:
                self.emit(TokenType.EOF)
                return
            if not rune.isspace():
                self.backup()
                return
