"""Backtracking history for the cursor.

Every rune read since the last boundary is pushed here with its byte
width, so backup() knows exactly how far to retreat. The stack is cleared
at each boundary, which makes backing up past an emitted token impossible.
"""

from __future__ import annotations

from statelex.lexer.modes import EOF_RUNE


class RuneStack:
    """LIFO stack of (rune, byte_width) pairs.

    Popping an empty stack yields (EOF_RUNE, 0), a zero-width entry the
    cursor treats as nothing to undo.

    Thread Safety:
        Not thread-safe. Owned by a single Lexer and only touched by the
        thread currently running its transitions.

    """

    __slots__ = ("_entries",)

    def __init__(self) -> None:
        self._entries: list[tuple[str, int]] = []

    def push(self, rune: str, width: int) -> None:
        self._entries.append((rune, width))

    def pop(self) -> tuple[str, int]:
        if not self._entries:
            return EOF_RUNE, 0
        return self._entries.pop()

    def clear(self) -> None:
        self._entries.clear()

    def __len__(self) -> int:
        return len(self._entries)

    def __repr__(self) -> str:
        return f"RuneStack({[rune for rune, _ in self._entries]!r})"
