"""Token and TokenType definitions for the statelex engine.

The lexer produces a stream of Token objects that the caller consumes.
Each Token has a type tag, the text it covers, and where it was emitted.

Token types are caller-defined positive integers (typically an IntEnum).
Two tags are reserved by the engine:

- TokenType.EOF (0): end of input, produced only by skip_whitespace()
- TokenType.ERROR (-1): lexical error, produced only by error()

Thread Safety:
Token is frozen (immutable) and safe to share across threads.
TokenType is an enum (inherently immutable).

"""

from dataclasses import dataclass
from enum import IntEnum


class TokenType(IntEnum):
    """Token type tags reserved by the engine.

    Being an IntEnum, members compare equal to their bare integer values,
    so ``token.type == 0`` and ``token.type == TokenType.EOF`` agree.
    Caller token types must stay in the positive range.

    """

    ERROR = -1  # Lexical error reported through Lexer.error()
    EOF = 0  # End of input reached inside skip_whitespace()


@dataclass(frozen=True, slots=True)
class Token:
    """A token produced by the lexer.

    Attributes:
        type: Caller-defined tag, or one of the reserved TokenType members
        value: Source text between the last boundary and the emit point
            (the error message for ERROR tokens)
        position: Byte offset of the cursor at emission
        line: Line number at emission (1-indexed)

    Thread Safety:
        Frozen dataclass ensures immutability for safe sharing.

    """

    type: int
    value: str
    position: int
    line: int

    @property
    def is_error(self) -> bool:
        """True for the token produced by Lexer.error()."""
        return self.type == TokenType.ERROR

    @property
    def is_eof(self) -> bool:
        """True for the end-of-input token."""
        return self.type == TokenType.EOF

    def __str__(self) -> str:
        return f"[{int(self.type)}] {self.value}"

    def __repr__(self) -> str:
        """Compact repr for debugging."""
        val = self.value
        if len(val) > 20:
            val = val[:17] + "..."
        name = getattr(self.type, "name", self.type)
        return f"Token({name}, {val!r}, {self.position}@{self.line})"
