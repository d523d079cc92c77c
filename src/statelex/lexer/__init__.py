"""State-function lexer engine for statelex.

Architecture:
lexer/
├── __init__.py          # Re-exports Lexer, TokenChannel, RunMode, rune constants
├── core.py              # Lexer class (mixin composition + state runner)
├── cursor.py            # CursorMixin: next/peek/backup/accept, UTF-8 decoding
├── emitter.py           # EmitterMixin: emit/ignore/error
├── history.py           # RuneStack backtracking history
├── channel.py           # TokenChannel closeable FIFO
└── modes.py             # RunMode enum, EOF_RUNE, RUNE_ERROR

Usage:
    >>> from statelex.lexer import Lexer
    >>> lexer = Lexer("123.hello", number_state)
    >>> lexer.start()
    >>> while (token := lexer.next_token()) is not None:
    ...     print(token)
[1] 123
[2] .
[3] hello

"""

from statelex.lexer.channel import TokenChannel
from statelex.lexer.core import Lexer
from statelex.lexer.cursor import decode_rune
from statelex.lexer.history import RuneStack
from statelex.lexer.modes import EOF_RUNE, RUNE_ERROR, RunMode

__all__ = [
    "EOF_RUNE",
    "RUNE_ERROR",
    "Lexer",
    "RunMode",
    "RuneStack",
    "TokenChannel",
    "decode_rune",
]
