"""
statelex: state-function lexing engine for Python

A small, reusable core for hand-written tokenizers. You describe the grammar
as a graph of transition functions; statelex supplies the cursor, the
backtracking history, the state runner and a thread-safe token stream.

Quick Start:
    >>> from statelex import Lexer, lex
    >>> from statelex.charsets import DIGITS
    >>>
    >>> NUMBER = 1
    >>>
    >>> def number_state(lexer):
    ...     lexer.accept_run(DIGITS)
    ...     lexer.emit(NUMBER)
    ...     return None
    >>>
    >>> lex("123", number_state)
    [Token(1, '123', 3@1)]

    >>> # Or stream tokens while a worker thread produces them
    >>> lexer = Lexer("123", number_state)
    >>> lexer.start()
    >>> lexer.next_token()
    Token(1, '123', 3@1)
    >>> lexer.next_token() is None
    True

Errors:
    A transition reports a lexical error with ``return lexer.error(...)``.
    The consumer receives one token whose type is TokenType.ERROR, then the
    stream closes.
"""

from statelex.config import (
    LexerConfig,
    get_lexer_config,
    lexer_config_context,
    reset_lexer_config,
    set_lexer_config,
)
from statelex.errors import (
    ChannelClosedError,
    LexerStateError,
    StatelexError,
    TransitionError,
)
from statelex.lexer import EOF_RUNE, RUNE_ERROR, Lexer, RunMode, TokenChannel
from statelex.profiling import LexAccumulator, get_lex_accumulator, profiled_lex
from statelex.protocols import Transition
from statelex.tokens import Token, TokenType

__version__ = "0.1.0"


def lex(
    source: str | bytes,
    start_state: Transition | None,
    *,
    config: LexerConfig | None = None,
) -> list[Token]:
    """Run a grammar over source synchronously and collect its tokens.

    Args:
        source: Text to scan
        start_state: First transition of the grammar
        config: Lexer configuration (defaults to the active context config)

    Returns:
        Every token in emission order, including a trailing ERROR token if
        the grammar reported one.

    Raises:
        TransitionError: A transition raised.

    Example:
        >>> tokens = lex("123.hello", number_state)
        >>> [t.value for t in tokens]
        ['123', '.', 'hello']

    """
    lexer = Lexer(source, start_state, config=config)
    lexer.start_sync()
    return list(lexer.tokens())


__all__ = [
    # Engine
    "Lexer",
    "RunMode",
    "TokenChannel",
    "Transition",
    "lex",
    # Tokens and runes
    "Token",
    "TokenType",
    "EOF_RUNE",
    "RUNE_ERROR",
    # Configuration
    "LexerConfig",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
    # Profiling
    "LexAccumulator",
    "get_lex_accumulator",
    "profiled_lex",
    # Errors
    "StatelexError",
    "LexerStateError",
    "ChannelClosedError",
    "TransitionError",
    "__version__",
]
