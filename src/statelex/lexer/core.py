"""State-function lexer engine.

The caller supplies a graph of transitions: callables that take the lexer,
consume runes, emit or ignore the span they consumed and return the next
transition. Returning None ends the run. The engine drives that graph and
streams the resulting tokens through a TokenChannel.

Three ways to run a lexer:
- start(): transitions run on a worker thread while the caller pulls
- start_sync(): transitions run to completion before the first pull
- tokenize(): transitions run on the caller's thread, one step per pull

Thread Safety:
Lexer instances are single-use. Create one per source buffer.
Cursor, history and source are only touched by the thread running the
transitions; the token channel is the only shared structure.

"""

from __future__ import annotations

import contextvars
import threading
import weakref
from collections.abc import Iterator

from statelex.config import LexerConfig, get_lexer_config
from statelex.errors import LexerStateError, StatelexError, TransitionError
from statelex.lexer.channel import TokenChannel
from statelex.lexer.cursor import CursorMixin
from statelex.lexer.emitter import EmitterMixin
from statelex.lexer.history import RuneStack
from statelex.lexer.modes import RunMode
from statelex.profiling import LexAccumulator, get_lex_accumulator
from statelex.protocols import Transition
from statelex.tokens import Token
from statelex.utils.logger import get_logger

logger = get_logger(__name__)


class Lexer(
    # Character navigation and backtracking
    CursorMixin,
    # Boundaries: emit, ignore, error
    EmitterMixin,
):
    """State-function lexer over an immutable source buffer.

    Usage:
            >>> def number_state(lexer):
            ...     lexer.accept_run(DIGITS)
            ...     lexer.emit(NUMBER)
            ...     return None
            >>> lexer = Lexer("123", number_state)
            >>> lexer.start()
            >>> lexer.next_token()
        Token(NUMBER, '123', 3@1)
            >>> lexer.next_token() is None
        True

    Thread Safety:
        Lexer instances are single-use. Create one per source buffer.
        Only the token channel is shared between producer and consumers.

    """

    __slots__ = (
        "_source",
        "_start",  # Byte offset where the pending span begins
        "_position",  # Byte offset of the next unread byte
        "_line",
        "_history",
        "_start_state",
        "_config",
        "_channel",
        "_mode",
        "_halted",  # Set by error(); stops the runner after the current step
        "_emitted",
        "_transitions",
        "_worker",
        "_failure",  # Exception raised by a background run, re-raised on pull
        "_accumulator",
        "_finished",
    )

    def __init__(
        self,
        source: str | bytes,
        start_state: Transition | None,
        *,
        config: LexerConfig | None = None,
    ) -> None:
        """Initialize lexer with a source buffer and its first transition.

        Args:
            source: Text to scan. str is encoded as UTF-8; bytes are
                scanned as UTF-8 as-is.
            start_state: First transition, or None for an empty run
            config: Lexer configuration (defaults to the active context
                config)
        """
        if isinstance(source, str):
            # surrogatepass keeps lone surrogates; they decode as RUNE_ERROR
            source = source.encode("utf-8", errors="surrogatepass")
        self._source = bytes(source)
        self._start = 0
        self._position = 0
        self._line = 1
        self._history = RuneStack()
        self._start_state = start_state
        self._config = config if config is not None else get_lexer_config()

        # Unbounded until a background run applies the configured bound
        self._channel = TokenChannel()
        self._mode = RunMode.IDLE
        self._halted = False

        # Run bookkeeping
        self._emitted = 0
        self._transitions = 0
        self._worker: threading.Thread | None = None
        self._failure: StatelexError | None = None
        self._accumulator: LexAccumulator | None = None
        self._finished = False

    def __repr__(self) -> str:
        return (
            f"<Lexer {self._mode.name} span={self._start}:{self._position} "
            f"line={self._line} of {len(self._source)} bytes>"
        )

    # =========================================================================
    # Read-only state
    # =========================================================================

    @property
    def source(self) -> bytes:
        return self._source

    @property
    def position(self) -> int:
        """Byte offset of the next unread byte."""
        return self._position

    @property
    def span_start(self) -> int:
        """Byte offset where the pending span begins."""
        return self._start

    @property
    def line(self) -> int:
        """Line number at the last boundary (1-indexed)."""
        return self._line

    @property
    def mode(self) -> RunMode:
        return self._mode

    @property
    def halted(self) -> bool:
        """True once error() has been called."""
        return self._halted

    @property
    def config(self) -> LexerConfig:
        return self._config

    # =========================================================================
    # Running
    # =========================================================================

    def start(self) -> None:
        """Run the transitions on a background thread.

        Tokens become available to next_token() and tokens() as they are
        emitted. The channel is bounded, so a consumer that stops pulling
        early leaves the worker blocked.

        Raises:
            LexerStateError: The lexer was already started, or the
                configured channel bound is below 1. A rejected bound
                leaves the lexer idle.
        """
        self._ensure_idle()
        self._channel.set_capacity(self._config.channel_capacity(len(self._source)))
        self._begin(RunMode.BACKGROUND)
        context = contextvars.copy_context()
        self._worker = threading.Thread(
            target=context.run,
            args=(self._run_background,),
            name=self._config.thread_name,
            daemon=self._config.daemon,
        )
        self._worker.start()

    def start_sync(self) -> None:
        """Run the transitions to completion on the calling thread.

        The channel stays unbounded, so every token is queued before this
        returns.

        Raises:
            LexerStateError: The lexer was already started.
            TransitionError: A transition raised.
        """
        self._begin(RunMode.SYNC)
        try:
            self._run()
        finally:
            self._finish()

    def tokenize(self) -> Iterator[Token]:
        """Run the transitions lazily on the calling thread.

        Each pull runs transitions only until at least one token is
        available, then yields the tokens in emission order. An iterator
        discarded before it is exhausted still closes the channel.

        Returns:
            Iterator over the tokens.

        Raises:
            LexerStateError: The lexer was already started.
            TransitionError: A transition raised (during iteration), after
                the tokens it emitted have been yielded.
        """
        self._begin(RunMode.LAZY)
        iterator = self._iterate()
        # A generator that never started skips its finally block
        weakref.finalize(iterator, self._finish)
        return iterator

    def join(self, timeout: float | None = None) -> bool:
        """Wait for a background run to finish.

        Args:
            timeout: Seconds to wait, or None to wait indefinitely

        Returns:
            True if no background run is still in progress.
        """
        if self._worker is None:
            return True
        self._worker.join(timeout)
        return not self._worker.is_alive()

    # =========================================================================
    # Consuming
    # =========================================================================

    def next_token(self) -> Token | None:
        """Pull the next token, blocking until one is available.

        Returns:
            The next token in emission order, or None once the stream is
            closed. Every pull after that also returns None.

        Raises:
            LexerStateError: Nothing can ever arrive (not started), or the
                lexer is being driven by tokenize().
            TransitionError: The background run failed; raised once every
                token emitted before the failure has been pulled.
        """
        if self._mode is RunMode.LAZY:
            raise LexerStateError("lexer is running lazily; iterate tokenize() instead")
        if self._mode is RunMode.IDLE and not len(self._channel):
            raise LexerStateError("lexer has not been started")
        token = self._channel.get()
        if token is None and self._failure is not None:
            raise self._failure
        return token

    def tokens(self) -> TokenChannel:
        """The token channel itself, for iteration-style consumers."""
        return self._channel

    # =========================================================================
    # Runner internals
    # =========================================================================

    def _ensure_idle(self) -> None:
        if self._mode is not RunMode.IDLE:
            raise LexerStateError(
                f"lexer already started ({self._mode.name}); create a new Lexer per run"
            )

    def _begin(self, mode: RunMode) -> None:
        self._ensure_idle()
        self._mode = mode
        self._accumulator = get_lex_accumulator()
        logger.debug("lexer run started: mode=%s, %d bytes", mode.name, len(self._source))

    def _step(self, state: Transition) -> Transition | None:
        """Invoke one transition, wrapping foreign exceptions."""
        self._transitions += 1
        try:
            return state(self)
        except StatelexError:
            raise
        except Exception as exc:
            raise TransitionError(
                _transition_name(state), self._position, self._line, str(exc)
            ) from exc

    def _run(self) -> None:
        state = self._start_state
        while state is not None and not self._halted:
            state = self._step(state)

    def _run_background(self) -> None:
        try:
            self._run()
        except StatelexError as exc:
            logger.error("background lexer run failed", exc_info=True)
            # Recorded before the channel closes so a pull never misses it
            self._failure = exc
        finally:
            self._finish()

    def _iterate(self) -> Iterator[Token]:
        state = self._start_state
        try:
            while state is not None and not self._halted:
                try:
                    state = self._step(state)
                except StatelexError:
                    # Tokens emitted by the failing transition come first
                    yield from self._channel.drain()
                    raise
                yield from self._channel.drain()
        finally:
            self._finish()
        yield from self._channel.drain()

    def _finish(self) -> None:
        if self._finished:
            return
        self._finished = True
        self._channel.close()
        logger.debug(
            "lexer run finished: mode=%s, %d tokens, %d transitions%s",
            self._mode.name,
            self._emitted,
            self._transitions,
            " (halted by error)" if self._halted else "",
        )
        if self._accumulator is not None:
            self._accumulator.record_run(len(self._source), self._emitted, self._transitions)


def _transition_name(state: Transition) -> str:
    return getattr(state, "__qualname__", None) or repr(state)
