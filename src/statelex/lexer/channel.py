"""Closeable FIFO carrying tokens from the runner to the caller.

The channel is the only structure shared between the thread running
transitions and the threads consuming tokens. All of its state is guarded
by a single lock with two conditions (not empty / not full).

Semantics:
- put() blocks while the channel is full, and raises once it is closed
- get() blocks only while the channel is empty and still open
- once closed and drained, get() returns None on every call

Usage:
    >>> channel = TokenChannel(capacity=4)
    >>> channel.put(token)
    >>> channel.close()
    >>> for token in channel:
    ...     print(token)

"""

from __future__ import annotations

import threading
from collections import deque
from collections.abc import Iterator

from statelex.errors import ChannelClosedError, LexerStateError
from statelex.tokens import Token


class TokenChannel:
    """Bounded (or unbounded) closeable token queue.

    Args:
        capacity: Maximum queued tokens before put() blocks; None for
            an unbounded channel.

    Thread Safety:
        Safe for one producer and any number of consumers. Tokens are
        handed out in strict FIFO order.

    """

    __slots__ = ("_items", "_capacity", "_closed", "_lock", "_not_empty", "_not_full")

    def __init__(self, capacity: int | None = None) -> None:
        _check_capacity(capacity)
        self._items: deque[Token] = deque()
        self._capacity = capacity
        self._closed = False
        self._lock = threading.Lock()
        self._not_empty = threading.Condition(self._lock)
        self._not_full = threading.Condition(self._lock)

    @property
    def capacity(self) -> int | None:
        return self._capacity

    @property
    def closed(self) -> bool:
        with self._lock:
            return self._closed

    def set_capacity(self, capacity: int | None) -> None:
        """Change the bound applied to subsequent put() calls.

        Tokens already queued are kept even if they exceed the new bound.
        """
        _check_capacity(capacity)
        with self._lock:
            self._capacity = capacity
            self._not_full.notify_all()

    def put(self, token: Token) -> None:
        """Enqueue a token, waiting for room if the channel is full.

        Raises:
            ChannelClosedError: The channel was already closed.
        """
        with self._not_full:
            while (
                not self._closed
                and self._capacity is not None
                and len(self._items) >= self._capacity
            ):
                self._not_full.wait()
            if self._closed:
                raise ChannelClosedError("cannot send on a closed token channel")
            self._items.append(token)
            self._not_empty.notify()

    def get(self) -> Token | None:
        """Dequeue the next token.

        Returns:
            The oldest queued token, or None once the channel is closed
            and empty.
        """
        with self._not_empty:
            while not self._items and not self._closed:
                self._not_empty.wait()
            if not self._items:
                return None
            token = self._items.popleft()
            self._not_full.notify()
            return token

    def drain(self) -> list[Token]:
        """Take every queued token without blocking."""
        with self._lock:
            tokens = list(self._items)
            self._items.clear()
            self._not_full.notify_all()
            return tokens

    def close(self) -> None:
        """Mark end of stream and wake every waiting consumer.

        Closing twice is harmless.
        """
        with self._lock:
            self._closed = True
            self._not_empty.notify_all()
            self._not_full.notify_all()

    def __iter__(self) -> Iterator[Token]:
        while (token := self.get()) is not None:
            yield token

    def __len__(self) -> int:
        with self._lock:
            return len(self._items)

    def __repr__(self) -> str:
        state = "closed" if self._closed else "open"
        return f"TokenChannel({len(self._items)}/{self._capacity}, {state})"


def _check_capacity(capacity: int | None) -> None:
    if capacity is not None and capacity < 1:
        raise LexerStateError(f"token channel capacity must be at least 1, got {capacity}")
