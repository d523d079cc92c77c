"""Tests for the token channel.

Uses real threads to exercise blocking puts and concurrent consumers.
"""

from __future__ import annotations

import threading
from concurrent.futures import ThreadPoolExecutor

import pytest

from statelex.errors import ChannelClosedError, LexerStateError
from statelex.lexer import TokenChannel
from statelex.tokens import Token


def _token(n: int) -> Token:
    return Token(type=1, value=str(n), position=n, line=1)


class TestChannelBasics:
    """Single-threaded queue semantics."""

    def test_fifo(self) -> None:
        channel = TokenChannel()
        for n in range(5):
            channel.put(_token(n))
        assert [channel.get().value for _ in range(5)] == ["0", "1", "2", "3", "4"]

    def test_get_after_close_drains_then_returns_none(self) -> None:
        channel = TokenChannel()
        channel.put(_token(1))
        channel.close()
        assert channel.get() == _token(1)
        assert channel.get() is None
        assert channel.get() is None

    def test_put_after_close_raises(self) -> None:
        channel = TokenChannel()
        channel.close()
        with pytest.raises(ChannelClosedError):
            channel.put(_token(1))

    def test_close_twice(self) -> None:
        channel = TokenChannel()
        channel.close()
        channel.close()
        assert channel.closed

    def test_iteration_stops_at_close(self) -> None:
        channel = TokenChannel()
        for n in range(3):
            channel.put(_token(n))
        channel.close()
        assert [t.value for t in channel] == ["0", "1", "2"]
        assert list(channel) == []

    def test_drain(self) -> None:
        channel = TokenChannel(capacity=10)
        channel.put(_token(1))
        channel.put(_token(2))
        assert channel.drain() == [_token(1), _token(2)]
        assert channel.drain() == []
        assert len(channel) == 0
        assert not channel.closed

    @pytest.mark.parametrize("capacity", [0, -1])
    def test_invalid_capacity(self, capacity: int) -> None:
        with pytest.raises(LexerStateError):
            TokenChannel(capacity=capacity)
        with pytest.raises(LexerStateError):
            TokenChannel().set_capacity(capacity)

    def test_set_capacity_keeps_queued_tokens(self) -> None:
        channel = TokenChannel()
        for n in range(3):
            channel.put(_token(n))
        channel.set_capacity(1)
        assert channel.capacity == 1
        assert len(channel) == 3


class TestChannelConcurrency:
    """Blocking behaviour with real producer and consumer threads."""

    def test_bounded_producer_waits_for_consumer(self) -> None:
        channel = TokenChannel(capacity=1)
        count = 200

        def produce() -> None:
            for n in range(count):
                channel.put(_token(n))
            channel.close()

        producer = threading.Thread(target=produce)
        producer.start()
        received = [t.position for t in channel]
        producer.join(timeout=5.0)

        assert received == list(range(count))
        assert not producer.is_alive()

    def test_full_channel_blocks_put(self) -> None:
        channel = TokenChannel(capacity=1)
        channel.put(_token(0))
        done = threading.Event()

        def produce() -> None:
            channel.put(_token(1))
            done.set()

        producer = threading.Thread(target=produce, daemon=True)
        producer.start()
        assert not done.wait(timeout=0.1)
        assert channel.get() == _token(0)
        assert done.wait(timeout=5.0)
        assert channel.get() == _token(1)

    def test_close_wakes_waiting_consumers(self) -> None:
        channel = TokenChannel()

        with ThreadPoolExecutor(max_workers=4) as executor:
            futures = [executor.submit(channel.get) for _ in range(4)]
            channel.close()
            assert [f.result(timeout=5.0) for f in futures] == [None] * 4

    def test_multiple_consumers_see_each_token_once(self) -> None:
        channel = TokenChannel(capacity=8)
        count = 1000
        results: list[list[int]] = [[], [], []]

        def consume(index: int) -> None:
            for token in channel:
                results[index].append(token.position)

        consumers = [threading.Thread(target=consume, args=(i,)) for i in range(3)]
        for t in consumers:
            t.start()
        for n in range(count):
            channel.put(_token(n))
        channel.close()
        for t in consumers:
            t.join(timeout=5.0)

        merged = sorted(p for r in results for p in r)
        assert merged == list(range(count))
        # Each consumer observes its share in emission order
        for r in results:
            assert r == sorted(r)
