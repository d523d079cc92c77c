"""Tests for rune decoding and cursor navigation.

These drive the cursor directly on an unstarted lexer; no transitions run.
"""

from __future__ import annotations

import pytest

from statelex.charsets import DIGITS, LETTERS
from statelex.lexer import EOF_RUNE, RUNE_ERROR, Lexer, decode_rune


class TestDecodeRune:
    """Verify single code point decoding from UTF-8 bytes."""

    @pytest.mark.parametrize(
        ("text", "width"),
        [("a", 1), ("é", 2), ("€", 3), ("😀", 4)],
    )
    def test_widths(self, text: str, width: int) -> None:
        assert decode_rune(text.encode(), 0) == (text, width)

    def test_end_of_buffer(self) -> None:
        assert decode_rune(b"ab", 2) == (EOF_RUNE, 0)
        assert decode_rune(b"", 0) == (EOF_RUNE, 0)

    @pytest.mark.parametrize(
        "data",
        [
            b"\xff",  # never valid
            b"\x80",  # lone continuation byte
            b"\xc0\xaf",  # overlong "/"
            b"\xe2\x82",  # truncated euro sign
            b"\xed\xa0\x80",  # UTF-16 surrogate
            b"\xf4\x90\x80\x80",  # above U+10FFFF
        ],
    )
    def test_malformed_is_one_byte_replacement(self, data: bytes) -> None:
        assert decode_rune(data, 0) == (RUNE_ERROR, 1)


class TestMovingThroughString:
    """Verify next() and current() advance together."""

    def test_next_and_current(self) -> None:
        lexer = Lexer("123", None)
        for expected_span, expected_rune in [
            ("1", "1"),
            ("12", "2"),
            ("123", "3"),
            ("123", EOF_RUNE),
        ]:
            assert lexer.next() == expected_rune
            assert lexer.current() == expected_span

    def test_next_at_eof_does_not_advance(self) -> None:
        lexer = Lexer("x", None)
        lexer.next()
        assert lexer.next() == EOF_RUNE
        assert lexer.next() == EOF_RUNE
        assert lexer.position == 1

    def test_positions_are_byte_offsets(self) -> None:
        lexer = Lexer("é€a", None)
        lexer.next()
        assert lexer.position == 2
        lexer.next()
        assert lexer.position == 5
        assert lexer.next() == "a"
        assert lexer.position == 6

    def test_bytes_source(self) -> None:
        lexer = Lexer("héllo".encode(), None)
        assert [lexer.next() for _ in range(6)] == ["h", "é", "l", "l", "o", EOF_RUNE]

    def test_malformed_input_passes_through(self) -> None:
        lexer = Lexer(b"a\xffb", None)
        assert lexer.next() == "a"
        assert lexer.next() == RUNE_ERROR
        assert lexer.position == 2
        assert lexer.next() == "b"
        assert lexer.current() == "a\ufffdb"

    def test_lone_surrogate_in_str_decodes_as_errors(self) -> None:
        lexer = Lexer("a\ud800", None)
        assert lexer.next() == "a"
        assert [lexer.next() for _ in range(3)] == [RUNE_ERROR] * 3
        assert lexer.next() == EOF_RUNE


class TestBackup:
    """Verify backup() retreats by exactly one read."""

    def test_backup_single(self) -> None:
        lexer = Lexer("1", None)
        assert lexer.next() == "1"
        assert lexer.current() == "1"
        lexer.backup()
        assert lexer.current() == ""
        assert lexer.position == 0

    def test_backup_multibyte(self) -> None:
        lexer = Lexer("a😀", None)
        lexer.next()
        lexer.next()
        assert lexer.position == 5
        lexer.backup()
        assert lexer.position == 1
        assert lexer.current() == "a"

    def test_backup_over_malformed_byte(self) -> None:
        lexer = Lexer(b"\xe2\x82", None)
        lexer.next()
        lexer.next()
        lexer.backup()
        assert lexer.position == 1

    def test_backup_after_eof_read_is_zero_width(self) -> None:
        lexer = Lexer("ab", None)
        lexer.next()
        lexer.next()
        assert lexer.next() == EOF_RUNE
        lexer.backup()
        assert lexer.position == 2
        lexer.backup()
        assert lexer.position == 1

    def test_backup_with_empty_history_is_noop(self) -> None:
        lexer = Lexer("abc", None)
        lexer.backup()
        assert lexer.position == 0

    def test_backup_never_crosses_boundary(self) -> None:
        lexer = Lexer("abc", None)
        lexer.next()
        lexer.next()
        lexer.ignore()
        lexer.backup()
        lexer.backup()
        assert lexer.position == 2
        assert lexer.span_start == 2


class TestPeek:
    """Verify peek() is non-destructive."""

    def test_peek_repeatedly(self) -> None:
        lexer = Lexer("héllo", None)
        lexer.next()
        for _ in range(5):
            assert lexer.peek() == "é"
        assert lexer.position == 1
        assert lexer.current() == "h"

    def test_peek_at_eof(self) -> None:
        lexer = Lexer("a", None)
        lexer.next()
        assert lexer.peek() == EOF_RUNE
        assert lexer.peek() == EOF_RUNE
        assert lexer.position == 1
        # The read of "a" is still undoable
        lexer.backup()
        assert lexer.position == 0


class TestAccept:
    """Verify single-rune acceptance."""

    def test_accept_member(self) -> None:
        lexer = Lexer("abc", None)
        assert lexer.accept("xa") is True
        assert lexer.position == 1

    def test_reject_non_member(self) -> None:
        lexer = Lexer("abc", None)
        assert lexer.accept(DIGITS) is False
        assert lexer.position == 0
        assert lexer.current() == ""

    def test_accept_at_eof(self) -> None:
        lexer = Lexer("", None)
        # "" is a substring of every str, but EOF is never a member
        assert lexer.accept("abc") is False
        assert lexer.position == 0

    def test_accept_with_frozenset(self) -> None:
        lexer = Lexer("7x", None)
        assert lexer.accept(DIGITS) is True
        assert lexer.accept(DIGITS) is False
        assert lexer.current() == "7"


class TestAcceptRun:
    """Verify maximal-run acceptance."""

    def test_run_stops_at_non_member(self) -> None:
        lexer = Lexer("123abc", None)
        assert lexer.accept_run(DIGITS) == 3
        assert lexer.position == 3
        assert lexer.peek() == "a"

    def test_run_to_eof(self) -> None:
        lexer = Lexer("123", None)
        assert lexer.accept_run("0123456789") == 3
        assert lexer.current() == "123"
        # EOF read was undone, the digits were not
        lexer.backup()
        assert lexer.current() == "12"

    def test_empty_run(self) -> None:
        lexer = Lexer("abc", None)
        assert lexer.accept_run(DIGITS) == 0
        assert lexer.position == 0

    def test_unicode_run(self) -> None:
        lexer = Lexer("ééé!", None)
        assert lexer.accept_run("é") == 3
        assert lexer.position == 6

    def test_consecutive_runs(self) -> None:
        lexer = Lexer("abc123", None)
        assert lexer.accept_run(LETTERS) == 3
        assert lexer.accept_run(DIGITS) == 3
        assert lexer.current() == "abc123"
