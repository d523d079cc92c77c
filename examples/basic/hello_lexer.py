"""Lex a tiny expression language with three transitions and zero deps."""

from enum import IntEnum

from statelex import lex
from statelex.charsets import DIGITS, IDENT_CONTINUE, IDENT_START


class Kind(IntEnum):
    NUMBER = 1
    IDENT = 2
    OP = 3


def any_state(lexer):
    lexer.skip_whitespace()
    lexer.ignore()
    rune = lexer.peek()
    if rune == "":
        return None
    if rune in DIGITS:
        return number_state
    if rune in IDENT_START:
        return ident_state
    if lexer.accept("+-*/()="):
        lexer.emit(Kind.OP)
        return any_state
    return lexer.error("unexpected %r", rune)


def number_state(lexer):
    lexer.accept_run(DIGITS)
    lexer.emit(Kind.NUMBER)
    return any_state


def ident_state(lexer):
    lexer.next()
    lexer.accept_run(IDENT_CONTINUE)
    lexer.emit(Kind.IDENT)
    return any_state


for token in lex("total = (price + 12) * qty", any_state):
    print(repr(token))
