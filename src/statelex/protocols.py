"""Protocols for statelex.

Defines the contract for caller-supplied transitions.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

if TYPE_CHECKING:
    from statelex.lexer.core import Lexer


class Transition(Protocol):
    """One state of a caller's grammar.

    A transition reads from the lexer (next, peek, accept, ...), closes the
    span it consumed (emit or ignore), and returns the transition to run
    next. Returning None ends the run.

    Plain functions satisfy this protocol:

        def number_state(lexer: Lexer) -> Transition | None:
            lexer.accept_run(DIGITS)
            lexer.emit(NUMBER)
            return operator_state

    Thread Safety:
        A transition is only ever called by the thread running its lexer.
        Keep per-run state on the lexer or in closures, not in globals.

    """

    def __call__(self, lexer: Lexer) -> Transition | None: ...
