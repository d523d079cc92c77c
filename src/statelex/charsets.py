"""Character sets for accept() and accept_run().

All sets are frozensets for:
- O(1) membership testing (vs O(n) for strings)
- Immutability (thread-safe)
- Module-level caching (no per-call allocation)

Usage:
    from statelex.charsets import DIGITS

    lexer.accept_run(DIGITS)
"""

BINARY_DIGITS: frozenset[str] = frozenset("01")
OCTAL_DIGITS: frozenset[str] = frozenset("01234567")
DIGITS: frozenset[str] = frozenset("0123456789")
HEX_DIGITS: frozenset[str] = DIGITS | frozenset("abcdefABCDEF")

LOWERCASE: frozenset[str] = frozenset("abcdefghijklmnopqrstuvwxyz")
UPPERCASE: frozenset[str] = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZ")
LETTERS: frozenset[str] = LOWERCASE | UPPERCASE
ALNUM: frozenset[str] = LETTERS | DIGITS

# ASCII identifiers: letter or underscore first, then letters, digits, underscores
IDENT_START: frozenset[str] = LETTERS | frozenset("_")
IDENT_CONTINUE: frozenset[str] = IDENT_START | DIGITS

# ASCII whitespace; skip_whitespace() uses the wider str.isspace()
WHITESPACE: frozenset[str] = frozenset(" \t\n\r\f\v")
BLANKS: frozenset[str] = frozenset(" \t")
NEWLINES: frozenset[str] = frozenset("\r\n")
