"""Stream tokens from background workers: lex 1000 sources in parallel."""

from concurrent.futures import ThreadPoolExecutor

from statelex import Lexer
from statelex.charsets import DIGITS

NUMBER = 1


def numbers_state(lexer):
    lexer.accept_run(" ")
    lexer.ignore()
    if not lexer.accept_run(DIGITS):
        return None
    lexer.emit(NUMBER)
    return numbers_state


def count_tokens(source: str) -> int:
    lexer = Lexer(source, numbers_state)
    lexer.start()
    return sum(1 for _ in lexer.tokens())


sources = [" ".join(str(n) for n in range(i, i + 100)) for i in range(1000)]

with ThreadPoolExecutor(max_workers=8) as ex:
    counts = list(ex.map(count_tokens, sources))

print(f"Lexed {len(counts)} sources in parallel")
print("Tokens per source:", counts[0])
