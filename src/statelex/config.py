"""ContextVar-based lexer configuration for statelex.

Provides context-local configuration using Python's ContextVars (PEP 567).
A Lexer captures the active config when it is constructed, so a config set
around construction applies to that lexer's whole run, including a
background worker thread.

Thread Safety:
    ContextVars are context-local by design. Each thread has independent
    storage, so no locks are needed.

Usage:
    from statelex.config import LexerConfig, lexer_config_context

    with lexer_config_context(LexerConfig(buffer_size=64)):
        lexer = Lexer(source, start_state)
    lexer.start()

    # Or pass it explicitly
    lexer = Lexer(source, start_state, config=LexerConfig(daemon=False))

"""

from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass


@dataclass(frozen=True, slots=True)
class LexerConfig:
    """Immutable lexer configuration.

    Attributes:
        buffer_size: Explicit token channel bound for background runs.
            None derives the bound from the source length.
        buffer_divisor: Background bound is len(source) // buffer_divisor
            (at least 1) when buffer_size is None.
        thread_name: Name given to background worker threads.
        daemon: Whether background workers are daemon threads.

    """

    buffer_size: int | None = None
    buffer_divisor: int = 2
    thread_name: str = "statelex-runner"
    daemon: bool = True

    def channel_capacity(self, source_length: int) -> int:
        """Token channel bound for a background run over source_length bytes."""
        if self.buffer_size is not None:
            return self.buffer_size
        return max(1, source_length // max(1, self.buffer_divisor))

    @classmethod
    def from_dict(cls, config_dict: dict) -> "LexerConfig":
        """Create LexerConfig from dictionary.

        Only includes keys that are valid LexerConfig fields; unknown keys
        are silently ignored.

        Example:
            >>> config = LexerConfig.from_dict({
            ...     "buffer_size": 16,
            ...     "unknown_key": "ignored",
            ... })
            >>> config.buffer_size
            16

        """
        valid_fields = {f.name for f in cls.__dataclass_fields__.values()}
        filtered = {k: v for k, v in config_dict.items() if k in valid_fields}
        return cls(**filtered)


# Module-level default config (reused, never recreated)
_DEFAULT_CONFIG: LexerConfig = LexerConfig()

_lexer_config: ContextVar[LexerConfig] = ContextVar(
    "lexer_config",
    default=_DEFAULT_CONFIG,
)


def get_lexer_config() -> LexerConfig:
    """Get current lexer configuration (context-local)."""
    return _lexer_config.get()


def set_lexer_config(config: LexerConfig) -> None:
    """Set lexer configuration for current context.

    Args:
        config: LexerConfig instance to use for this context.

    """
    _lexer_config.set(config)


def reset_lexer_config() -> None:
    """Reset to default configuration."""
    _lexer_config.set(_DEFAULT_CONFIG)


@contextmanager
def lexer_config_context(config: LexerConfig) -> Iterator[None]:
    """Context manager for temporary config changes.

    Restores the previous config even if an exception is raised.

    Example:
        >>> with lexer_config_context(LexerConfig(buffer_size=1)):
        ...     lexer = Lexer("a b c", word_state)
        >>> # Automatically reset to previous config

    """
    previous = _lexer_config.get()
    _lexer_config.set(config)
    try:
        yield
    finally:
        _lexer_config.set(previous)


__all__ = [
    "LexerConfig",
    "get_lexer_config",
    "set_lexer_config",
    "reset_lexer_config",
    "lexer_config_context",
]
