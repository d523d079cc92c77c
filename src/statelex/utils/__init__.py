"""Utility modules for statelex.

Provides:
- logger: get_logger and opt-in debug output for lexer runs
"""

from statelex.utils.logger import disable_debug_logging, enable_debug_logging, get_logger

__all__ = ["disable_debug_logging", "enable_debug_logging", "get_logger"]
