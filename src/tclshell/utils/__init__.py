"""
tclshell utilities package.

Common error types shared across the shell, completion engine and CLI.
"""

from tclshell.utils.errors import (
    ConfigError,
    InterpreterError,
    TclShellError,
    UsageError,
)

__all__ = [
    "TclShellError",
    "UsageError",
    "InterpreterError",
    "ConfigError",
]
