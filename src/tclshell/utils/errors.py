"""
Error types for the tclshell package.
"""

from pathlib import Path
from typing import Optional


class TclShellError(Exception):
    """Base exception for all tclshell errors."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class UsageError(TclShellError):
    """
    Raised when a shell-provided Tcl command is called with bad arguments.

    The message is handed back to the interpreter as the command's error
    result, so it should read like a native Tcl usage message.
    """

    pass


class InterpreterError(TclShellError):
    """Raised when a script fails to evaluate in the Tcl interpreter."""

    def __init__(self, message: str, script: Optional[str] = None) -> None:
        self.script = script
        super().__init__(message)


class ConfigError(TclShellError):
    """Raised when the shell configuration cannot be loaded or is invalid."""

    def __init__(self, message: str, path: Optional[Path] = None) -> None:
        self.path = path
        if path is not None:
            message = f"{path}: {message}"
        super().__init__(message)
