"""
Interpreter protocol.

The shell talks to Tcl only through the small Interpreter protocol below:
evaluate a textual script, evaluate a script returning a Tcl list, check
whether a script is a complete command and expose Python callables as Tcl
commands. tclshell.tcl.TclInterpreter is the real implementation.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from typing import Any, Protocol

_SPECIAL_CHARS = re.compile(r'[\s\\\[\]{}"$;]')
_ESCAPES = {"\n": "\\n", "\t": "\\t", "\r": "\\r", "\v": "\\v", "\f": "\\f"}


def quote_word(text: str) -> str:
    """
    Quote text so Tcl parses it as exactly one literal word.

    Special characters are backslash-escaped; the empty string becomes {}.
    """
    if not text:
        return "{}"
    return _SPECIAL_CHARS.sub(
        lambda match: _ESCAPES.get(match.group(), "\\" + match.group()), text
    )


class Interpreter(Protocol):
    """Operations the shell needs from a Tcl interpreter."""

    def evaluate(self, script: str) -> str:
        """Evaluate a script and return its result, raising InterpreterError."""
        ...

    def evaluate_list(self, script: str) -> list[str]:
        """Evaluate a script whose result is a Tcl list."""
        ...

    def is_complete(self, script: str) -> bool:
        """Check whether a script has no unclosed braces, brackets or quotes."""
        ...

    def create_command(self, name: str, callback: Callable[..., Any]) -> None:
        """
        Expose a Python callable as a Tcl command.

        The callable receives the command's words as strings. A
        TclShellError it raises becomes the Tcl error of the command.
        """
        ...
