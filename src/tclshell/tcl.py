"""
Tcl interpreter backed by tkinter's embedded Tcl (no Tk window is created).
"""

from __future__ import annotations

import itertools
import logging
import tkinter
from collections.abc import Callable
from typing import Any

from tclshell.interpreter import quote_word
from tclshell.utils.errors import InterpreterError, TclShellError

logger = logging.getLogger("tclshell.tcl")

BRIDGE_NAMESPACE = "::tclshell::bridge"

# Python callbacks answer with a two-element list: a return code and a result
_BRIDGE_BODY = """\
lassign [{impl} {{*}}$args] code result
return -code $code $result
"""


class TclInterpreter:
    """
    Interpreter implementation on top of tkinter.Tcl().

    Commands created with create_command are Tcl procs that forward to a
    private Python command, so errors raised in Python reach Tcl scripts
    as ordinary error results that `catch` can intercept.
    """

    def __init__(self) -> None:
        self._tcl = tkinter.Tcl()
        self._bridge_ids = itertools.count(1)

        try:
            self._tcl.eval("encoding system utf-8")
        except tkinter.TclError as exc:
            logger.warning("could not set system encoding to utf-8: %s", exc)

        self._tcl.eval(f"namespace eval {BRIDGE_NAMESPACE} {{}}")

    def evaluate(self, script: str) -> str:
        try:
            return str(self._tcl.eval(script))
        except tkinter.TclError as exc:
            raise InterpreterError(str(exc), script=script) from exc

    def evaluate_list(self, script: str) -> list[str]:
        result = self.evaluate(script)
        try:
            return [str(item) for item in self._tcl.splitlist(result)]
        except tkinter.TclError as exc:
            raise InterpreterError(str(exc), script=script) from exc

    def is_complete(self, script: str) -> bool:
        return bool(self._tcl.getboolean(self._tcl.call("info", "complete", script)))

    def create_command(self, name: str, callback: Callable[..., Any]) -> None:
        impl = f"{BRIDGE_NAMESPACE}::cmd{next(self._bridge_ids)}"

        def bridge(*args: str) -> str:
            try:
                result = callback(*args)
            except TclShellError as exc:
                return f"error {quote_word(exc.message)}"
            return f"ok {quote_word(_to_tcl_string(result))}"

        self._tcl.createcommand(impl, bridge)

        qualifiers = str(self._tcl.call("namespace", "qualifiers", name))
        if qualifiers:
            self._tcl.call("namespace", "eval", qualifiers, "")
        self._tcl.call("proc", name, "args", _BRIDGE_BODY.format(impl=impl))
        logger.debug("created command %s -> %s", name, impl)


def _to_tcl_string(value: Any) -> str:
    """Convert a Python callback result to the text of a Tcl result."""
    if value is None:
        return ""
    if isinstance(value, bool):
        return "1" if value else "0"
    return str(value)
