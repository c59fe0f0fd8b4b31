"""
Interactive Tcl shell.

Runs Tcl commands typed at a prompt or read from a script file, buffering
input until it forms a complete Tcl command. Tab completion is provided by
a CompletionSession bound to the shell's registry and interpreter.

Example session:
    > proc greet {name} {
    :     return "hello $name"
    : }
    > greet world
    hello world
    > string ma<TAB>
    string map    string match
    > exit 0
"""

from __future__ import annotations

import logging
import os
import sys
from collections.abc import Callable, Iterable
from pathlib import Path
from typing import Any, Optional

from tclshell.completion import ArgumentRegistry, CompletionSession
from tclshell.config import (
    DEFAULT_CONTINUATION_PROMPT,
    DEFAULT_PROMPT,
    ShellConfig,
)
from tclshell.editors import LineEditor, make_editor
from tclshell.interpreter import Interpreter
from tclshell.utils.errors import InterpreterError, UsageError

logger = logging.getLogger("tclshell.shell")

EXIT_USAGE = 'wrong # args: should be "exit ?returnCode?"'


# =============================================================================
# ANSI Color Codes
# =============================================================================


class Colors:
    """ANSI escape codes for colored terminal output."""

    RED = "\033[91m"
    RESET = "\033[0m"

    @classmethod
    def disable(cls) -> None:
        """Disable all colors."""
        for attr in ["RED", "RESET"]:
            setattr(cls, attr, "")


def _init_colors() -> None:
    """Initialize colors based on terminal capabilities."""
    if not sys.stdout.isatty() or os.environ.get("NO_COLOR"):
        Colors.disable()


_init_colors()


# =============================================================================
# Shell
# =============================================================================


class TclShell:
    """
    Tcl shell session.

    Owns the interpreter, the argument registry and the completion session.
    The `exit` command is replaced so that it ends the shell loop with a
    pending return code instead of terminating the process.
    """

    def __init__(
        self,
        interpreter: Optional[Interpreter] = None,
        config: Optional[ShellConfig] = None,
        registry: Optional[ArgumentRegistry] = None,
    ) -> None:
        if interpreter is None:
            # tkinter is only needed for the real interpreter
            from tclshell.tcl import TclInterpreter

            interpreter = TclInterpreter()

        self.config = config or ShellConfig()
        self.interpreter = interpreter
        if registry is None:
            registry = ArgumentRegistry.with_builtins(self.config.arguments)
        self.registry = registry
        self.completion = CompletionSession(self.registry, self.interpreter)

        self.prompt = self.config.prompt
        self.continuation_prompt = self.config.continuation_prompt

        self.return_code = 0
        self.exit_requested = False
        self._pending: list[str] = []

        self.interpreter.create_command("exit", self._cmd_exit)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def set_prompt(self, main: Optional[str] = None, continuation: Optional[str] = None) -> None:
        """Set the prompts; None restores the default."""
        self.prompt = DEFAULT_PROMPT if main is None else main
        self.continuation_prompt = (
            DEFAULT_CONTINUATION_PROMPT if continuation is None else continuation
        )

    @property
    def current_prompt(self) -> str:
        """Prompt for the next line, depending on pending multi-line input."""
        return self.continuation_prompt if self._pending else self.prompt

    @property
    def has_pending_input(self) -> bool:
        return bool(self._pending)

    def add_command(
        self,
        name: str,
        handler: Callable[..., Any],
        arguments: Optional[Iterable[str]] = None,
    ) -> None:
        """
        Add a Tcl command implemented in Python.

        Args:
            name: Command name in the interpreter
            handler: Called with the command's words as strings; may raise
                UsageError to report a Tcl error
            arguments: Argument candidates for completion, or None for none
        """
        self.interpreter.create_command(name, handler)
        if arguments is not None:
            self.registry.register(name, arguments)

    def provide_completion_command(self, name: Optional[str] = None) -> str:
        """Expose argument registration to scripts; returns the command name."""
        name = name or self.config.completion_command
        self.interpreter.create_command(name, self.registry.register_from_script)
        logger.debug("completion command provided as %s", name)
        return name

    # -------------------------------------------------------------------------
    # Commands
    # -------------------------------------------------------------------------

    def _cmd_exit(self, *args: str) -> None:
        """exit ?returnCode?"""
        if len(args) > 1:
            raise UsageError(EXIT_USAGE)

        return_code = 0
        if args:
            try:
                return_code = int(args[0])
            except ValueError:
                raise UsageError(f'expected integer but got "{args[0]}"') from None

        self.return_code = return_code
        self.exit_requested = True

    # -------------------------------------------------------------------------
    # Evaluation
    # -------------------------------------------------------------------------

    def push(self, line: str) -> bool:
        """
        Add a line of interactive input.

        The accumulated lines are evaluated once they form a complete Tcl
        command. Returns True while more input is needed.
        """
        self._pending.append(line)
        source = "\n".join(self._pending)
        if not self.interpreter.is_complete(source):
            return True

        self._pending.clear()
        if source.strip():
            self.execute(source)
        return False

    def reset_input(self) -> None:
        """Discard pending multi-line input."""
        self._pending.clear()

    def execute(self, source: str, echo_result: bool = True) -> bool:
        """
        Evaluate a complete script.

        Errors are printed to stderr; a non-empty result is printed to
        stdout when echo_result is set. Returns True on success.
        """
        try:
            result = self.interpreter.evaluate(source)
        except InterpreterError as e:
            if e.message:
                print(f"{Colors.RED}{e.message}{Colors.RESET}", file=sys.stderr)
            return False

        if echo_result and result:
            print(result)
        return True

    # -------------------------------------------------------------------------
    # Main Loops
    # -------------------------------------------------------------------------

    def run(self, editor: Optional[LineEditor] = None) -> int:
        """
        Interactive loop.

        Ends on end-of-file or after the `exit` command. Returns the exit
        code set by `exit` (0 by default).
        """
        if editor is None:
            editor = make_editor(
                self.config.editor,
                self.completion,
                history_file=self.config.history_file,
                history_size=self.config.history_size,
            )

        with editor:
            while not self.exit_requested:
                try:
                    line = editor.read_line(self.current_prompt)
                except KeyboardInterrupt:
                    self.reset_input()
                    print()
                    continue
                except EOFError:
                    print()
                    break

                self.push(line)

        self.reset_input()
        return self.return_code

    def run_file(self, path: Path | str, verbose: bool = False) -> bool:
        """
        Execute a script file command by command.

        Args:
            path: Script to execute
            verbose: Echo each command and its result

        Returns:
            False if the file cannot be read or a command fails (execution
            stops at the first failure), True otherwise.
        """
        path = Path(path)
        try:
            source = path.read_text(encoding="utf-8")
        except OSError as e:
            print(
                f"{Colors.RED}Error: failed to open file {path}: {e.strerror}{Colors.RESET}",
                file=sys.stderr,
            )
            return False

        chunk = ""
        for line in source.splitlines(keepends=True):
            if self.exit_requested:
                return True

            chunk += line
            if not line.endswith(("\n", "\r")):
                continue
            if not self.interpreter.is_complete(chunk):
                continue

            if not self._run_chunk(chunk, verbose):
                return False
            chunk = ""

        # Text after the last newline, or a command left unterminated
        if chunk and not self.exit_requested:
            return self._run_chunk(chunk, verbose)
        return True

    def _run_chunk(self, chunk: str, verbose: bool) -> bool:
        if not chunk.strip():
            return True
        if verbose:
            sys.stdout.write(chunk if chunk.endswith("\n") else chunk + "\n")
        return self.execute(chunk, echo_result=verbose)
