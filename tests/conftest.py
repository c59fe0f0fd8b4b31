"""
Pytest configuration and shared fixtures for tclshell tests.
"""

import fnmatch
import re
from dataclasses import dataclass, field
from typing import Any, Callable

import pytest

from tclshell.completion import ArgumentRegistry, CompletionSession
from tclshell.shell import TclShell
from tclshell.utils.errors import InterpreterError, TclShellError

_QUERY = re.compile(r"info (commands|procs|vars) (.*)", re.DOTALL)


@dataclass
class FakeInterpreter:
    """
    In-memory stand-in for the Tcl interpreter.

    Introspection queries ("info commands/procs/vars PATTERN") are answered
    from the name lists; other scripts are looked up in `results` and
    `errors`, or dispatched to commands created through create_command.
    """

    commands: list[str] = field(default_factory=list)
    procs: list[str] = field(default_factory=list)
    variables: list[str] = field(default_factory=list)
    results: dict[str, str] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    failing_queries: set[str] = field(default_factory=set)
    evaluated: list[str] = field(default_factory=list)
    created: dict[str, Callable[..., Any]] = field(default_factory=dict)

    def evaluate(self, script: str) -> str:
        self.evaluated.append(script)
        key = script.strip()
        if key in self.errors:
            raise InterpreterError(self.errors[key], script=script)

        words = key.split()
        if words and words[0] in self.created:
            try:
                result = self.created[words[0]](*words[1:])
            except TclShellError as exc:
                raise InterpreterError(exc.message, script=script) from exc
            if result is None:
                return ""
            if isinstance(result, bool):
                return "1" if result else "0"
            return str(result)

        return self.results.get(key, "")

    def evaluate_list(self, script: str) -> list[str]:
        self.evaluated.append(script)
        match = _QUERY.fullmatch(script)
        if match is None:
            raise InterpreterError(f"unexpected query: {script}", script=script)

        kind, pattern = match.groups()
        if kind in self.failing_queries:
            raise InterpreterError(f"info {kind} failed", script=script)

        pattern = re.sub(r"\\(.)", r"\1", pattern)
        pool = {"commands": self.commands, "procs": self.procs, "vars": self.variables}[kind]
        return [name for name in pool if fnmatch.fnmatchcase(name, pattern)]

    def is_complete(self, script: str) -> bool:
        depth = 0
        for char in script:
            if char in "{[":
                depth += 1
            elif char in "}]":
                depth -= 1
        return depth <= 0

    def create_command(self, name: str, callback: Callable[..., Any]) -> None:
        self.created[name] = callback


@pytest.fixture
def interpreter():
    """Fake interpreter with a small set of commands, procs and variables."""
    return FakeInterpreter(
        commands=["set", "seek", "socket", "string", "puts", "proc", "format"],
        procs=["setup", "my_proc"],
        variables=["my_var", "myList", "other", "env"],
    )


@pytest.fixture
def registry():
    """Registry seeded with the built-in argument table."""
    return ArgumentRegistry.with_builtins()


@pytest.fixture
def completion(registry, interpreter):
    """Completion session over the fake interpreter."""
    return CompletionSession(registry, interpreter)


@pytest.fixture
def shell_factory(interpreter):
    """Factory fixture for creating shells on the fake interpreter."""

    def _create_shell(**kwargs) -> TclShell:
        return TclShell(interpreter=interpreter, **kwargs)

    return _create_shell
