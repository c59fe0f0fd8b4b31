"""
Candidate generation for a scanned completion context.

Commands and variables are discovered by evaluating small introspection
scripts in the live interpreter; arguments come from the registry.
"""

from __future__ import annotations

import logging

from tclshell.completion.registry import ArgumentRegistry
from tclshell.completion.scanner import ContextKind, ScanResult
from tclshell.interpreter import Interpreter, quote_word
from tclshell.utils.errors import InterpreterError

logger = logging.getLogger("tclshell.completion")

COMMAND_QUERIES = ("info commands", "info procs")
VARIABLE_QUERIES = ("info vars",)


class CandidateGenerator:
    """Produces sorted, deduplicated candidates for a ScanResult."""

    def __init__(self, registry: ArgumentRegistry, interpreter: Interpreter) -> None:
        self.registry = registry
        self.interpreter = interpreter

    def generate(self, context: ScanResult) -> list[str]:
        """Get the candidates for a context; failures yield no candidates."""
        if not context.base:
            return []

        if context.kind is ContextKind.COMMAND:
            candidates = self._query_all(COMMAND_QUERIES, context.base)
        elif context.kind is ContextKind.VARIABLE:
            candidates = self._query_all(VARIABLE_QUERIES, context.base)
        else:
            candidates = self.argument_candidates(context.command, context.base)

        return sorted(set(candidates))

    def argument_candidates(self, command: str, base: str) -> list[str]:
        """Get registered arguments of a command that start with base."""
        if not base:
            return []
        return [arg for arg in self.registry.lookup(command) if arg.startswith(base)]

    def _query_all(self, queries: tuple[str, ...], base: str) -> list[str]:
        names: list[str] = []
        for query in queries:
            names.extend(self._query(query, base))
        return names

    def _query(self, query: str, base: str) -> list[str]:
        script = f"{query} {quote_word(base)}*"
        try:
            return self.interpreter.evaluate_list(script)
        except InterpreterError as exc:
            logger.debug("completion query %r failed: %s", script, exc)
            return []
