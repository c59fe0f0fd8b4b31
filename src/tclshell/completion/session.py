"""
Completion session: the entry point used by line editors.

A CompletionSession is bound to one registry and one interpreter. Calling
it with the current buffer returns full replacement lines, so a bound
session can be handed to an editor as its completion callback.
"""

from __future__ import annotations

from dataclasses import dataclass

from tclshell.completion.generator import CandidateGenerator
from tclshell.completion.registry import ArgumentRegistry
from tclshell.completion.scanner import ScanResult, scan_context
from tclshell.interpreter import Interpreter


@dataclass(frozen=True)
class CompletionResult:
    """
    Result of one completion request.

    Attributes:
        replacement_start: Buffer offset where candidates are inserted
        prefix: Buffer text before replacement_start, kept verbatim
        candidates: Sorted candidate words
        context: Scan result, or None when nothing could be completed
    """

    replacement_start: int
    prefix: str
    candidates: tuple[str, ...] = ()
    context: ScanResult | None = None

    @property
    def lines(self) -> list[str]:
        """Full replacement lines, one per candidate."""
        return [self.prefix + candidate for candidate in self.candidates]

    def __bool__(self) -> bool:
        return bool(self.candidates)


class CompletionSession:
    """Runs scanner and generator for each completion request."""

    def __init__(self, registry: ArgumentRegistry, interpreter: Interpreter) -> None:
        self.registry = registry
        self.generator = CandidateGenerator(registry, interpreter)

    def resolve(self, buffer: str) -> CompletionResult:
        """Compute candidates and the replacement point for a buffer."""
        context = scan_context(buffer)
        if context is None:
            return CompletionResult(replacement_start=len(buffer), prefix=buffer)

        candidates = self.generator.generate(context)
        return CompletionResult(
            replacement_start=context.replacement_start,
            prefix=buffer[: context.replacement_start],
            candidates=tuple(candidates),
            context=context,
        )

    def complete(self, buffer: str) -> list[str]:
        """Get full replacement lines for a buffer, sorted."""
        if not buffer:
            return []
        return sorted(self.resolve(buffer).lines)

    __call__ = complete
