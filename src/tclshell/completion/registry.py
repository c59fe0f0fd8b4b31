"""
Argument candidate registry.

Maps Tcl command names to the argument strings offered when completing
words after that command. Registering a command replaces its candidates.
"""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from typing import Optional

from tclshell.completion.builtins import BUILTIN_ARGUMENTS
from tclshell.utils.errors import UsageError

REGISTER_USAGE = (
    "wrong # args: expected at least command name and 1 possible argument"
)


@dataclass
class ArgumentRegistry:
    """
    Store of per-command argument candidates.

    Attributes:
        entries: Map from exact command name to its sorted, deduplicated
            argument candidates
    """

    entries: dict[str, tuple[str, ...]] = field(default_factory=dict)

    @classmethod
    def with_builtins(
        cls, extra: Optional[Mapping[str, Iterable[str]]] = None
    ) -> ArgumentRegistry:
        """Create a registry seeded with the built-in Tcl command table."""
        registry = cls()
        for command, arguments in BUILTIN_ARGUMENTS.items():
            registry.register(command, arguments)
        if extra:
            for command, arguments in extra.items():
                registry.register(command, arguments)
        return registry

    def register(self, command: str, arguments: Iterable[str]) -> None:
        """Replace the argument candidates for a command."""
        self.entries[str(command)] = tuple(sorted({str(arg) for arg in arguments}))

    def register_from_script(self, *words: str) -> bool:
        """
        Register candidates on behalf of a Tcl script.

        Args:
            words: The command name followed by one or more argument strings

        Raises:
            UsageError: If fewer than a command name and one argument are given
        """
        if len(words) < 2:
            raise UsageError(REGISTER_USAGE)
        command, *arguments = words
        self.register(command, arguments)
        return True

    def lookup(self, command: str) -> tuple[str, ...]:
        """Get the candidates for a command, or an empty tuple if unknown."""
        return self.entries.get(command, ())

    def commands(self) -> list[str]:
        """Get all registered command names, sorted."""
        return sorted(self.entries)

    def __contains__(self, command: object) -> bool:
        return command in self.entries

    def __len__(self) -> int:
        return len(self.entries)
