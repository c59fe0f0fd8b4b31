"""
Completion context scanner.

Classifies the text at the end of an input buffer as a command name, a
variable reference or an argument to a command. The scan starts from
scratch on every call: the fragment being typed begins right after the
nearest bracket or brace that is not closed later in the buffer.

Examples:
    "se"                -> COMMAND   base "se"
    "puts $my"          -> VARIABLE  base "my"
    "string ma"         -> ARGUMENT  command "string", base "ma"
    "expr {[format %"   -> ARGUMENT  command "format", base "%"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

OPENERS = frozenset("[{")
CLOSERS = frozenset("]}")

# Same set as C isspace() in the default locale
WHITESPACE = frozenset(" \t\n\v\f\r")

NAMESPACE_QUALIFIER = "::"


class ContextKind(Enum):
    """What the word under the cursor is."""

    COMMAND = auto()
    VARIABLE = auto()
    ARGUMENT = auto()


@dataclass(frozen=True)
class ScanResult:
    """
    Completion context for a single request.

    Attributes:
        kind: Classification of the word being completed
        command: First word of the current fragment; for ARGUMENT context
            this is the registry lookup key (leading "::" removed)
        base: Partial text that candidates must start with
        replacement_start: Buffer offset where candidate text is inserted;
            everything before it is kept verbatim
    """

    kind: ContextKind
    command: str
    base: str
    replacement_start: int


def find_fragment_start(buffer: str) -> int:
    """
    Find where the fragment currently being typed starts.

    Walks backwards keeping a nesting depth (closers increment, openers
    decrement) and stops at the first opener that has no matching closer
    after it. Returns the offset just past that opener, or 0.
    """
    depth = 0
    pos = len(buffer) - 1
    while pos >= 0:
        char = buffer[pos]
        if char in CLOSERS:
            depth += 1
        elif char in OPENERS:
            depth -= 1
        if depth < 0:
            break
        pos -= 1
    return pos + 1


def strip_namespace_qualifier(command: str) -> str:
    """Remove a leading "::" from a command name used as a lookup key."""
    if len(command) > len(NAMESPACE_QUALIFIER) and command.startswith(NAMESPACE_QUALIFIER):
        return command[len(NAMESPACE_QUALIFIER):]
    return command


def scan_context(buffer: str) -> Optional[ScanResult]:
    """
    Determine the completion context at the end of a buffer.

    Returns None when there is nothing to complete: an empty buffer, only
    whitespace after an unmatched opener, or a bare "$".
    """
    if not buffer:
        return None

    end = len(buffer)

    command_start = find_fragment_start(buffer)
    while command_start < end and buffer[command_start] in WHITESPACE:
        command_start += 1

    command_end = command_start
    while command_end < end and buffer[command_end] not in WHITESPACE:
        command_end += 1
    command = buffer[command_start:command_end]

    base_start = end
    while base_start > command_start and buffer[base_start - 1] not in WHITESPACE:
        base_start -= 1

    if base_start == command_start:
        if not command:
            return None
        if not command.startswith("$"):
            return ScanResult(
                kind=ContextKind.COMMAND,
                command=command,
                base=command,
                replacement_start=command_start,
            )

    token = buffer[base_start:]
    if token.startswith("$"):
        base = token[1:]
        if not base:
            return None
        return ScanResult(
            kind=ContextKind.VARIABLE,
            command=command,
            base=base,
            replacement_start=base_start + 1,
        )

    return ScanResult(
        kind=ContextKind.ARGUMENT,
        command=strip_namespace_qualifier(command),
        base=token,
        replacement_start=base_start,
    )
