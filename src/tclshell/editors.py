"""
Line editor frontends.

Available editors:
    prompt_toolkit  full line editing, history and a completion menu
    readline        GNU readline / libedit with tab completion and history
    plain           bare input(), no completion

Each editor takes a completion callback (normally a CompletionSession) and
calls it with the text before the cursor.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Optional

try:
    import readline

    HAS_READLINE = True
except ImportError:
    # readline not available on some platforms (e.g., Windows without pyreadline)
    HAS_READLINE = False

from prompt_toolkit import PromptSession
from prompt_toolkit.completion import CompleteEvent, Completer, Completion
from prompt_toolkit.document import Document
from prompt_toolkit.history import FileHistory, History, InMemoryHistory

from tclshell.completion import CompletionSession
from tclshell.config import DEFAULT_HISTORY_SIZE, EDITOR_KINDS
from tclshell.utils.errors import ConfigError

logger = logging.getLogger("tclshell.editors")


class LineEditor:
    """
    Base class for line editors.

    Subclasses override setup(), read_line() and teardown(). The context
    manager guarantees teardown (history is saved there).
    """

    def setup(self) -> None:
        pass

    def read_line(self, prompt: str) -> str:
        """Read one line; raises EOFError at end of input."""
        return input(prompt)

    def teardown(self) -> None:
        pass

    def __enter__(self) -> LineEditor:
        self.setup()
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.teardown()


class PlainEditor(LineEditor):
    """input() without completion or history."""


# =============================================================================
# readline
# =============================================================================


class ReadlineCompleter:
    """
    readline completer backed by a CompletionSession.

    Word delimiters are cleared so readline hands over the whole line;
    candidates are full replacement lines.
    """

    def __init__(self, completion: CompletionSession) -> None:
        self.completion = completion
        self._matches: list[str] = []

    def complete(self, text: str, state: int) -> Optional[str]:
        """Get the state-th completion for the current line."""
        if state == 0:
            line, begidx = self._line_state(text)
            self._matches = self.matches_for(line, begidx)
        try:
            return self._matches[state]
        except IndexError:
            return None

    def matches_for(self, line: str, begidx: int = 0) -> list[str]:
        """Candidates for `line`, trimmed to the part readline replaces."""
        keep = line[:begidx]
        return [
            candidate[begidx:]
            for candidate in self.completion.complete(line)
            if candidate.startswith(keep)
        ]

    def _line_state(self, text: str) -> tuple[str, int]:
        if not HAS_READLINE:
            return text, 0
        endidx = readline.get_endidx()
        return readline.get_line_buffer()[:endidx], readline.get_begidx()


class ReadlineEditor(LineEditor):
    """readline-based editor with persistent history."""

    def __init__(
        self,
        completion: CompletionSession,
        history_file: Optional[Path] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self.completer = ReadlineCompleter(completion)
        self.history_file = history_file
        self.history_size = history_size

    def setup(self) -> None:
        if not HAS_READLINE:
            logger.warning("readline is not available; completion is disabled")
            return

        readline.set_completer(self.completer.complete)
        readline.set_completer_delims("")
        if "libedit" in (readline.__doc__ or ""):
            readline.parse_and_bind("bind ^I rl_complete")
        else:
            readline.parse_and_bind("tab: complete")
        readline.set_history_length(self.history_size)

        if self.history_file is not None and self.history_file.exists():
            try:
                readline.read_history_file(str(self.history_file))
            except OSError as exc:
                logger.warning("could not read history file %s: %s", self.history_file, exc)

    def teardown(self) -> None:
        if not HAS_READLINE:
            return
        readline.set_completer(None)
        if self.history_file is None:
            return
        try:
            readline.write_history_file(str(self.history_file))
        except OSError as exc:
            logger.warning("could not write history file %s: %s", self.history_file, exc)


# =============================================================================
# prompt_toolkit
# =============================================================================


class TclCompleter(Completer):
    """prompt_toolkit completer backed by a CompletionSession."""

    def __init__(self, completion: CompletionSession) -> None:
        self.completion = completion

    def get_completions(
        self, document: Document, complete_event: CompleteEvent
    ) -> Iterable[Completion]:
        text_before_cursor = document.text_before_cursor
        result = self.completion.resolve(text_before_cursor)

        # Replace from the insertion point up to the cursor
        replace_len = len(text_before_cursor) - result.replacement_start
        for candidate in result.candidates:
            yield Completion(candidate, start_position=-replace_len)


class PromptToolkitEditor(LineEditor):
    """prompt_toolkit-based editor; history entries are appended to a file."""

    def __init__(
        self,
        completion: CompletionSession,
        history_file: Optional[Path] = None,
        history_size: int = DEFAULT_HISTORY_SIZE,
    ) -> None:
        self.completer = TclCompleter(completion)
        self.history_file = history_file
        self.history_size = history_size
        self._session: Optional[PromptSession] = None

    def _make_history(self) -> History:
        if self.history_file is None:
            return InMemoryHistory()
        self.history_file.parent.mkdir(parents=True, exist_ok=True)
        return FileHistory(str(self.history_file))

    def setup(self) -> None:
        self._session = PromptSession(
            history=self._make_history(),
            completer=self.completer,
            complete_while_typing=False,
        )

    def read_line(self, prompt: str) -> str:
        if self._session is None:
            self.setup()
        return self._session.prompt(prompt)

    def teardown(self) -> None:
        # FileHistory writes every accepted line immediately
        self._session = None


def make_editor(
    kind: str,
    completion: CompletionSession,
    history_file: Optional[Path] = None,
    history_size: int = DEFAULT_HISTORY_SIZE,
) -> LineEditor:
    """Create the line editor named by `kind` (one of EDITOR_KINDS)."""
    if kind == "prompt_toolkit":
        return PromptToolkitEditor(completion, history_file, history_size)
    if kind == "readline":
        return ReadlineEditor(completion, history_file, history_size)
    if kind == "plain":
        return PlainEditor()
    raise ConfigError(f"unknown editor {kind!r}, expected one of: {', '.join(EDITOR_KINDS)}")
