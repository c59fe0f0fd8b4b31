"""
Shell configuration.

Settings are read from a TOML file (tclshell.toml by default):

    [prompt]
    main = "tcl> "
    continuation = "   : "

    [history]
    file = "~/.tclshell_history"
    size = 100

    [editor]
    kind = "prompt_toolkit"     # or "readline", "plain"

    [completion]
    command = "tclshell::add_completion"

    [completion.arguments]
    mycommand = ["-activate", "-deactivate", "-value", "-name"]
"""

from __future__ import annotations

import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Optional

from tclshell.utils.errors import ConfigError

CONFIG_FILE_NAME = "tclshell.toml"

DEFAULT_PROMPT = "> "
DEFAULT_CONTINUATION_PROMPT = ": "
DEFAULT_HISTORY_FILE = Path.home() / ".tclshell_history"
DEFAULT_HISTORY_SIZE = 100
DEFAULT_COMPLETION_COMMAND = "tclshell::add_completion"

EDITOR_KINDS = ("prompt_toolkit", "readline", "plain")


@dataclass
class ShellConfig:
    """
    Configuration for a TclShell and its line editor.

    Attributes:
        prompt: Prompt for fresh input
        continuation_prompt: Prompt while a command spans several lines
        history_file: Where line history is kept (None keeps it in memory)
        history_size: Maximum number of history entries
        editor: Line editor frontend, one of EDITOR_KINDS
        completion_command: Name of the Tcl command scripts use to register
            argument candidates
        arguments: Extra argument candidates registered at startup
    """

    prompt: str = DEFAULT_PROMPT
    continuation_prompt: str = DEFAULT_CONTINUATION_PROMPT
    history_file: Optional[Path] = DEFAULT_HISTORY_FILE
    history_size: int = DEFAULT_HISTORY_SIZE
    editor: str = "prompt_toolkit"
    completion_command: str = DEFAULT_COMPLETION_COMMAND
    arguments: dict[str, list[str]] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if self.editor not in EDITOR_KINDS:
            raise ConfigError(
                f"unknown editor {self.editor!r}, expected one of: {', '.join(EDITOR_KINDS)}"
            )
        if self.history_size <= 0:
            raise ConfigError(f"history size must be positive, got {self.history_size}")

    @classmethod
    def from_mapping(cls, data: dict[str, Any], path: Optional[Path] = None) -> ShellConfig:
        """Build a configuration from parsed TOML data."""
        prompt = _section(data, "prompt", path)
        history = _section(data, "history", path)
        editor = _section(data, "editor", path)
        completion = _section(data, "completion", path)

        kwargs: dict[str, Any] = {}
        if "main" in prompt:
            kwargs["prompt"] = _typed(prompt, "main", str, path)
        if "continuation" in prompt:
            kwargs["continuation_prompt"] = _typed(prompt, "continuation", str, path)
        if "file" in history:
            history_file = _typed(history, "file", str, path)
            kwargs["history_file"] = Path(history_file).expanduser() if history_file else None
        if "size" in history:
            kwargs["history_size"] = _typed(history, "size", int, path)
        if "kind" in editor:
            kwargs["editor"] = _typed(editor, "kind", str, path)
        if "command" in completion:
            kwargs["completion_command"] = _typed(completion, "command", str, path)

        arguments = completion.get("arguments", {})
        if not isinstance(arguments, dict):
            raise ConfigError("[completion.arguments] must be a table", path)
        for command, values in arguments.items():
            if not isinstance(values, list) or not all(isinstance(v, str) for v in values):
                raise ConfigError(
                    f"completion arguments for {command!r} must be a list of strings", path
                )
        kwargs["arguments"] = {command: list(values) for command, values in arguments.items()}

        try:
            return cls(**kwargs)
        except ConfigError as exc:
            raise ConfigError(exc.message, path) from None


def load_config(path: Optional[Path] = None) -> ShellConfig:
    """
    Load the shell configuration.

    Args:
        path: Explicit configuration file; when None, ./tclshell.toml is
            used if it exists, otherwise the defaults

    Raises:
        ConfigError: If the file is missing (explicit path only), unreadable
            or invalid
    """
    if path is None:
        candidate = Path.cwd() / CONFIG_FILE_NAME
        if not candidate.is_file():
            return ShellConfig()
        path = candidate
    elif not path.is_file():
        raise ConfigError("configuration file not found", path)

    try:
        with path.open("rb") as f:
            data = tomllib.load(f)
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"invalid TOML: {exc}", path) from exc
    except OSError as exc:
        raise ConfigError(f"cannot read configuration: {exc}", path) from exc

    return ShellConfig.from_mapping(data, path)


def _section(data: dict[str, Any], name: str, path: Optional[Path]) -> dict[str, Any]:
    section = data.get(name, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{name}] must be a table", path)
    return section


def _typed(section: dict[str, Any], key: str, expected: type, path: Optional[Path]) -> Any:
    value = section[key]
    # bool is an int subclass, but never a valid size
    if not isinstance(value, expected) or (expected is int and isinstance(value, bool)):
        raise ConfigError(f"{key!r} must be of type {expected.__name__}", path)
    return value
