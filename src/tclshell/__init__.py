"""
tclshell - an interactive Tcl shell with context-sensitive tab completion.

Tcl commands, procedures and variables are completed from the live
interpreter; arguments of known commands come from a registry that is
pre-seeded with the built-in Tcl vocabulary and can be extended from
Python or from Tcl scripts.
"""

from tclshell.completion import (
    ArgumentRegistry,
    CompletionSession,
    ContextKind,
    ScanResult,
    scan_context,
)
from tclshell.config import ShellConfig, load_config
from tclshell.shell import TclShell

__version__ = "0.1.0"
__all__ = [
    "ArgumentRegistry",
    "CompletionSession",
    "ContextKind",
    "ScanResult",
    "scan_context",
    "ShellConfig",
    "load_config",
    "TclShell",
]
