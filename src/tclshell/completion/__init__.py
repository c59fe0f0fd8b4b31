"""
Context-sensitive tab completion for Tcl input.

Pipeline: scan_context() classifies the end of the buffer, the
CandidateGenerator collects names from the interpreter or the
ArgumentRegistry, and the CompletionSession reattaches the buffer prefix.
"""

from tclshell.completion.builtins import BUILTIN_ARGUMENTS
from tclshell.completion.generator import CandidateGenerator
from tclshell.completion.registry import ArgumentRegistry
from tclshell.completion.scanner import ContextKind, ScanResult, scan_context
from tclshell.completion.session import CompletionResult, CompletionSession

__all__ = [
    "BUILTIN_ARGUMENTS",
    "ArgumentRegistry",
    "CandidateGenerator",
    "CompletionResult",
    "CompletionSession",
    "ContextKind",
    "ScanResult",
    "scan_context",
]
