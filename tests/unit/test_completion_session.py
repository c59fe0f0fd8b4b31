"""
Unit tests for the completion session: full replacement lines handed to
line editors.
"""

import pytest

from tclshell.completion import ContextKind


class TestComplete:
    """Tests for CompletionSession.complete."""

    def test_command_lines(self, completion):
        assert completion.complete("se") == ["seek", "set", "setup"]

    def test_command_keeps_prefix(self, completion):
        assert completion.complete("set x [so") == ["set x [socket"]

    def test_variable_lines(self, completion):
        assert completion.complete("puts $my") == ["puts $myList", "puts $my_var"]

    def test_argument_lines(self, completion):
        completion.registry.register("string", ["map", "match", "length"])
        assert completion.complete("string ma") == ["string map", "string match"]

    def test_nested_bracket_argument(self, completion):
        completion.registry.register("format", ["%d", "%s", "-x"])
        assert completion.complete("expr {[format %") == [
            "expr {[format %d",
            "expr {[format %s",
        ]

    def test_namespace_qualified_command(self, completion):
        assert completion.complete("::string ma") == ["::string map", "::string match"]

    def test_empty_base_argument(self, completion):
        assert completion.complete("string ") == []

    @pytest.mark.parametrize("buffer", ["", "[", "{", "puts $"])
    def test_no_candidates(self, completion, interpreter, buffer):
        assert completion.complete(buffer) == []
        assert interpreter.evaluated == []

    def test_interpreter_failure_is_silent(self, completion, interpreter):
        interpreter.failing_queries.update({"commands", "procs", "vars"})
        assert completion.complete("se") == []
        assert completion.complete("puts $my") == []

    def test_session_is_callable(self, completion):
        assert completion("puts -no") == ["puts -nonewline"]

    def test_registry_changes_visible_to_next_request(self, completion):
        assert completion.complete("mycmd -a") == []
        completion.registry.register("mycmd", ["-alpha"])
        assert completion.complete("mycmd -a") == ["mycmd -alpha"]


class TestResolve:
    """Tests for CompletionSession.resolve."""

    def test_result_fields(self, completion):
        result = completion.resolve("puts $my")
        assert result.replacement_start == 6
        assert result.prefix == "puts $"
        assert result.candidates == ("myList", "my_var")
        assert result.context.kind is ContextKind.VARIABLE
        assert result

    def test_empty_result(self, completion):
        result = completion.resolve("puts [")
        assert result.candidates == ()
        assert result.context is None
        assert result.replacement_start == len("puts [")
        assert not result
        assert result.lines == []
