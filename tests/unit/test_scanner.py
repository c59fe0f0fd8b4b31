"""
Unit tests for the completion context scanner.

Tests cover:
- Command, variable and argument classification
- Fragment detection across nested brackets and braces
- Namespace qualifier stripping
- Inputs with nothing to complete
"""

import pytest

from tclshell.completion import ContextKind, scan_context
from tclshell.completion.scanner import find_fragment_start, strip_namespace_qualifier


# =============================================================================
# Fragment Start
# =============================================================================


class TestFindFragmentStart:
    """Tests for the bracket-aware backward scan."""

    def test_no_brackets(self):
        assert find_fragment_start("puts hello") == 0

    def test_unmatched_bracket(self):
        assert find_fragment_start("set x [llength") == 7

    def test_unmatched_brace(self):
        assert find_fragment_start("if {$x} {pu") == 9

    def test_complete_groups_are_skipped(self):
        buffer = "puts [string length abc] {a b} x"
        assert find_fragment_start(buffer) == 0

    def test_innermost_unmatched_opener_wins(self):
        buffer = "expr {[format %"
        assert find_fragment_start(buffer) == buffer.index("[") + 1

    def test_unbalanced_closers(self):
        assert find_fragment_start("}} puts") == 0

    def test_empty(self):
        assert find_fragment_start("") == 0


# =============================================================================
# Classification
# =============================================================================


class TestCommandContext:
    """Tests for completing the first word of a fragment."""

    def test_simple_command(self):
        result = scan_context("se")
        assert result.kind is ContextKind.COMMAND
        assert result.base == "se"
        assert result.command == "se"
        assert result.replacement_start == 0

    def test_leading_whitespace(self):
        result = scan_context("   se")
        assert result.kind is ContextKind.COMMAND
        assert result.replacement_start == 3

    def test_command_inside_bracket(self):
        buffer = "set x [str"
        result = scan_context(buffer)
        assert result.kind is ContextKind.COMMAND
        assert result.base == "str"
        assert result.replacement_start == buffer.index("[") + 1

    def test_command_inside_brace_after_complete_group(self):
        buffer = "if {[info exists x]} {pu"
        result = scan_context(buffer)
        assert result.kind is ContextKind.COMMAND
        assert result.base == "pu"
        assert result.replacement_start == len(buffer) - 2

    def test_qualified_command_keeps_qualifier(self):
        result = scan_context("::str")
        assert result.kind is ContextKind.COMMAND
        assert result.base == "::str"


class TestVariableContext:
    """Tests for completing $variable references."""

    def test_variable_argument(self):
        buffer = "puts $my"
        result = scan_context(buffer)
        assert result.kind is ContextKind.VARIABLE
        assert result.base == "my"
        assert result.replacement_start == buffer.index("$") + 1

    def test_variable_as_first_word(self):
        result = scan_context("$fo")
        assert result.kind is ContextKind.VARIABLE
        assert result.base == "fo"
        assert result.replacement_start == 1

    def test_variable_inside_bracket(self):
        buffer = "set n [llength $li"
        result = scan_context(buffer)
        assert result.kind is ContextKind.VARIABLE
        assert result.command == "llength"
        assert result.base == "li"

    def test_variable_after_complete_group(self):
        result = scan_context("puts [string length abc] $va")
        assert result.kind is ContextKind.VARIABLE
        assert result.command == "puts"
        assert result.base == "va"

    @pytest.mark.parametrize("buffer", ["puts $", "$", "set x [llength $"])
    def test_bare_dollar(self, buffer):
        assert scan_context(buffer) is None


class TestArgumentContext:
    """Tests for completing arguments of a command."""

    def test_argument(self):
        result = scan_context("string ma")
        assert result.kind is ContextKind.ARGUMENT
        assert result.command == "string"
        assert result.base == "ma"
        assert result.replacement_start == 7

    def test_nested_bracket_fragment(self):
        """The fragment starts after the unmatched '[' before format."""
        buffer = "expr {[format %"
        result = scan_context(buffer)
        assert result.kind is ContextKind.ARGUMENT
        assert result.command == "format"
        assert result.base == "%"
        assert result.replacement_start == len(buffer) - 1

    def test_namespace_qualifier_stripped(self):
        result = scan_context("::string ma")
        assert result.kind is ContextKind.ARGUMENT
        assert result.command == "string"
        assert result.base == "ma"
        assert result.replacement_start == 9

    def test_bare_qualifier_not_stripped(self):
        result = scan_context(":: x")
        assert result.command == "::"

    def test_nested_namespace_keeps_inner_qualifier(self):
        result = scan_context("::foo::bar -o")
        assert result.command == "foo::bar"

    def test_trailing_whitespace_gives_empty_base(self):
        result = scan_context("string ")
        assert result.kind is ContextKind.ARGUMENT
        assert result.base == ""
        assert result.replacement_start == 7

    def test_later_argument(self):
        result = scan_context("lsort -integer -dec")
        assert result.command == "lsort"
        assert result.base == "-dec"
        assert result.replacement_start == 15

    def test_tab_separates_words(self):
        result = scan_context("string\tma")
        assert result.kind is ContextKind.ARGUMENT
        assert result.command == "string"

    def test_argument_after_complete_group(self):
        result = scan_context("foo [bar] ba")
        assert result.kind is ContextKind.ARGUMENT
        assert result.command == "foo"
        assert result.base == "ba"

    def test_unbalanced_closers_degrade(self):
        result = scan_context("}} puts x")
        assert result.kind is ContextKind.ARGUMENT
        assert result.command == "}}"
        assert result.base == "x"

    def test_dollar_inside_token_is_argument(self):
        result = scan_context("puts a$b")
        assert result.kind is ContextKind.ARGUMENT
        assert result.base == "a$b"


class TestNothingToComplete:
    """Inputs that produce no completion context."""

    @pytest.mark.parametrize("buffer", ["", "[", "{", "puts [", "puts [   ", "set x {  "])
    def test_returns_none(self, buffer):
        assert scan_context(buffer) is None

    @pytest.mark.parametrize("buffer", ["   ", " \t "])
    def test_whitespace_only(self, buffer):
        assert scan_context(buffer) is None
