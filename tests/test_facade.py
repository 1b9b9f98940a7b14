"""
Tests for NavigationFacade: the editor commands end to end on buffers.
"""

import pytest

from structnav.buffer import TextBuffer
from structnav.facade import NavigationFacade, bracket_context
from structnav.languages import LanguageRegistry, default_registry
from structnav.schemas import Boundary, Direction, Position, ScopeKind


@pytest.fixture
def facade():
    return NavigationFacade(default_registry())


def _at(line, column=0):
    return Position(line=line, column=column)


class TestScopeCommands:

    def test_select_function(self, facade, ts_buffer):
        result = facade.select_scope(ts_buffer, _at(14, 4), "typescript")
        assert result.success
        assert result.scope.name == "helper"
        assert result.text.startswith("function helper(x: number) {")
        assert result.text.endswith("return -x;\n}")
        assert result.line_count == 6
        assert result.message == "Function 'helper' selected"

    def test_select_falls_back_to_class_like(self, facade, ts_buffer):
        result = facade.select_scope(ts_buffer, _at(21, 2), "typescript")
        assert result.scope.kind == ScopeKind.ENUM
        assert result.scope.name == "Color"

    def test_select_outside_any_scope(self, facade, ts_buffer):
        result = facade.select_scope(ts_buffer, _at(3), "typescript")
        assert not result.success
        assert result.reason == "not_found"
        assert result.message == "Cursor is not within a function or class scope."

    def test_delete_function(self, facade, ts_buffer):
        result = facade.delete_scope(ts_buffer, _at(14, 4), "typescript")
        assert result.success
        assert result.message == "Function 'helper' deleted successfully!"
        assert result.lines_affected == 6
        assert result.details["detail"] == "Deleted 6 lines (from line 13 to line 18)"
        assert "function helper" not in ts_buffer.text
        assert result.removed_text.startswith("function helper")
        assert ts_buffer.line_at(12) == ""
        assert ts_buffer.line_at(14) == "enum Color {"

    def test_delete_python_method(self, facade, py_buffer):
        result = facade.delete_scope(py_buffer, _at(11, 8), "python")
        assert result.scope.name == "shout"
        assert "def shout" not in py_buffer.text
        assert "def greet" in py_buffer.text

    def test_list_scopes(self, facade, py_buffer):
        scopes = facade.list_scopes(py_buffer, "python", "function")
        assert [s.name for s in scopes] == ["greet", "shout", "add"]
        assert [s.name for s in facade.list_scopes(py_buffer, "python", "class")] == ["Greeter"]

    def test_unknown_language_uses_fallback(self, facade):
        buffer = TextBuffer.from_lines(["fn main() {", "    run();", "}"])
        result = facade.select_scope(buffer, _at(1, 4), "rust")
        assert result.scope.name == "main"


class TestScopeNavigation:

    def test_navigate_forward(self, facade, ts_buffer):
        result = facade.navigate_scope(ts_buffer, _at(0), "typescript")
        assert result.success
        assert result.target == _at(4)
        assert result.message == "Navigated to class: Circle"

    def test_navigate_backward(self, facade, ts_buffer):
        result = facade.navigate_scope(
            ts_buffer, _at(12), "typescript", target="function", direction=Direction.BACKWARD
        )
        assert result.message == "Navigated to function: area"

    def test_wrap_to_first(self, facade, ts_buffer):
        result = facade.navigate_scope(ts_buffer, _at(13), "typescript", target="function")
        assert result.target == _at(5)
        assert result.message == "Wrapped to first function: constructor"

    def test_wrap_to_last(self, facade, ts_buffer):
        result = facade.navigate_scope(
            ts_buffer, _at(0), "typescript", target="class", direction=Direction.BACKWARD
        )
        assert result.message == "Wrapped to last enum: Color"

    def test_no_wrap(self, facade, ts_buffer):
        result = facade.navigate_scope(ts_buffer, _at(13), "typescript", target="function", wrap_around=False)
        assert not result.success
        assert result.message == "No more function scopes found."

    def test_no_declarations(self, facade):
        buffer = TextBuffer("let x = 1;\n")
        result = facade.navigate_scope(buffer, _at(0), "javascript", target="function")
        assert result.message == "No function scope declarations found in document."
        result = facade.navigate_scope(buffer, _at(0), "javascript")
        assert result.message == "No scope declarations found in document."


class TestBracketCommands:

    def test_select_containing_pair(self, facade, ts_buffer):
        result = facade.select_bracket_scope(ts_buffer, _at(20, 2), "typescript")
        assert result.success
        assert not result.used_next_pair
        assert result.text == "\n  Red,\n  Green,\n"
        assert result.message == "Selected bracket scope in 'Color'"

    def test_select_next_pair(self, facade):
        buffer = TextBuffer("const a = 1;\nclass A { x = 1; }\n")
        result = facade.select_bracket_scope(buffer, _at(0), "typescript")
        assert result.used_next_pair
        assert result.text == " x = 1; "
        assert result.message == "Selected next bracket scope in 'A'"

    def test_no_pair(self, facade):
        buffer = TextBuffer("const a = 1;")
        result = facade.select_bracket_scope(buffer, _at(0), "typescript")
        assert not result.success
        assert result.reason == "not_found"

    def test_delete_keeps_braces(self, facade, ts_buffer):
        result = facade.delete_bracket_scope(ts_buffer, _at(20, 2), "typescript")
        assert result.success
        assert result.removed_text == "\n  Red,\n  Green,\n"
        assert ts_buffer.line_at(19) == "enum Color {}"
        assert result.cursor == _at(19, 12)

    def test_context_needs_word_before_brace(self):
        buffer = TextBuffer("if (x) {\n}")
        pair = default_registry().brackets_for("javascript").containing_pair(buffer, _at(0, 8))
        assert bracket_context(buffer, pair) == ""


class TestSexpCommands:

    def test_forward_and_backward(self, facade):
        buffer = TextBuffer("(a (b) c)")
        forward = facade.forward_sexp(buffer, _at(0, 3), "plaintext")
        assert forward.target == _at(0, 6)
        backward = facade.backward_sexp(buffer, _at(0, 9), "plaintext")
        assert backward.target == _at(0, 0)

    def test_mark_and_parent(self, facade):
        buffer = TextBuffer("(a (b) c)")
        assert facade.mark_sexp(buffer, _at(0, 3), "plaintext").text == "(b)"
        assert facade.mark_parent_sexp(buffer, _at(0, 4), "plaintext").text == "(b)"

    def test_expand_selection_grows(self, facade):
        buffer = TextBuffer("(a (b) c)")
        selection = Boundary.between(_at(0, 3), _at(0, 6))
        result = facade.expand_selection(buffer, selection, "plaintext")
        assert result.text == "(a (b) c)"
        outermost = facade.expand_selection(buffer, result.selection, "plaintext")
        assert not outermost.success

    def test_nothing_to_mark(self, facade):
        result = facade.mark_sexp(TextBuffer("  ;"), _at(0), "plaintext")
        assert not result.success
        assert result.message == "No S-expression found at the current position"

    def test_transpose(self, facade):
        buffer = TextBuffer("(a) (b)")
        result = facade.transpose_sexp(buffer, _at(0), "plaintext")
        assert result.success
        assert buffer.text == "(b) (a)"
        assert result.cursor == _at(0)
        assert result.swap.second == Boundary.between(_at(0, 4), _at(0, 7))

    def test_transpose_without_next(self, facade):
        buffer = TextBuffer("(a) (b)")
        result = facade.transpose_sexp(buffer, _at(0, 4), "plaintext")
        assert not result.success
        assert result.reason == "no_sibling"
        assert result.message == "No next S-expression found to transpose with"
        assert buffer.text == "(a) (b)"

    def test_move_up(self, facade):
        buffer = TextBuffer("call(x, y)")
        result = facade.move_sexp_up(buffer, _at(0, 8), "plaintext")
        assert result.success
        assert buffer.text == "call(y, x)"

    def test_move_up_first_child(self, facade):
        buffer = TextBuffer("call(x, y)")
        result = facade.move_sexp_up(buffer, _at(0, 5), "plaintext")
        assert result.reason == "no_sibling"
        assert result.message == "No previous S-expression found to move before"

    def test_move_up_mid_identifier(self, facade):
        buffer = TextBuffer("(ab cd)")
        result = facade.move_sexp_up(buffer, _at(0, 5), "typescript")
        assert not result.success
        assert result.reason == "no_sibling"
        assert result.message == "No previous S-expression found to move before"
        assert buffer.text == "(ab cd)"

    def test_move_up_without_parent(self, facade):
        buffer = TextBuffer("a b")
        result = facade.move_sexp_up(buffer, _at(0, 2), "plaintext")
        assert result.reason == "not_found"
        assert result.message == "Could not find a parent expression to move within"

    def test_move_down(self, facade):
        buffer = TextBuffer("[1, 2, 3]")
        result = facade.move_sexp_down(buffer, _at(0, 4), "plaintext")
        assert buffer.text == "[1, 3, 2]"
        assert result.cursor == _at(0, 4)


class TestRegistryInjection:

    def test_facade_uses_given_registry(self):
        registry = LanguageRegistry()
        facade = NavigationFacade(registry)
        buffer = TextBuffer.from_lines(["def f():", "    return 1"])
        # python is not registered, so the brace-based fallback finds nothing
        assert not facade.select_scope(buffer, _at(1, 4), "python").success
