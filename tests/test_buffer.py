"""
Tests for TextBuffer: line access, offset/position conversion, replace.
"""

import pytest

from structnav.buffer import TextBuffer
from structnav.schemas import Boundary, Position


class TestLineAccess:
    """Lines, line counts and line endings."""

    def test_line_count_includes_trailing_empty_line(self):
        buffer = TextBuffer("a\nb\n")
        assert buffer.line_count == 3
        assert buffer.lines() == ["a", "b", ""]

    def test_crlf_is_not_part_of_line_text(self):
        buffer = TextBuffer("a\r\nbc\n")
        assert buffer.line_at(0) == "a"
        assert buffer.line_at(1) == "bc"
        assert buffer.line_at(2) == ""

    def test_line_out_of_range(self):
        buffer = TextBuffer("one line")
        with pytest.raises(IndexError):
            buffer.line_at(1)

    def test_from_lines(self):
        buffer = TextBuffer.from_lines(["x", "y"], newline="\r\n")
        assert buffer.text == "x\r\ny"
        assert buffer.line_count == 2

    def test_from_file_keeps_line_endings(self, temp_dir):
        path = temp_dir / "crlf.txt"
        path.write_bytes(b"x\r\ny")
        buffer = TextBuffer.from_file(path)
        assert buffer.text == "x\r\ny"
        assert buffer.path == str(path)


class TestAddressing:
    """Offset <-> position conversion."""

    def test_offset_and_position_agree(self):
        buffer = TextBuffer("a\r\nbc\n")
        assert buffer.offset_at(Position(line=1, column=1)) == 4
        assert buffer.position_at(4) == Position(line=1, column=1)

    def test_offset_clamps_column_to_line(self):
        buffer = TextBuffer("a\nbc")
        assert buffer.offset_at(Position(line=0, column=5)) == 1

    def test_offset_past_last_line_is_end(self):
        buffer = TextBuffer("a\nbc")
        assert buffer.offset_at(Position(line=9, column=0)) == len(buffer)

    def test_end_position(self):
        buffer = TextBuffer("a\nbc")
        assert buffer.end_position() == Position(line=1, column=2)

    def test_line_boundary_text(self):
        buffer = TextBuffer("ab\ncde\nf")
        boundary = buffer.line_boundary(0, 1)
        assert boundary == Boundary(start_line=0, start_column=0, end_line=1, end_column=3)
        assert buffer.get_text(boundary) == "ab\ncde"


class TestReplace:
    """Single-edit replacement."""

    def test_replace_within_line(self):
        buffer = TextBuffer("hello world")
        buffer.replace(Boundary(start_line=0, start_column=0, end_line=0, end_column=5), "goodbye")
        assert buffer.text == "goodbye world"
        assert buffer.version == 1

    def test_replace_across_lines_updates_line_table(self):
        buffer = TextBuffer("a\nb")
        buffer.replace(Boundary(start_line=0, start_column=1, end_line=1, end_column=0), "")
        assert buffer.text == "ab"
        assert buffer.line_count == 1

    def test_replace_inserting_lines(self):
        buffer = TextBuffer("ac")
        buffer.replace(Boundary(start_line=0, start_column=1, end_line=0, end_column=1), "\nb\n")
        assert buffer.lines() == ["a", "b", "c"]
