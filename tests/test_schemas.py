"""
Tests for the pydantic data model.
"""

import pytest
from pydantic import ValidationError

from structnav.schemas import (
    ALL_KINDS,
    Boundary,
    BracketPair,
    CLASS_LIKE_KINDS,
    Position,
    ScopeDescriptor,
    ScopeKind,
)


class TestPosition:

    def test_ordering_by_line_then_column(self):
        assert Position(line=1, column=0) > Position(line=0, column=9)
        assert Position(line=2, column=3) < Position(line=2, column=4)
        assert Position(line=2, column=3) <= Position(line=2, column=3)

    def test_negative_rejected(self):
        with pytest.raises(ValidationError):
            Position(line=-1, column=0)

    def test_frozen_and_hashable(self):
        assert len({Position(line=0, column=1), Position(line=0, column=1)}) == 1


class TestBoundary:

    def test_contains_is_inclusive(self):
        boundary = Boundary(start_line=0, start_column=0, end_line=0, end_column=3)
        assert boundary.contains(Position(line=0, column=0))
        assert boundary.contains(Position(line=0, column=3))
        assert not boundary.contains(Position(line=0, column=4))

    def test_strictly_contains_excludes_identity(self):
        outer = Boundary(start_line=0, start_column=0, end_line=0, end_column=9)
        inner = Boundary(start_line=0, start_column=3, end_line=0, end_column=6)
        assert outer.strictly_contains(inner)
        assert not outer.strictly_contains(outer)
        assert not inner.strictly_contains(outer)

    def test_size_key_prefers_fewer_lines(self):
        one_line = Boundary(start_line=0, start_column=0, end_line=0, end_column=80)
        two_lines = Boundary(start_line=0, start_column=5, end_line=1, end_column=6)
        assert one_line.size_key < two_lines.size_key


class TestScopeModels:

    def test_kind_groups(self):
        assert ScopeKind.FUNCTION not in CLASS_LIKE_KINDS
        assert set(ALL_KINDS) == set(ScopeKind)

    def test_descriptor_rejects_inverted_lines(self):
        with pytest.raises(ValidationError):
            ScopeDescriptor(kind=ScopeKind.FUNCTION, start_line=3, end_line=2)

    def test_descriptor_defaults_to_unnamed(self):
        scope = ScopeDescriptor(kind=ScopeKind.CLASS, start_line=0, end_line=4)
        assert scope.name == "unnamed"
        assert scope.line_count == 5

    def test_bracket_content_excludes_braces(self):
        pair = BracketPair(open_line=1, open_column=9, close_line=3, close_column=2)
        content = pair.content()
        assert content.start == Position(line=1, column=10)
        assert content.end == Position(line=3, column=2)
        assert pair.line_count == 3
