from enum import Enum
from typing import Optional, Literal

from pydantic import BaseModel, ConfigDict, Field, NonNegativeInt, model_validator


class Position(BaseModel):
    """
    A zero-based (line, column) location in a buffer.

    Columns are counted in characters. Positions order by line, then column.
    """
    model_config = ConfigDict(frozen=True)

    line: NonNegativeInt
    column: NonNegativeInt

    def _key(self):
        return (self.line, self.column)

    def __lt__(self, other: "Position") -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() < other._key()

    def __le__(self, other: "Position") -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() <= other._key()

    def __gt__(self, other: "Position") -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() > other._key()

    def __ge__(self, other: "Position") -> bool:
        if not isinstance(other, Position):
            return NotImplemented
        return self._key() >= other._key()

    def __str__(self) -> str:
        return f"{self.line}:{self.column}"


class Boundary(BaseModel):
    """
    A span between two positions.

    `end` is the position after the last included character.
    """
    model_config = ConfigDict(frozen=True)

    start_line: NonNegativeInt
    start_column: NonNegativeInt
    end_line: NonNegativeInt
    end_column: NonNegativeInt

    @classmethod
    def between(cls, start: Position, end: Position) -> "Boundary":
        return cls(
            start_line=start.line,
            start_column=start.column,
            end_line=end.line,
            end_column=end.column,
        )

    @property
    def start(self) -> Position:
        return Position(line=self.start_line, column=self.start_column)

    @property
    def end(self) -> Position:
        return Position(line=self.end_line, column=self.end_column)

    @property
    def line_span(self) -> int:
        return self.end_line - self.start_line

    @property
    def column_span(self) -> int:
        return self.end_column - self.start_column

    @property
    def size_key(self):
        """Ordering used to pick the smallest of several enclosing spans."""
        return (self.line_span, self.column_span)

    def contains(self, position: Position) -> bool:
        """True if position lies within the span, both ends included."""
        return self.start <= position <= self.end

    def encloses(self, other: "Boundary") -> bool:
        return self.start <= other.start and other.end <= self.end

    def strictly_contains(self, other: "Boundary") -> bool:
        """True if this span covers all of `other` and is not identical to it."""
        return self.encloses(other) and self != other

    def __str__(self) -> str:
        return f"[{self.start}-{self.end})"


# A sexp is one atomic navigable unit; it has exactly the shape of a Boundary.
SexpBoundary = Boundary


class ScopeKind(str, Enum):
    FUNCTION = "function"
    CLASS = "class"
    INTERFACE = "interface"
    ENUM = "enum"


CLASS_LIKE_KINDS = (ScopeKind.CLASS, ScopeKind.INTERFACE, ScopeKind.ENUM)
ALL_KINDS = (ScopeKind.FUNCTION,) + CLASS_LIKE_KINDS


class Direction(str, Enum):
    FORWARD = "forward"
    BACKWARD = "backward"


class ScopeDescriptor(BaseModel):
    """
    A function/class/interface/enum body located in a buffer.
    """
    model_config = ConfigDict(frozen=True)

    kind: ScopeKind
    name: str = "unnamed"
    start_line: NonNegativeInt
    end_line: NonNegativeInt

    @model_validator(mode="after")
    def _check_order(self):
        if self.end_line < self.start_line:
            raise ValueError(
                f"end_line {self.end_line} precedes start_line {self.start_line}"
            )
        return self

    @property
    def line_count(self) -> int:
        return self.end_line - self.start_line + 1


class BracketPair(BaseModel):
    """
    Positions of a matched `{` / `}` pair. Columns point at the brace characters.
    """
    model_config = ConfigDict(frozen=True)

    open_line: NonNegativeInt
    open_column: NonNegativeInt
    close_line: NonNegativeInt
    close_column: NonNegativeInt

    @property
    def open(self) -> Position:
        return Position(line=self.open_line, column=self.open_column)

    @property
    def close(self) -> Position:
        return Position(line=self.close_line, column=self.close_column)

    def content(self) -> Boundary:
        """The span strictly between the two braces."""
        return Boundary(
            start_line=self.open_line,
            start_column=self.open_column + 1,
            end_line=self.close_line,
            end_column=self.close_column,
        )

    @property
    def line_count(self) -> int:
        return self.close_line - self.open_line + 1


class SwapResult(BaseModel):
    """
    Outcome of a transposition.

    `first` is where the originally-second unit now sits, `second` is where
    the originally-first unit now sits. Swapping them again restores the text.
    """
    cursor: Position
    first: Boundary
    second: Boundary


# Orchestration-layer results

class NavigationResult(BaseModel):
    """Result of moving the cursor to a scope or sexp."""
    success: bool
    message: str = ""
    reason: Optional[Literal["not_found", "no_sibling"]] = None
    target: Optional[Position] = None
    scope: Optional[ScopeDescriptor] = None
    boundary: Optional[Boundary] = None


class SelectionResult(BaseModel):
    """Result of selecting a scope, bracket content or sexp."""
    success: bool
    message: str = ""
    reason: Optional[Literal["not_found", "no_sibling"]] = None
    selection: Optional[Boundary] = None
    text: str = ""
    line_count: int = 0
    scope: Optional[ScopeDescriptor] = None
    bracket: Optional[BracketPair] = None
    used_next_pair: bool = False


class EditResult(BaseModel):
    """Result of a command that changed the buffer."""
    success: bool
    message: str = ""
    reason: Optional[Literal["not_found", "no_sibling"]] = None
    changed: Optional[Boundary] = None
    removed_text: str = ""
    lines_affected: int = 0
    cursor: Optional[Position] = None
    swap: Optional[SwapResult] = None
    scope: Optional[ScopeDescriptor] = None
    bracket: Optional[BracketPair] = None
    used_next_pair: bool = False
    details: dict = Field(default_factory=dict)
