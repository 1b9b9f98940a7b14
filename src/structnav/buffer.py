"""
TextBuffer: the buffer accessor every navigation query reads from.

Holds the raw text exactly as loaded (line endings included) and keeps a
table of line start offsets for offset <-> (line, column) conversion.
"""

from bisect import bisect_right
from pathlib import Path
from typing import List, Optional, Union

from structnav.logging_config import logger
from structnav.schemas import Boundary, Position


class TextBuffer:
    """
    In-memory text with line/offset addressing and single-call range replace.

    Lines are split on LF; a trailing CR is not part of a line's text, so
    CRLF files keep their endings through edits.
    """

    def __init__(self, text: str = "", path: Optional[str] = None):
        self._text = text
        self.path = path
        self.version = 0
        self._line_starts = self._compute_line_starts(text)

    @classmethod
    def from_file(cls, file_path: Union[str, Path]) -> "TextBuffer":
        """
        Load a file without translating line endings.

        Args:
            file_path: Path to a UTF-8 text file
        """
        path = Path(file_path)
        with open(path, "r", encoding="utf-8", newline="") as f:
            text = f.read()
        logger.debug(f"Loaded {path} ({len(text)} chars)")
        return cls(text, path=str(path))

    @classmethod
    def from_lines(cls, lines: List[str], newline: str = "\n") -> "TextBuffer":
        return cls(newline.join(lines))

    @staticmethod
    def _compute_line_starts(text: str) -> List[int]:
        starts = [0]
        index = text.find("\n")
        while index != -1:
            starts.append(index + 1)
            index = text.find("\n", index + 1)
        return starts

    @property
    def text(self) -> str:
        return self._text

    def __len__(self) -> int:
        return len(self._text)

    @property
    def line_count(self) -> int:
        return len(self._line_starts)

    def line_at(self, line: int) -> str:
        """Text of a line without its line terminator."""
        if line < 0 or line >= self.line_count:
            raise IndexError(f"Line {line} out of range (0..{self.line_count - 1})")
        start = self._line_starts[line]
        if line + 1 < self.line_count:
            end = self._line_starts[line + 1] - 1
        else:
            end = len(self._text)
        if end > start and self._text[end - 1] == "\r":
            end -= 1
        return self._text[start:end]

    def lines(self) -> List[str]:
        return [self.line_at(i) for i in range(self.line_count)]

    def offset_at(self, position: Position) -> int:
        """Character offset of a position, clamped to the buffer."""
        if position.line >= self.line_count:
            return len(self._text)
        column = min(position.column, len(self.line_at(position.line)))
        return self._line_starts[position.line] + column

    def position_at(self, offset: int) -> Position:
        """Position of a character offset, clamped to the buffer."""
        offset = max(0, min(offset, len(self._text)))
        line = bisect_right(self._line_starts, offset) - 1
        column = min(offset - self._line_starts[line], len(self.line_at(line)))
        return Position(line=line, column=column)

    def end_position(self) -> Position:
        return self.position_at(len(self._text))

    def get_text(self, boundary: Optional[Boundary] = None) -> str:
        """Text inside a boundary, or the whole buffer."""
        if boundary is None:
            return self._text
        return self.get_range(boundary.start, boundary.end)

    def get_range(self, start: Position, end: Position) -> str:
        return self._text[self.offset_at(start):self.offset_at(end)]

    def replace(self, boundary: Boundary, new_text: str) -> None:
        """
        Replace the text inside a boundary in one edit.

        Args:
            boundary: Span to replace
            new_text: Replacement text
        """
        start = self.offset_at(boundary.start)
        end = self.offset_at(boundary.end)
        if end < start:
            raise ValueError(f"Boundary {boundary} ends before it starts")
        self._text = self._text[:start] + new_text + self._text[end:]
        self._line_starts = self._compute_line_starts(self._text)
        self.version += 1
        logger.debug(f"Replaced {boundary} with {len(new_text)} chars (version {self.version})")

    def line_boundary(self, start_line: int, end_line: int) -> Boundary:
        """Span from the start of start_line to the end of end_line's text."""
        return Boundary(
            start_line=start_line,
            start_column=0,
            end_line=end_line,
            end_column=len(self.line_at(end_line)),
        )
