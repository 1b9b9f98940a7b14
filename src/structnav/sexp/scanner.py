"""
Sexp Scanner: find the next or previous balanced expression.

A sexp is either a delimiter group (`(...)`, `[...]`, `{...}`) or a
maximal run of identifier characters. Matching tracks nesting of the
group's own delimiter type only, and string or comment contents are not
treated specially.
"""

from typing import Optional, Tuple

from structnav.schemas import Boundary, Position

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {")": "(", "]": "[", "}": "{"}

Span = Tuple[int, int]


def is_identifier_char(char: str) -> bool:
    """Letters, digits, underscore and `$` (ASCII only)."""
    return char.isascii() and (char.isalnum() or char in "_$")


def match_forward(text: str, offset: int) -> int:
    """
    Offset of the closer matching the opener at `offset`, or -1.
    """
    open_char = text[offset]
    close_char = OPENERS[open_char]
    depth = 0
    for index in range(offset, len(text)):
        char = text[index]
        if char == open_char:
            depth += 1
        elif char == close_char:
            depth -= 1
            if depth == 0:
                return index
    return -1


def match_backward(text: str, offset: int) -> int:
    """
    Offset of the opener matching the closer at `offset`, or -1.
    """
    close_char = text[offset]
    open_char = CLOSERS[close_char]
    depth = 0
    for index in range(offset, -1, -1):
        char = text[index]
        if char == close_char:
            depth += 1
        elif char == open_char:
            depth -= 1
            if depth == 0:
                return index
    return -1


def forward_span(text: str, offset: int) -> Optional[Span]:
    """
    Half-open offset span of the next sexp at or after `offset`.

    Openers without a matching closer are skipped.
    """
    index = max(offset, 0)
    length = len(text)
    while index < length:
        char = text[index]
        if char in OPENERS:
            close = match_forward(text, index)
            if close != -1:
                return index, close + 1
        elif is_identifier_char(char):
            start = index
            while index < length and is_identifier_char(text[index]):
                index += 1
            return start, index
        index += 1
    return None


def backward_span(text: str, offset: int) -> Optional[Span]:
    """
    Half-open offset span of the previous sexp ending at or before `offset`.

    Closers without a matching opener are skipped.
    """
    index = min(offset, len(text)) - 1
    while index >= 0:
        char = text[index]
        if char in CLOSERS:
            start = match_backward(text, index)
            if start != -1:
                return start, index + 1
        elif is_identifier_char(char):
            end = index + 1
            while index >= 0 and is_identifier_char(text[index]):
                index -= 1
            return index + 1, end
        index -= 1
    return None


class SexpScanner:
    """
    Position-level sexp navigation over a buffer.

    Works on the buffer's full text and converts offsets through the
    buffer's line table.
    """

    def __init__(self, language_id: str = "*"):
        self.language_id = language_id

    def forward(self, buffer, position: Position) -> Optional[Boundary]:
        """Boundary of the next sexp starting at or after `position`."""
        span = forward_span(buffer.text, buffer.offset_at(position))
        if span is None:
            return None
        return self.to_boundary(buffer, span)

    def backward(self, buffer, position: Position) -> Optional[Boundary]:
        """Boundary of the previous sexp ending at or before `position`."""
        span = backward_span(buffer.text, buffer.offset_at(position))
        if span is None:
            return None
        return self.to_boundary(buffer, span)

    @staticmethod
    def to_boundary(buffer, span: Span) -> Boundary:
        return Boundary.between(buffer.position_at(span[0]), buffer.position_at(span[1]))

    @staticmethod
    def to_span(buffer, boundary: Boundary) -> Span:
        return buffer.offset_at(boundary.start), buffer.offset_at(boundary.end)


_SCANNER = SexpScanner()


def forward(buffer, position: Position) -> Optional[Boundary]:
    return _SCANNER.forward(buffer, position)


def backward(buffer, position: Position) -> Optional[Boundary]:
    return _SCANNER.backward(buffer, position)
