"""
CurlyBracketFinder: locate `{ ... }` pairs around or after a cursor.

Braces inside strings and comments are counted like any other; this
matches the line-scanning heuristic the rest of the engine uses.
"""

from typing import Optional, Tuple

from structnav.logging_config import logger
from structnav.schemas import BracketPair, Position


class CurlyBracketFinder:
    """
    Bracket finder for languages that delimit blocks with curly braces.

    Registered for every language by default (language id "*").
    """

    open_char = "{"
    close_char = "}"

    def __init__(self, language_id: str = "*"):
        self.language_id = language_id

    def containing_pair(self, buffer, cursor: Position) -> Optional[BracketPair]:
        """
        Nearest brace pair that strictly contains the cursor.

        Scans backward from the cursor for the first unbalanced `{`, then
        forward from it for the matching `}`. A `}` at the cursor counts
        toward the balance; a `{` at the cursor does not. The pair is
        returned only if the cursor lies strictly between the two braces.
        """
        opening = self._find_unbalanced_open(buffer, cursor)
        if opening is None:
            return None

        closing = self._find_matching_close(buffer, opening)
        if closing is None:
            logger.debug(f"No matching '{self.close_char}' for brace at {opening}")
            return None

        open_pos = Position(line=opening[0], column=opening[1])
        close_pos = Position(line=closing[0], column=closing[1])
        if not (open_pos < cursor < close_pos):
            return None

        return BracketPair(
            open_line=opening[0],
            open_column=opening[1],
            close_line=closing[0],
            close_column=closing[1],
        )

    def next_pair(self, buffer, cursor: Position) -> Optional[BracketPair]:
        """First brace pair whose `{` is at or after the cursor."""
        opening = None
        for line_number in range(cursor.line, buffer.line_count):
            text = buffer.line_at(line_number)
            start = cursor.column if line_number == cursor.line else 0
            column = text.find(self.open_char, start)
            if column != -1:
                opening = (line_number, column)
                break

        if opening is None:
            return None

        closing = self._find_matching_close(buffer, opening)
        if closing is None:
            logger.debug(f"No matching '{self.close_char}' for brace at {opening}")
            return None

        return BracketPair(
            open_line=opening[0],
            open_column=opening[1],
            close_line=closing[0],
            close_column=closing[1],
        )

    def _find_unbalanced_open(self, buffer, cursor: Position) -> Optional[Tuple[int, int]]:
        depth = 0
        last_line = min(cursor.line, buffer.line_count - 1)
        for line_number in range(last_line, -1, -1):
            text = buffer.line_at(line_number)
            on_cursor_line = line_number == cursor.line
            end = min(cursor.column + 1, len(text)) if on_cursor_line else len(text)
            for column in range(end - 1, -1, -1):
                char = text[column]
                if on_cursor_line and column == cursor.column and char != self.close_char:
                    continue
                if char == self.close_char:
                    depth += 1
                elif char == self.open_char:
                    depth -= 1
                    if depth < 0:
                        return line_number, column
        return None

    def _find_matching_close(self, buffer, opening: Tuple[int, int]) -> Optional[Tuple[int, int]]:
        depth = 1
        open_line, open_column = opening
        for line_number in range(open_line, buffer.line_count):
            text = buffer.line_at(line_number)
            start = open_column + 1 if line_number == open_line else 0
            for column in range(start, len(text)):
                char = text[column]
                if char == self.open_char:
                    depth += 1
                elif char == self.close_char:
                    depth -= 1
                    if depth == 0:
                        return line_number, column
        return None
