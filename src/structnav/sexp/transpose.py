"""
Transposition Engine: swap two sexps in one buffer edit.

The text between the two units is carried over verbatim, so swapping the
post-swap boundaries again restores the original text.
"""

from typing import Optional

from structnav.exceptions import NoSiblingError, OverlappingUnitsError
from structnav.logging_config import logger
from structnav.schemas import Boundary, Direction, Position, SwapResult
from structnav.sexp import relations
from structnav.sexp.scanner import SexpScanner


def swap(buffer, first: Boundary, second: Boundary) -> SwapResult:
    """
    Exchange the text of two non-overlapping units.

    The combined span from first.start to second.end is replaced once with
    second's text, the original separator, then first's text.

    Args:
        buffer: Buffer to edit
        first: Earlier unit
        second: Later unit; must start at or after first.end

    Returns:
        SwapResult with the cursor at first.start and both new boundaries

    Raises:
        OverlappingUnitsError: If the units overlap or are out of order
    """
    if first.end > second.start:
        raise OverlappingUnitsError(first, second)

    first_start, first_end = SexpScanner.to_span(buffer, first)
    second_start, second_end = SexpScanner.to_span(buffer, second)

    text = buffer.text
    first_text = text[first_start:first_end]
    second_text = text[second_start:second_end]
    separator = text[first_end:second_start]

    combined = Boundary.between(first.start, second.end)
    buffer.replace(combined, second_text + separator + first_text)

    moved_second_end = first_start + len(second_text)
    moved_first_start = moved_second_end + len(separator)
    result = SwapResult(
        cursor=first.start,
        first=SexpScanner.to_boundary(buffer, (first_start, moved_second_end)),
        second=SexpScanner.to_boundary(buffer, (moved_first_start, moved_first_start + len(first_text))),
    )
    logger.debug(f"Swapped {first} with {second}")
    return result


def move_up(buffer, current: Boundary, parent: Boundary) -> SwapResult:
    """
    Swap `current` with its previous sibling inside `parent`.

    Raises:
        NoSiblingError: If `current` is the first child of `parent`
    """
    sibling = relations.find_previous_sibling(buffer, current, parent)
    if sibling is None:
        raise NoSiblingError(Direction.BACKWARD.value, current)
    return swap(buffer, sibling, current)


def move_down(buffer, current: Boundary, scanner: Optional[SexpScanner] = None) -> SwapResult:
    """
    Swap `current` with the sexp after it.

    Raises:
        NoSiblingError: If nothing follows `current`
    """
    sibling = relations.find_next_sibling(buffer, current, scanner)
    if sibling is None:
        raise NoSiblingError(Direction.FORWARD.value, current)
    return swap(buffer, current, sibling)


def transpose_at(buffer, position: Position, scanner: Optional[SexpScanner] = None) -> Optional[SwapResult]:
    """
    Swap the sexp at or after `position` with the one after it.

    Returns:
        None if there is no sexp at the position

    Raises:
        NoSiblingError: If no sexp follows it
    """
    scanner = scanner or SexpScanner()
    current = scanner.forward(buffer, position)
    if current is None:
        return None
    return move_down(buffer, current, scanner)
