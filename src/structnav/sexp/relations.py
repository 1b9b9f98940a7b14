"""
Structural Relationship Engine: parents and siblings of sexps.

Every query rescans the whole buffer text; nothing is indexed between calls.
"""

from typing import Optional

from structnav.logging_config import logger
from structnav.schemas import Boundary, Position
from structnav.sexp.scanner import OPENERS, SexpScanner, forward_span

_DEFAULT_SCANNER = SexpScanner()


def find_parent(
    buffer,
    position: Position,
    exclude: Optional[Boundary] = None,
) -> Optional[Boundary]:
    """
    Smallest sexp, found from an opening delimiter, containing `position`.

    The forward scan is run from every opening delimiter in the buffer to
    produce a candidate. An unmatched opener is skipped by that scan, so
    its candidate is whatever unit follows it. Candidates must contain the
    position (ends inclusive) and, when `exclude` is given, strictly
    contain that whole span. The winner has the fewest lines, then the
    fewest columns; ties go to the earliest.

    Args:
        buffer: Buffer to scan
        position: Position the parent must contain
        exclude: Span (e.g. the current selection) the parent must strictly enclose
    """
    text = buffer.text
    target = buffer.offset_at(position)
    excluded = None
    if exclude is not None:
        excluded = (buffer.offset_at(exclude.start), buffer.offset_at(exclude.end))

    best = None
    best_key = None
    for index, char in enumerate(text):
        if char not in OPENERS:
            continue
        span = forward_span(text, index)
        if span is None:
            continue
        if not (span[0] <= target <= span[1]):
            continue
        if excluded is not None:
            if not (span[0] <= excluded[0] and excluded[1] <= span[1]) or span == excluded:
                continue

        candidate = SexpScanner.to_boundary(buffer, span)
        key = candidate.size_key
        if best_key is None or key < best_key:
            best, best_key = candidate, key

    if best is None:
        logger.debug(f"No parent expression contains {position}")
    return best


def find_next_sibling(buffer, current: Boundary, scanner: Optional[SexpScanner] = None) -> Optional[Boundary]:
    """The sexp that follows `current`."""
    scanner = scanner or _DEFAULT_SCANNER
    return scanner.forward(buffer, current.end)


def find_previous_sibling(buffer, current: Boundary, parent: Boundary) -> Optional[Boundary]:
    """
    The sexp before `current` inside `parent`.

    Walks the children of `parent` from just inside its opening delimiter,
    remembering the last one that ends before `current` starts. The walk
    must land on `current` itself (or on a unit past its end); a child
    that straddles `current`, such as the identifier `current` is a suffix
    of, means `current` is not a child of `parent` and there is no sibling.

    Returns:
        The previous sibling, or None if `current` is the first child
        or is not reached by the walk
    """
    text = buffer.text
    current_start, current_end = SexpScanner.to_span(buffer, current)
    parent_start, parent_end = SexpScanner.to_span(buffer, parent)

    previous = None
    offset = parent_start + 1
    while offset < parent_end:
        span = forward_span(text, offset)
        if span is None:
            break
        if span == (current_start, current_end) or span[0] >= current_end:
            if previous is None:
                return None
            return SexpScanner.to_boundary(buffer, previous)
        if span[1] > current_start:
            logger.debug(f"Child at {span} overlaps {current}; no previous sibling")
            return None
        previous = span
        offset = span[1]

    return None
