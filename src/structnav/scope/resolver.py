"""
Scope Boundary Resolver.

Line-scanning heuristics that find where a function/class/interface/enum
body ends, which declaration encloses a cursor, and which declaration
comes next or before it. Nothing is cached: every call rescans the buffer.
"""

from typing import List, Optional, Sequence

from structnav.logging_config import logger
from structnav.languages.predicates import is_blank_line, is_comment_line
from structnav.schemas import Direction, Position, ScopeDescriptor, ScopeKind


def get_indentation(line: str) -> str:
    """Leading whitespace of a line."""
    return line[:len(line) - len(line.lstrip())]


def brace_scope_end(buffer, start_line: int) -> Optional[int]:
    """
    End line of a brace-delimited scope.

    Counts every `{` and `}` from start_line onward, ignoring strings and
    comments. The scope ends on the first line where the count returns to
    zero after having been positive.

    Returns:
        The end line, or None if the buffer ends before the braces balance
    """
    depth = 0
    opened = False
    for line_number in range(start_line, buffer.line_count):
        for char in buffer.line_at(line_number):
            if char == "{":
                depth += 1
                opened = True
            elif char == "}":
                depth -= 1
                if opened and depth == 0:
                    return line_number
    logger.debug(f"Unbalanced braces from line {start_line}: depth {depth} at end of buffer")
    return None


def indentation_scope_end(buffer, start_line: int, base_indent: Optional[str] = None) -> int:
    """
    End line of an indentation-delimited scope.

    Blank and comment-only lines never end a scope. The scope ends at the
    last non-blank line before the first line indented no deeper than the
    declaration; if no such line exists it runs to the end of the buffer.
    """
    if base_indent is None:
        base_indent = get_indentation(buffer.line_at(start_line))

    last_content_line = start_line
    for line_number in range(start_line + 1, buffer.line_count):
        text = buffer.line_at(line_number)
        if is_blank_line(text):
            continue
        if is_comment_line(text):
            last_content_line = line_number
            continue
        if len(get_indentation(text)) <= len(base_indent):
            return last_content_line
        last_content_line = line_number

    return buffer.line_count - 1


def resolve_scope_end(buffer, start_line: int, strategy, base_indent: Optional[str] = None) -> Optional[int]:
    """Resolve a declaration's end line with the strategy for its language."""
    return strategy.locate_scope_end(buffer, start_line, base_indent)


def _as_kinds(kind) -> Sequence[ScopeKind]:
    if isinstance(kind, ScopeKind):
        return (kind,)
    return tuple(kind)


def _describe(buffer, strategy, line_number: int, kind: ScopeKind, end_line: int) -> ScopeDescriptor:
    return ScopeDescriptor(
        kind=kind,
        name=strategy.extract_name(buffer.line_at(line_number), kind),
        start_line=line_number,
        end_line=end_line,
    )


def find_containing(buffer, cursor: Position, kind, strategy) -> Optional[ScopeDescriptor]:
    """
    Nearest declaration of `kind` whose body contains the cursor line.

    Scans upward from the cursor line. A declaration whose body ends before
    the cursor does not contain it and the scan moves on.

    Args:
        buffer: Buffer to read
        cursor: Cursor position
        kind: A ScopeKind or an iterable of them, tried in order per line
        strategy: LanguageStrategy for the buffer's language
    """
    kinds = _as_kinds(kind)
    start = min(cursor.line, buffer.line_count - 1)

    for line_number in range(start, -1, -1):
        matched = strategy.classify(buffer.line_at(line_number), kinds)
        if matched is None:
            continue

        end_line = strategy.locate_scope_end(buffer, line_number, None)
        if end_line is None:
            logger.debug(f"{matched.value} head at line {line_number} has no resolvable end")
            continue
        if end_line < cursor.line:
            logger.debug(
                f"{matched.value} at lines {line_number}-{end_line} ends before cursor line {cursor.line}"
            )
            continue

        return _describe(buffer, strategy, line_number, matched, end_line)

    return None


def find_all(buffer, kind, strategy) -> List[ScopeDescriptor]:
    """All resolvable declarations of `kind`, in line order."""
    kinds = _as_kinds(kind)
    scopes = []
    for line_number in range(buffer.line_count):
        matched = strategy.classify(buffer.line_at(line_number), kinds)
        if matched is None:
            continue
        end_line = strategy.locate_scope_end(buffer, line_number, None)
        if end_line is None:
            logger.debug(f"Skipping {matched.value} head at line {line_number}: no resolvable end")
            continue
        scopes.append(_describe(buffer, strategy, line_number, matched, end_line))
    return scopes


def find_adjacent(
    buffer,
    cursor: Position,
    kind,
    direction: Direction,
    wrap_around: bool,
    strategy,
) -> Optional[ScopeDescriptor]:
    """
    Next (or previous) declaration of `kind` relative to the cursor.

    A declaration's position is the start of its head line. With
    wrap_around, running off either end continues from the other end.
    """
    scopes = find_all(buffer, kind, strategy)
    if not scopes:
        return None

    if direction == Direction.FORWARD:
        for scope in scopes:
            if Position(line=scope.start_line, column=0) > cursor:
                return scope
        return scopes[0] if wrap_around else None

    for scope in reversed(scopes):
        if Position(line=scope.start_line, column=0) < cursor:
            return scope
    return scopes[-1] if wrap_around else None

