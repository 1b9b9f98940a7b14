"""
NavigationFacade: editor commands over the structural navigation core.

Each method takes a buffer, a language id and a cursor (or selection) and
returns a result model. Policies such as wrap-around are plain arguments;
the facade never reads configuration or touches any UI.
"""

import re
from typing import List, Literal, Optional

from structnav.exceptions import NoSiblingError
from structnav.languages import LanguageRegistry, default_registry
from structnav.logging_config import logger
from structnav.schemas import (
    ALL_KINDS,
    Boundary,
    BracketPair,
    CLASS_LIKE_KINDS,
    Direction,
    EditResult,
    NavigationResult,
    Position,
    ScopeDescriptor,
    ScopeKind,
    SelectionResult,
)
from structnav.scope import find_adjacent, find_all
from structnav.sexp import find_parent, move_down, move_up

ScopeTarget = Literal["function", "class", "any"]

NO_SCOPE_MESSAGE = "Cursor is not within a function or class scope."
NO_BRACKET_MESSAGE = "No bracket scope found."
NO_SEXP_MESSAGE = "No S-expression found at the current position"

_BRACKET_CONTEXT = re.compile(r"(\w+)\s*{")


def target_kinds(target: ScopeTarget):
    """Scope kinds a navigation target covers."""
    if target == "function":
        return (ScopeKind.FUNCTION,)
    if target == "class":
        return CLASS_LIKE_KINDS
    return ALL_KINDS


def bracket_context(buffer, pair: BracketPair) -> str:
    """` in 'name'` for the word before the opening brace, or ""."""
    match = _BRACKET_CONTEXT.search(buffer.line_at(pair.open_line).strip())
    if match:
        return f" in '{match.group(1)}'"
    return ""


class NavigationFacade:
    """
    Orchestrates scope, bracket and sexp commands for one registry.

    Stateless apart from the registry it is given.
    """

    def __init__(self, registry: Optional[LanguageRegistry] = None):
        """
        Args:
            registry: Language registry (a fresh default registry if omitted)
        """
        self.registry = registry or default_registry()

    # ------------------------------------------------------------------
    # Scopes
    # ------------------------------------------------------------------

    def find_scope(self, buffer, cursor: Position, language: str) -> Optional[ScopeDescriptor]:
        """Containing function, else containing class, interface or enum."""
        strategy = self.registry.strategy_for(language)
        return strategy.locate_function(buffer, cursor) or strategy.locate_class(buffer, cursor)

    def select_scope(self, buffer, cursor: Position, language: str) -> SelectionResult:
        scope = self.find_scope(buffer, cursor, language)
        if scope is None:
            return SelectionResult(success=False, message=NO_SCOPE_MESSAGE, reason="not_found")

        selection = buffer.line_boundary(scope.start_line, scope.end_line)
        return SelectionResult(
            success=True,
            message=f"{scope.kind.value.capitalize()} '{scope.name}' selected",
            selection=selection,
            text=buffer.get_text(selection),
            line_count=scope.line_count,
            scope=scope,
        )

    def delete_scope(self, buffer, cursor: Position, language: str) -> EditResult:
        scope = self.find_scope(buffer, cursor, language)
        if scope is None:
            return EditResult(success=False, message=NO_SCOPE_MESSAGE, reason="not_found")

        changed = buffer.line_boundary(scope.start_line, scope.end_line)
        removed = buffer.get_text(changed)
        buffer.replace(changed, "")
        logger.info(f"Deleted {scope.kind.value} '{scope.name}' (lines {scope.start_line + 1}-{scope.end_line + 1})")

        return EditResult(
            success=True,
            message=f"{scope.kind.value.capitalize()} '{scope.name}' deleted successfully!",
            changed=changed,
            removed_text=removed,
            lines_affected=scope.line_count,
            cursor=changed.start,
            scope=scope,
            details={
                "detail": f"Deleted {scope.line_count} lines (from line {scope.start_line + 1} to line {scope.end_line + 1})",
            },
        )

    def list_scopes(self, buffer, language: str, target: ScopeTarget = "any") -> List[ScopeDescriptor]:
        strategy = self.registry.strategy_for(language)
        return find_all(buffer, target_kinds(target), strategy)

    def navigate_scope(
        self,
        buffer,
        cursor: Position,
        language: str,
        target: ScopeTarget = "any",
        direction: Direction = Direction.FORWARD,
        wrap_around: bool = True,
    ) -> NavigationResult:
        """
        Move to the next or previous declaration of the target kind.

        Args:
            wrap_around: Continue from the other end of the buffer when none is left
        """
        strategy = self.registry.strategy_for(language)
        label = "" if target == "any" else f"{target} "
        kinds = target_kinds(target)

        if not find_all(buffer, kinds, strategy):
            return NavigationResult(
                success=False,
                message=f"No {label}scope declarations found in document.",
                reason="not_found",
            )

        scope = find_adjacent(buffer, cursor, kinds, direction, wrap_around, strategy)
        if scope is None:
            return NavigationResult(
                success=False,
                message=f"No more {label}scopes found.",
                reason="not_found",
            )

        target_position = Position(line=scope.start_line, column=0)
        if direction == Direction.FORWARD:
            wrapped = not target_position > cursor
            wrap_word = "first"
        else:
            wrapped = not target_position < cursor
            wrap_word = "last"

        if wrapped:
            message = f"Wrapped to {wrap_word} {scope.kind.value}: {scope.name}"
        else:
            message = f"Navigated to {scope.kind.value}: {scope.name}"

        return NavigationResult(success=True, message=message, target=target_position, scope=scope)

    # ------------------------------------------------------------------
    # Bracket scopes
    # ------------------------------------------------------------------

    def find_bracket_scope(self, buffer, cursor: Position, language: str):
        """
        Containing brace pair, else the next one after the cursor.

        Returns:
            (pair, used_next_pair); pair is None if neither exists
        """
        finder = self.registry.brackets_for(language)
        pair = finder.containing_pair(buffer, cursor)
        if pair is not None:
            return pair, False
        return finder.next_pair(buffer, cursor), True

    def select_bracket_scope(self, buffer, cursor: Position, language: str) -> SelectionResult:
        pair, used_next = self.find_bracket_scope(buffer, cursor, language)
        if pair is None:
            return SelectionResult(success=False, message=NO_BRACKET_MESSAGE, reason="not_found")

        content = pair.content()
        context = bracket_context(buffer, pair)
        prefix = "Selected next bracket scope" if used_next else "Selected bracket scope"
        return SelectionResult(
            success=True,
            message=f"{prefix}{context}",
            selection=content,
            text=buffer.get_text(content),
            line_count=pair.line_count,
            bracket=pair,
            used_next_pair=used_next,
        )

    def delete_bracket_scope(self, buffer, cursor: Position, language: str) -> EditResult:
        pair, used_next = self.find_bracket_scope(buffer, cursor, language)
        if pair is None:
            return EditResult(success=False, message=NO_BRACKET_MESSAGE, reason="not_found")

        content = pair.content()
        context = bracket_context(buffer, pair)
        removed = buffer.get_text(content)
        buffer.replace(content, "")

        prefix = "Deleted content between next bracket pair" if used_next else "Deleted content between brackets"
        return EditResult(
            success=True,
            message=f"{prefix}{context}",
            changed=content,
            removed_text=removed,
            lines_affected=pair.line_count,
            cursor=content.start,
            bracket=pair,
            used_next_pair=used_next,
            details={
                "detail": f"From line {pair.open_line + 1} to {pair.close_line + 1} ({pair.line_count} lines affected)",
            },
        )

    # ------------------------------------------------------------------
    # Sexps
    # ------------------------------------------------------------------

    def forward_sexp(self, buffer, cursor: Position, language: str) -> NavigationResult:
        """Cursor to the end of the next sexp."""
        boundary = self.registry.sexps_for(language).forward(buffer, cursor)
        if boundary is None:
            return NavigationResult(success=False, message=NO_SEXP_MESSAGE, reason="not_found")
        return NavigationResult(success=True, target=boundary.end, boundary=boundary)

    def backward_sexp(self, buffer, cursor: Position, language: str) -> NavigationResult:
        """Cursor to the start of the previous sexp."""
        boundary = self.registry.sexps_for(language).backward(buffer, cursor)
        if boundary is None:
            return NavigationResult(success=False, message=NO_SEXP_MESSAGE, reason="not_found")
        return NavigationResult(success=True, target=boundary.start, boundary=boundary)

    def mark_sexp(self, buffer, cursor: Position, language: str) -> SelectionResult:
        boundary = self.registry.sexps_for(language).forward(buffer, cursor)
        return self._selection(buffer, boundary, "Selected S-expression")

    def mark_parent_sexp(self, buffer, cursor: Position, language: str) -> SelectionResult:
        boundary = find_parent(buffer, cursor)
        return self._selection(buffer, boundary, "Selected parent S-expression")

    def expand_selection(self, buffer, selection: Boundary, language: str) -> SelectionResult:
        """Grow a selection to the smallest group that strictly contains it."""
        boundary = find_parent(buffer, selection.start, exclude=selection)
        return self._selection(buffer, boundary, "Expanded selection to parent S-expression")

    def _selection(self, buffer, boundary: Optional[Boundary], message: str) -> SelectionResult:
        if boundary is None:
            return SelectionResult(success=False, message=NO_SEXP_MESSAGE, reason="not_found")
        text = buffer.get_text(boundary)
        line_count = boundary.line_span + 1
        return SelectionResult(
            success=True,
            message=f"{message} ({line_count} lines, {len(text)} chars)",
            selection=boundary,
            text=text,
            line_count=line_count,
        )

    def transpose_sexp(self, buffer, cursor: Position, language: str) -> EditResult:
        """Swap the sexp at the cursor with the one after it."""
        return self.move_sexp_down(
            buffer, cursor, language,
            no_sibling_message="No next S-expression found to transpose with",
        )

    def move_sexp_down(
        self,
        buffer,
        cursor: Position,
        language: str,
        no_sibling_message: str = "No next S-expression found to move after",
    ) -> EditResult:
        scanner = self.registry.sexps_for(language)
        current = scanner.forward(buffer, cursor)
        if current is None:
            return EditResult(success=False, message=NO_SEXP_MESSAGE, reason="not_found")

        try:
            swapped = move_down(buffer, current, scanner)
        except NoSiblingError:
            return EditResult(success=False, message=no_sibling_message, reason="no_sibling")

        return self._swap_result(swapped)

    def move_sexp_up(self, buffer, cursor: Position, language: str) -> EditResult:
        scanner = self.registry.sexps_for(language)
        current = scanner.forward(buffer, cursor)
        if current is None:
            return EditResult(success=False, message=NO_SEXP_MESSAGE, reason="not_found")

        parent = find_parent(buffer, current.start, exclude=current)
        if parent is None:
            return EditResult(
                success=False,
                message="Could not find a parent expression to move within",
                reason="not_found",
            )

        try:
            swapped = move_up(buffer, current, parent)
        except NoSiblingError:
            return EditResult(
                success=False,
                message="No previous S-expression found to move before",
                reason="no_sibling",
            )

        return self._swap_result(swapped)

    @staticmethod
    def _swap_result(swapped) -> EditResult:
        changed = Boundary.between(swapped.first.start, swapped.second.end)
        return EditResult(
            success=True,
            message="Transposed S-expressions",
            changed=changed,
            lines_affected=changed.line_span + 1,
            cursor=swapped.cursor,
            swap=swapped,
        )
