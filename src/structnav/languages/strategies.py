"""
Language strategies for scope resolution.

A strategy bundles the declaration-head predicates of one language family
with that family's way of finding where a body ends.
"""

from abc import ABC, abstractmethod
from typing import Optional, Sequence

from structnav.languages import predicates
from structnav.languages.predicates import DeclarationRules
from structnav.schemas import Position, ScopeDescriptor, ScopeKind
from structnav.scope import resolver


class LanguageStrategy(ABC):
    """
    Scope capabilities shared by every language family.

    Subclasses supply the declaration rules, name extraction and scope-end
    algorithm; containment lookups are common.
    """

    family = "abstract"
    rules: DeclarationRules = {}

    def __init__(self, language_id: str):
        self.language_id = language_id

    def normalize(self, line: str) -> str:
        """Text the head predicates are tested against."""
        return line

    def classify(self, line: str, kinds: Sequence[ScopeKind]) -> Optional[ScopeKind]:
        """
        First kind in `kinds` whose predicates accept the line.

        Blank and comment-only lines are never declaration heads.
        """
        if predicates.is_blank_line(line) or predicates.is_comment_line(line):
            return None
        text = self.normalize(line)
        for kind in kinds:
            if predicates.matches_any(text, self.rules.get(kind, ())):
                return kind
        return None

    @abstractmethod
    def extract_name(self, line: str, kind: ScopeKind) -> str:
        """Declared name on a head line, or "unnamed"."""

    @abstractmethod
    def locate_scope_end(self, buffer, start_line: int, base_indent: Optional[str] = None) -> Optional[int]:
        """End line of the scope declared at start_line, or None."""

    def locate_function(self, buffer, cursor: Position) -> Optional[ScopeDescriptor]:
        """Nearest function containing the cursor."""
        return resolver.find_containing(buffer, cursor, ScopeKind.FUNCTION, self)

    def locate_class(self, buffer, cursor: Position) -> Optional[ScopeDescriptor]:
        """Nearest class, interface or enum containing the cursor."""
        return resolver.find_containing(
            buffer,
            cursor,
            (ScopeKind.ENUM, ScopeKind.INTERFACE, ScopeKind.CLASS),
            self,
        )

    def supported_kinds(self) -> Sequence[ScopeKind]:
        return tuple(kind for kind, rules in self.rules.items() if rules)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.language_id!r})"


class BraceLanguageStrategy(LanguageStrategy):
    """Curly-brace block languages (TypeScript, JavaScript and kin)."""

    family = "brace"
    rules = predicates.BRACE_RULES

    def normalize(self, line: str) -> str:
        return line.strip()

    def extract_name(self, line: str, kind: ScopeKind) -> str:
        return predicates.extract_brace_name(line.strip(), kind)

    def locate_scope_end(self, buffer, start_line: int, base_indent: Optional[str] = None) -> Optional[int]:
        return resolver.brace_scope_end(buffer, start_line)


class IndentationLanguageStrategy(LanguageStrategy):
    """Indentation block languages (Python)."""

    family = "indentation"
    rules = predicates.INDENTATION_RULES

    def extract_name(self, line: str, kind: ScopeKind) -> str:
        return predicates.extract_indentation_name(line, kind)

    def locate_scope_end(self, buffer, start_line: int, base_indent: Optional[str] = None) -> Optional[int]:
        return resolver.indentation_scope_end(buffer, start_line, base_indent)


class DefaultFallbackStrategy(BraceLanguageStrategy):
    """
    Used for languages with no registered strategy.

    Brace balance plus a wider set of heads (`fn`, `func`, `struct`, `trait`).
    """

    family = "fallback"
    rules = predicates.FALLBACK_RULES

    def __init__(self, language_id: str = "*"):
        super().__init__(language_id)
