"""
LanguageRegistry: language id -> scope strategy, bracket finder, sexp scanner.

Registries are ordinary objects built by the caller and passed down;
there is no global registry.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Dict, Optional, Union

from structnav.brackets import CurlyBracketFinder
from structnav.exceptions import UnsupportedLanguageError
from structnav.logging_config import logger
from structnav.languages.strategies import (
    BraceLanguageStrategy,
    DefaultFallbackStrategy,
    IndentationLanguageStrategy,
    LanguageStrategy,
)
from structnav.sexp import SexpScanner

PLAINTEXT = "plaintext"

# Mapping of file extensions to language ids
SUPPORTED_EXTENSIONS = {
    ".ts": "typescript",
    ".mts": "typescript",
    ".cts": "typescript",
    ".tsx": "typescriptreact",
    ".js": "javascript",
    ".mjs": "javascript",
    ".cjs": "javascript",
    ".jsx": "javascriptreact",
    ".py": "python",
    ".pyi": "python",
}

BRACE_LANGUAGES = ("typescript", "typescriptreact", "javascript", "javascriptreact")
INDENTATION_LANGUAGES = ("python",)


def detect_language(file_path: Union[str, Path], overrides: Optional[Dict[str, str]] = None) -> str:
    """
    Language id for a file, from its extension.

    Args:
        file_path: Path to the file
        overrides: Extra extension -> language id entries (take precedence)
    """
    extension = Path(file_path).suffix.lower()
    if overrides and extension in overrides:
        return overrides[extension]
    return SUPPORTED_EXTENSIONS.get(extension, PLAINTEXT)


@dataclass(frozen=True)
class LanguageProfile:
    """The three per-language collaborators a command needs."""
    language_id: str
    scopes: LanguageStrategy
    brackets: CurlyBracketFinder
    sexps: SexpScanner


class LanguageRegistry:
    """
    Per-concern lookup tables keyed by language id, each with a fallback.
    """

    def __init__(
        self,
        fallback_strategy: Optional[LanguageStrategy] = None,
        fallback_brackets: Optional[CurlyBracketFinder] = None,
        fallback_sexps: Optional[SexpScanner] = None,
        strict: bool = False,
    ):
        """
        Args:
            fallback_strategy: Scope strategy for unregistered languages
            fallback_brackets: Bracket finder for unregistered languages
            fallback_sexps: Sexp scanner for unregistered languages
            strict: If True, unknown languages raise instead of falling back
        """
        self._strategies: Dict[str, LanguageStrategy] = {}
        self._brackets: Dict[str, CurlyBracketFinder] = {}
        self._sexps: Dict[str, SexpScanner] = {}
        self.fallback_strategy = fallback_strategy or DefaultFallbackStrategy()
        self.fallback_brackets = fallback_brackets or CurlyBracketFinder()
        self.fallback_sexps = fallback_sexps or SexpScanner()
        self.strict = strict

    def register_strategy(self, strategy: LanguageStrategy, *language_ids: str) -> None:
        for language_id in language_ids or (strategy.language_id,):
            self._strategies[language_id] = strategy

    def register_brackets(self, finder: CurlyBracketFinder, *language_ids: str) -> None:
        for language_id in language_ids or (finder.language_id,):
            self._brackets[language_id] = finder

    def register_sexps(self, scanner: SexpScanner, *language_ids: str) -> None:
        for language_id in language_ids or (scanner.language_id,):
            self._sexps[language_id] = scanner

    def strategy_for(self, language_id: str) -> LanguageStrategy:
        strategy = self._strategies.get(language_id)
        if strategy is None:
            if self.strict:
                raise UnsupportedLanguageError(language_id)
            logger.debug(f"No scope strategy for '{language_id}', using {self.fallback_strategy!r}")
            return self.fallback_strategy
        return strategy

    def brackets_for(self, language_id: str) -> CurlyBracketFinder:
        return self._brackets.get(language_id, self.fallback_brackets)

    def sexps_for(self, language_id: str) -> SexpScanner:
        return self._sexps.get(language_id, self.fallback_sexps)

    def profile(self, language_id: str) -> LanguageProfile:
        return LanguageProfile(
            language_id=language_id,
            scopes=self.strategy_for(language_id),
            brackets=self.brackets_for(language_id),
            sexps=self.sexps_for(language_id),
        )

    @property
    def languages(self):
        return sorted(self._strategies)


def default_registry() -> LanguageRegistry:
    """
    A new registry with the built-in strategies.

    One brace strategy instance serves all JavaScript/TypeScript dialects.
    """
    registry = LanguageRegistry()

    brace = BraceLanguageStrategy("typescript")
    registry.register_strategy(brace, *BRACE_LANGUAGES)

    indentation = IndentationLanguageStrategy("python")
    registry.register_strategy(indentation, *INDENTATION_LANGUAGES)

    return registry
