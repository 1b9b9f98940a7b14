"""
structnav - structural navigation and editing for source code

Scope, bracket and balanced-expression (sexp) navigation over plain text
buffers, with a typer CLI on top.
"""

__version__ = "0.1.0"

# Core exports (languages first: its strategies and the scope resolver import each other)
from structnav.languages import (
    LanguageRegistry,
    default_registry,
    detect_language,
)
from structnav.buffer import TextBuffer
from structnav.schemas import (
    Position,
    Boundary,
    SexpBoundary,
    ScopeKind,
    ScopeDescriptor,
    BracketPair,
    Direction,
    SwapResult,
)
from structnav.facade import NavigationFacade

__all__ = [
    "__version__",
    "LanguageRegistry",
    "default_registry",
    "detect_language",
    "TextBuffer",
    "Position",
    "Boundary",
    "SexpBoundary",
    "ScopeKind",
    "ScopeDescriptor",
    "BracketPair",
    "Direction",
    "SwapResult",
    "NavigationFacade",
]
