"""
Per-language declaration rules, scope strategies and the language registry.
"""

from .strategies import (
    LanguageStrategy,
    BraceLanguageStrategy,
    IndentationLanguageStrategy,
    DefaultFallbackStrategy,
)
from .registry import (
    LanguageRegistry,
    LanguageProfile,
    default_registry,
    detect_language,
    SUPPORTED_EXTENSIONS,
)

__all__ = [
    "LanguageStrategy",
    "BraceLanguageStrategy",
    "IndentationLanguageStrategy",
    "DefaultFallbackStrategy",
    "LanguageRegistry",
    "LanguageProfile",
    "default_registry",
    "detect_language",
    "SUPPORTED_EXTENSIONS",
]
