"""
Bracket Pair Finder: nearest enclosing or next curly-brace pair.
"""

from .finder import CurlyBracketFinder

__all__ = ["CurlyBracketFinder"]
