"""
Scope Boundary Resolver: function/class/interface/enum bodies by brace
balance or indentation.
"""

from .resolver import (
    brace_scope_end,
    indentation_scope_end,
    resolve_scope_end,
    find_containing,
    find_adjacent,
    find_all,
    get_indentation,
)

__all__ = [
    "brace_scope_end",
    "indentation_scope_end",
    "resolve_scope_end",
    "find_containing",
    "find_adjacent",
    "find_all",
    "get_indentation",
]
