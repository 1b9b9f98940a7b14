"""
Sexp navigation: scanning, parent/sibling relationships and transposition.
"""

from .scanner import SexpScanner, forward, backward, forward_span, backward_span
from .relations import find_parent, find_next_sibling, find_previous_sibling
from .transpose import swap, move_up, move_down, transpose_at

__all__ = [
    "SexpScanner",
    "forward",
    "backward",
    "forward_span",
    "backward_span",
    "find_parent",
    "find_next_sibling",
    "find_previous_sibling",
    "swap",
    "move_up",
    "move_down",
    "transpose_at",
]
