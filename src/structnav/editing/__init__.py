"""
Safe on-disk writes for commands that edit a file.
"""

from .writer import FileWriter

__all__ = ["FileWriter"]
