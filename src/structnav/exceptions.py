# Custom exceptions for structnav

class StructnavError(Exception):
    """Base exception for all application-specific errors."""
    pass


class ConfigError(StructnavError):
    """Raised for configuration-related problems."""
    pass


class UnsupportedLanguageError(StructnavError):
    """Raised when a language id cannot be mapped to any strategy."""
    def __init__(self, language: str):
        self.language = language
        super().__init__(f"No strategy registered for language '{language}'")


class OverlappingUnitsError(StructnavError, ValueError):
    """Raised when two units handed to a swap overlap or are out of order."""
    def __init__(self, first, second):
        self.first = first
        self.second = second
        super().__init__(
            f"Cannot swap overlapping or unordered units: {first} and {second}"
        )


class NoSiblingError(StructnavError):
    """Raised when a move has no sibling to swap with."""
    def __init__(self, direction: str, current=None):
        self.direction = direction
        self.current = current
        word = "previous" if direction == "backward" else "next"
        super().__init__(f"No {word} sibling to move the current expression past")


class FileChangedError(StructnavError):
    """Raised when a file changes on disk between read and write."""
    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(
            f"File {file_path} was modified by another process since it was read"
        )
