"""
structnav Path Configuration

All paths are relative to the project root (current working directory).

Directory Structure:
.structnav/
├── config.json          # Project-local configuration
├── backups/             # Backups taken before a file is rewritten
└── logs/                # Log files (opt-in)
"""

from pathlib import Path
from typing import Optional


class StructnavPaths:
    """
    Centralized path configuration for structnav.

    All paths are lazily resolved relative to project_root.
    Default project_root is current working directory.
    """

    STRUCTNAV_DIR = ".structnav"

    CONFIG_NAME = "config.json"

    BACKUPS_DIR = "backups"
    LOGS_DIR = "logs"

    def __init__(self, project_root: Optional[Path] = None):
        self._project_root = project_root

    @property
    def project_root(self) -> Path:
        """Get the project root directory."""
        if self._project_root is None:
            return Path.cwd()
        return self._project_root

    @property
    def structnav_dir(self) -> Path:
        return self.project_root / self.STRUCTNAV_DIR

    @property
    def global_dir(self) -> Path:
        return Path.home() / self.STRUCTNAV_DIR

    @property
    def local_config(self) -> Path:
        return self.structnav_dir / self.CONFIG_NAME

    @property
    def global_config(self) -> Path:
        return self.global_dir / self.CONFIG_NAME

    @property
    def backups_dir(self) -> Path:
        return self.structnav_dir / self.BACKUPS_DIR

    @property
    def logs_dir(self) -> Path:
        return self.structnav_dir / self.LOGS_DIR

    def ensure_dirs(self) -> None:
        """Create the .structnav directory and its subdirectories."""
        for directory in (self.structnav_dir, self.backups_dir, self.logs_dir):
            directory.mkdir(parents=True, exist_ok=True)


def get_paths(project_root: Optional[Path] = None) -> StructnavPaths:
    """
    Get a path configuration for the given project root.

    Args:
        project_root: Project root directory (defaults to CWD)
    """
    return StructnavPaths(project_root)
