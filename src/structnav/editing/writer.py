"""
FileWriter: write an edited buffer back to disk safely.

Backup before the write, optimistic lock against concurrent edits,
atomic temp-file rename, restore from backup if the write fails.
"""

import hashlib
import os
import shutil
import tempfile
from datetime import datetime
from pathlib import Path
from typing import Dict, Optional, Tuple, Union

from structnav.buffer import TextBuffer
from structnav.exceptions import FileChangedError
from structnav.logging_config import logger
from structnav.paths import get_paths

FileState = Tuple[float, str]


class FileWriter:
    """
    Load files into buffers and save edited buffers back.

    Features:
    - Backups before every write (optional)
    - Atomic writes (temp file + rename)
    - Detection of files modified between load and save
    - Line endings kept exactly as loaded
    """

    def __init__(self, backup_dir: Optional[Union[str, Path]] = None, backup_enabled: bool = True):
        """
        Args:
            backup_dir: Where backups go (defaults to .structnav/backups)
            backup_enabled: Take a backup before each write
        """
        self.backup_dir = Path(backup_dir) if backup_dir else get_paths().backups_dir
        self.backup_enabled = backup_enabled
        self._states: Dict[str, FileState] = {}

    def load(self, file_path: Union[str, Path]) -> TextBuffer:
        """Read a file and remember its state for the later save."""
        buffer = TextBuffer.from_file(file_path)
        self._states[buffer.path] = self._get_file_state(buffer.path)
        return buffer

    def save(self, buffer: TextBuffer) -> Tuple[bool, Optional[str]]:
        """
        Write a buffer back to the file it was loaded from.

        Args:
            buffer: Buffer returned by load()

        Returns:
            (success, backup_path)

        Raises:
            FileChangedError: If the file changed on disk since load()
        """
        if buffer.path is None:
            raise ValueError("Buffer has no file path to save to")
        file_path = buffer.path

        expected = self._states.get(file_path)
        if expected is not None:
            self._check_file_unchanged(file_path, expected)

        backup_path = None
        if self.backup_enabled:
            backup_path = self.create_backup(file_path)
            if not backup_path:
                logger.error("Backup creation failed, aborting write")
                return False, None

        success = self._atomic_write(file_path, buffer.text)

        if success:
            self._states[file_path] = self._get_file_state(file_path)
            logger.info(f"Wrote {file_path} (buffer version {buffer.version})")
        else:
            logger.error(f"Failed to write changes to {file_path}")
            if backup_path:
                self._restore_backup(backup_path, file_path)

        return success, backup_path

    def create_backup(self, file_path: str) -> Optional[str]:
        """
        Create a timestamped backup of a file.

        Returns:
            Path to the backup, or None if it could not be made
        """
        path = Path(file_path)
        if not path.exists():
            logger.error(f"Cannot backup non-existent file: {file_path}")
            return None

        timestamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        backup_path = self.backup_dir / f"{path.name}.{timestamp}.backup"

        try:
            self.backup_dir.mkdir(parents=True, exist_ok=True)
            shutil.copy2(str(path), str(backup_path))
            logger.debug(f"Created backup: {backup_path}")
            return str(backup_path)
        except OSError as e:
            logger.error(f"Failed to create backup: {e}")
            return None

    def _atomic_write(self, file_path: str, content: str) -> bool:
        path = Path(file_path)

        try:
            # Temp file in the target's directory so the rename stays on one filesystem
            fd, temp_path = tempfile.mkstemp(
                dir=str(path.parent),
                prefix=f".{path.name}.",
                suffix=".tmp"
            )
        except OSError as e:
            logger.error(f"Failed to create temp file: {e}")
            return False

        try:
            with os.fdopen(fd, "w", encoding="utf-8", newline="") as f:
                f.write(content)
            os.replace(temp_path, str(path))
            logger.debug(f"Atomic write completed: {file_path}")
            return True
        except OSError as e:
            try:
                os.unlink(temp_path)
            except OSError:
                pass
            logger.error(f"Failed during atomic write: {e}")
            return False

    def _restore_backup(self, backup_path: str, target_path: str) -> bool:
        try:
            shutil.copy2(backup_path, target_path)
            logger.info(f"Restored {target_path} from backup")
            return True
        except OSError as e:
            logger.error(f"Failed to restore backup: {e}")
            return False

    def _get_file_state(self, file_path: str) -> FileState:
        """(mtime, sha256) of a file, or (0.0, "") if it does not exist."""
        path = Path(file_path)
        if not path.exists():
            return (0.0, "")

        mtime = path.stat().st_mtime
        with open(path, "rb") as f:
            content_hash = hashlib.sha256(f.read()).hexdigest()
        return (mtime, content_hash)

    def _check_file_unchanged(self, file_path: str, expected_state: FileState) -> None:
        current_mtime, current_hash = self._get_file_state(file_path)
        expected_mtime, expected_hash = expected_state

        if current_hash != expected_hash or current_mtime != expected_mtime:
            logger.error(
                f"File modified externally: {file_path}. "
                f"Expected hash={expected_hash[:8]}... but found hash={current_hash[:8]}..."
            )
            raise FileChangedError(file_path)
