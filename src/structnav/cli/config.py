"""
CLI Configuration

Process-wide output settings for the structnav CLI.
"""

import os
from typing import Optional


class CLIConfig:
    """Configuration for CLI commands"""

    # Machine mode (plain text / minified JSON output)
    _machine_mode: Optional[bool] = None

    @classmethod
    def set_machine_mode(cls, enabled: Optional[bool]) -> None:
        """Force machine mode on or off; None restores the default."""
        cls._machine_mode = enabled

    @classmethod
    def is_machine_mode(cls) -> bool:
        """
        Check if machine mode is active.

        Machine mode is the default. Returns False only if human mode is
        requested with --human or STRUCTNAV_HUMAN_MODE.
        """
        if cls._machine_mode is not None:
            return cls._machine_mode
        if os.getenv("STRUCTNAV_HUMAN_MODE", "").lower() in ("1", "true", "yes"):
            return False
        return True
