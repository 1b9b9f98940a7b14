"""
structnav User Configuration

Hierarchical config system with global defaults + local overrides:
- Global: ~/.structnav/config.json (cross-project settings)
- Local: .structnav/config.json (project-specific overrides)

Config structure:
{
  "navigation": {
    "wrap_around": true             // Scope navigation wraps at buffer ends
  },
  "editing": {
    "confirm_before_deleting": true, // Prompt before delete commands
    "backup_enabled": true           // Back up files before writing
  },
  "languages": {
    "extensions": {".mts": "typescript"}  // Extension -> language id overrides
  }
}
"""

import copy
import json
from pathlib import Path
from typing import Any, Dict, Optional

from structnav.exceptions import ConfigError
from structnav.logging_config import logger
from structnav.paths import get_paths


# Default configuration
DEFAULT_CONFIG = {
    "navigation": {
        "wrap_around": True,
    },
    "editing": {
        "confirm_before_deleting": True,
        "backup_enabled": True,
    },
    "languages": {
        "extensions": {},
    },
}


class UserConfig:
    """
    Manages hierarchical user configuration.

    Load order (with override):
    1. Default config (hardcoded)
    2. Global config (~/.structnav/config.json)
    3. Local config (.structnav/config.json)
    """

    def __init__(self, project_root: Optional[Path] = None, global_config_path: Optional[Path] = None):
        """
        Args:
            project_root: Project root directory (defaults to CWD)
            global_config_path: Override for the global config file
        """
        paths = get_paths(project_root)
        self.project_root = paths.project_root
        self.global_config_path = global_config_path or paths.global_config
        self.local_config_path = paths.local_config

        self._config = self._load_config()

    def _load_config(self) -> Dict[str, Any]:
        config = copy.deepcopy(DEFAULT_CONFIG)

        for label, path in (("global", self.global_config_path), ("local", self.local_config_path)):
            if not path.exists():
                continue
            try:
                with open(path, "r") as f:
                    loaded = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.warning(f"Failed to load {label} config: {e}")
                continue
            if not isinstance(loaded, dict):
                logger.warning(f"Ignoring {label} config at {path}: top level is not an object")
                continue
            config = self._deep_merge(config, loaded)
            logger.debug(f"Loaded {label} config from {path}")

        return config

    def _deep_merge(self, base: Dict, override: Dict) -> Dict:
        """Deep merge two dictionaries, with override taking precedence."""
        result = base.copy()

        for key, value in override.items():
            if key in result and isinstance(result[key], dict) and isinstance(value, dict):
                result[key] = self._deep_merge(result[key], value)
            else:
                result[key] = value

        return result

    def get(self, key: str, default: Any = None) -> Any:
        """
        Get a config value by dot-separated key.

        Examples:
            config.get("navigation.wrap_around")  # True
            config.get("languages.extensions")    # {}
        """
        value = self._config
        for k in key.split("."):
            if isinstance(value, dict) and k in value:
                value = value[k]
            else:
                return default
        return value

    @property
    def wrap_around(self) -> bool:
        return bool(self.get("navigation.wrap_around", True))

    @property
    def confirm_before_deleting(self) -> bool:
        return bool(self.get("editing.confirm_before_deleting", True))

    @property
    def backup_enabled(self) -> bool:
        return bool(self.get("editing.backup_enabled", True))

    @property
    def extension_overrides(self) -> Dict[str, str]:
        overrides = self.get("languages.extensions", {}) or {}
        if not isinstance(overrides, dict):
            raise ConfigError("languages.extensions must map extensions to language ids")
        return {ext.lower(): lang for ext, lang in overrides.items()}

    def set_global(self, key: str, value: Any) -> bool:
        """Set a global config value and save to disk."""
        return self._set_and_save(key, value, is_global=True)

    def set_local(self, key: str, value: Any) -> bool:
        """Set a local config value and save to disk."""
        return self._set_and_save(key, value, is_global=False)

    def _set_and_save(self, key: str, value: Any, is_global: bool) -> bool:
        """
        Set a config value and save to the appropriate file.

        Returns:
            True if successful, False otherwise
        """
        config_path = self.global_config_path if is_global else self.local_config_path

        if config_path.exists():
            try:
                with open(config_path, "r") as f:
                    config = json.load(f)
            except (OSError, json.JSONDecodeError) as e:
                logger.error(f"Failed to load config from {config_path}: {e}")
                return False
        else:
            config = {}

        keys = key.split(".")
        current = config
        for k in keys[:-1]:
            if not isinstance(current.get(k), dict):
                current[k] = {}
            current = current[k]
        current[keys[-1]] = value

        try:
            config_path.parent.mkdir(parents=True, exist_ok=True)
            with open(config_path, "w") as f:
                json.dump(config, f, indent=2)
        except OSError as e:
            logger.error(f"Failed to save config to {config_path}: {e}")
            return False

        self._config = self._load_config()
        logger.info(f"Saved {'global' if is_global else 'local'} config: {key}={value}")
        return True

    def get_all(self) -> Dict[str, Any]:
        """The entire merged configuration."""
        return copy.deepcopy(self._config)

    def reload(self) -> None:
        """Reload configuration from disk."""
        self._config = self._load_config()


def parse_config_value(raw: str) -> Any:
    """
    Interpret a value typed on the command line.

    JSON literals (true, 3, {"a": 1}) are decoded; anything else stays a string.
    """
    try:
        return json.loads(raw)
    except json.JSONDecodeError:
        return raw
