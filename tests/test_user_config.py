"""
Tests for hierarchical user configuration.
"""

import json

import pytest

from structnav.exceptions import ConfigError
from structnav.user_config import DEFAULT_CONFIG, UserConfig, parse_config_value


class TestUserConfig:

    def test_defaults(self, isolated_project):
        config = UserConfig(isolated_project)
        assert config.wrap_around is True
        assert config.confirm_before_deleting is True
        assert config.backup_enabled is True
        assert config.extension_overrides == {}
        assert config.get("missing.key", "fallback") == "fallback"

    def test_local_overrides_global(self, isolated_project):
        config = UserConfig(isolated_project)
        assert config.set_global("navigation.wrap_around", False)
        assert config.wrap_around is False
        assert config.set_local("navigation.wrap_around", True)
        assert config.wrap_around is True

        reloaded = UserConfig(isolated_project)
        assert reloaded.wrap_around is True
        assert json.loads(reloaded.global_config_path.read_text()) == {"navigation": {"wrap_around": False}}

    def test_deep_merge_keeps_sibling_keys(self, isolated_project):
        config = UserConfig(isolated_project)
        config.set_local("editing.backup_enabled", False)
        assert config.backup_enabled is False
        assert config.confirm_before_deleting is True

    def test_defaults_are_not_mutated(self, isolated_project):
        config = UserConfig(isolated_project)
        config.get_all()["navigation"]["wrap_around"] = False
        assert DEFAULT_CONFIG["navigation"]["wrap_around"] is True
        assert config.wrap_around is True

    def test_extension_overrides_are_lowercased(self, isolated_project):
        config = UserConfig(isolated_project)
        config.set_local("languages.extensions", {".RS": "rust"})
        assert config.extension_overrides == {".rs": "rust"}

    def test_bad_extension_overrides(self, isolated_project):
        config = UserConfig(isolated_project)
        config.set_local("languages.extensions", ["rust"])
        with pytest.raises(ConfigError):
            config.extension_overrides

    def test_invalid_json_is_ignored(self, isolated_project):
        local = isolated_project / ".structnav" / "config.json"
        local.parent.mkdir()
        local.write_text("{not json")
        config = UserConfig(isolated_project)
        assert config.wrap_around is True


class TestParseConfigValue:

    @pytest.mark.parametrize("raw,expected", [
        ("true", True),
        ("false", False),
        ("3", 3),
        ('{".rs": "rust"}', {".rs": "rust"}),
        ("rust", "rust"),
    ])
    def test_values(self, raw, expected):
        assert parse_config_value(raw) == expected
