"""Tests for spendcap.config."""

import stat
from pathlib import Path

import pytest

from spendcap.config import (
    DEFAULT_CONFIG,
    ConfigError,
    create_default_config,
    get_config_path,
    get_setting,
    load_config,
    load_settings,
    resolve_db_path,
    save_config,
)


class TestConfigFile:
    """Tests for reading and writing the config file."""

    def test_xdg_config_home(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should place the config under XDG_CONFIG_HOME."""
        monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
        assert get_config_path() == tmp_path / "spendcap" / "config.toml"

    def test_default_config_written_privately(self, tmp_path: Path) -> None:
        """Should write defaults with owner-only permissions."""
        path = tmp_path / "spendcap" / "config.toml"

        create_default_config(path)

        assert load_config(path) == DEFAULT_CONFIG
        assert stat.S_IMODE(path.stat().st_mode) == 0o600

    def test_missing_file_raises(self, tmp_path: Path) -> None:
        """Should raise FileNotFoundError from load_config."""
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "nope.toml")


class TestSettings:
    """Tests for merged settings."""

    def test_defaults_without_file(self, tmp_path: Path) -> None:
        """Should return defaults when no file exists."""
        assert load_settings(tmp_path / "missing.toml") == DEFAULT_CONFIG

    def test_file_overrides_defaults(self, tmp_path: Path) -> None:
        """Should let the file override individual keys."""
        path = tmp_path / "config.toml"
        save_config({"top_limit": 10}, path)

        assert get_setting("top_limit", path) == 10
        assert get_setting("list_limit", path) == 50

    def test_database_setting(self, tmp_path: Path) -> None:
        """Should use the configured database path."""
        path = tmp_path / "config.toml"
        save_config({"database": str(tmp_path / "custom.db")}, path)

        assert resolve_db_path(path) == tmp_path / "custom.db"

    def test_database_default(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Should fall back to the XDG data path."""
        monkeypatch.setenv("XDG_DATA_HOME", str(tmp_path))
        assert resolve_db_path(tmp_path / "missing.toml") == tmp_path / "spendcap" / "spendcap.db"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        """Should raise ConfigError naming the broken file."""
        path = tmp_path / "config.toml"
        path.write_text("log_level = [broken\n")

        with pytest.raises(ConfigError, match="Invalid config file") as excinfo:
            load_settings(path)

        assert excinfo.value.details == {"path": str(path)}
        with pytest.raises(ConfigError):
            resolve_db_path(path)
