"""Configuration file management for spendcap."""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from spendcap.domain.errors import SpendcapError
from spendcap.store.schema import get_db_path

DEFAULT_CONFIG: dict[str, Any] = {
    "log_level": "WARNING",
    "list_limit": 50,
    "top_limit": 5,
}


class ConfigError(SpendcapError):
    """Raised when the config file exists but cannot be read."""


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "spendcap" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    save_config(dict(DEFAULT_CONFIG), config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_settings(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration merged over the defaults.

    A missing config file is not an error; defaults are returned.

    Raises:
        ConfigError: If the config file is not valid TOML.
    """
    settings = dict(DEFAULT_CONFIG)
    try:
        settings.update(load_config(config_path))
    except FileNotFoundError:
        pass
    except tomllib.TOMLDecodeError as e:
        path = config_path or get_config_path()
        raise ConfigError(f"Invalid config file {path}: {e}", details={"path": str(path)}) from e
    return settings


def get_setting(key: str, config_path: Path | None = None) -> Any:
    """Get a single setting, falling back to its default."""
    return load_settings(config_path).get(key)


def resolve_db_path(config_path: Path | None = None) -> Path:
    """Database path from the ``database`` setting, else the XDG default."""
    configured = get_setting("database", config_path)
    if configured:
        return Path(configured).expanduser()
    return get_db_path()
