"""Platform-specific locations for config and data files."""

from pathlib import Path

import platformdirs

APP_NAME = "canhao"


def get_config_dir() -> Path:
    """Return the user config directory (XDG on Linux)."""
    return Path(platformdirs.user_config_dir(APP_NAME))


def get_config_file() -> Path:
    return get_config_dir() / "config.yaml"


def get_data_dir() -> Path:
    """Return the private data directory holding the episode store."""
    return Path(platformdirs.user_data_dir(APP_NAME))
