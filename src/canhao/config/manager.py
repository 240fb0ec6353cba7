"""Configuration manager for loading and saving Canhão Podcast config."""

import logging
from pathlib import Path

import yaml
from pydantic import ValidationError

from canhao.config.schema import GlobalConfig
from canhao.utils.errors import InvalidConfigError
from canhao.utils.paths import get_config_dir, get_config_file, get_data_dir

logger = logging.getLogger(__name__)


class ConfigManager:
    """Manages the Canhão Podcast configuration file."""

    def __init__(self, config_dir: Path | None = None) -> None:
        """Initialize the config manager.

        Args:
            config_dir: Optional custom config directory. Defaults to XDG config dir.
        """
        if config_dir is None:
            self.config_dir = get_config_dir()
            self.config_file = get_config_file()
        else:
            self.config_dir = config_dir
            self.config_file = config_dir / "config.yaml"

    def load_config(self) -> GlobalConfig:
        """Load and validate global configuration.

        Returns:
            Validated GlobalConfig instance

        Raises:
            InvalidConfigError: If config is invalid
        """
        if not self.config_file.exists():
            logger.debug(f"No config at {self.config_file}, writing defaults")
            config = GlobalConfig()
            self.save_config(config)
            return config

        try:
            with open(self.config_file, encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
            if not isinstance(data, dict):
                raise ValueError("top level must be a mapping")
            return GlobalConfig(**data)
        except (yaml.YAMLError, ValidationError, ValueError, TypeError) as e:
            raise InvalidConfigError(
                f"Invalid configuration in {self.config_file}: {e}"
            ) from e

    def save_config(self, config: GlobalConfig) -> None:
        """Save global configuration.

        Args:
            config: GlobalConfig instance to save
        """
        data = config.model_dump(mode="python")

        # Convert Path to string
        if isinstance(data.get("data_dir"), Path):
            data["data_dir"] = str(data["data_dir"])

        self.config_dir.mkdir(parents=True, exist_ok=True)

        with open(self.config_file, "w", encoding="utf-8") as f:
            yaml.safe_dump(data, f, default_flow_style=False, sort_keys=False)

    def set_value(self, key: str, value: str) -> GlobalConfig:
        """Set a single top-level key from its string form and save.

        Args:
            key: Config field name
            value: Raw value as typed by the user

        Returns:
            The updated, validated configuration

        Raises:
            InvalidConfigError: If the key is unknown or the value is rejected
        """
        config = self.load_config()

        if key not in GlobalConfig.model_fields:
            raise InvalidConfigError(f"Unknown config key: {key}")

        data = config.model_dump(mode="python")
        field_type = type(data[key]) if data[key] is not None else None

        value_converted: bool | str | None
        if field_type is bool:
            value_converted = value.lower() in ("true", "yes", "1")
        elif key == "log_level":
            value_converted = value.upper()
        elif key == "data_dir" and value.lower() in ("", "none", "default"):
            value_converted = None
        else:
            value_converted = value
        data[key] = value_converted

        try:
            updated = GlobalConfig(**data)
        except ValidationError as e:
            raise InvalidConfigError(f"Invalid value for {key}: {value}") from e

        self.save_config(updated)
        return updated

    @staticmethod
    def resolve_data_dir(config: GlobalConfig) -> Path:
        """Return the directory holding the private episode store."""
        if config.data_dir is None:
            return get_data_dir()
        return config.data_dir.expanduser()

    def resolve_store_file(self, config: GlobalConfig) -> Path:
        """Return the full path of the private episode store."""
        return self.resolve_data_dir(config) / config.store_filename
