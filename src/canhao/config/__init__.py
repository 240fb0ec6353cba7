"""Configuration loading for Canhão Podcast."""

from canhao.config.manager import ConfigManager
from canhao.config.schema import GlobalConfig

__all__ = ["ConfigManager", "GlobalConfig"]
