"""Custom exceptions for Canhão Podcast."""


class CanhaoError(Exception):
    """Base exception for all Canhão Podcast errors."""

    pass


class ConfigError(CanhaoError):
    """Configuration-related errors."""

    pass


class InvalidConfigError(ConfigError):
    """Invalid configuration data."""

    pass


class StorageError(CanhaoError):
    """Episode persistence errors."""

    pass


class StorageWriteError(StorageError):
    """Writing the private store or an export file failed."""

    pass
