"""Exceptions raised while loading stashmark settings."""


class ConfigurationError(Exception):
    """Base exception for configuration errors."""


class InvalidConfigurationError(ConfigurationError):
    """A setting or settings file is invalid."""
