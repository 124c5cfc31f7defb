"""Configuration management for stashmark."""

from stashmark.config.exceptions import (
    ConfigurationError,
    InvalidConfigurationError,
)
from stashmark.config.models import StashmarkConfig

__all__ = [
    "ConfigurationError",
    "InvalidConfigurationError",
    "StashmarkConfig",
]
