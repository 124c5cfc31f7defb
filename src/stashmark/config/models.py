"""Configuration models."""

from pathlib import Path
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from stashmark.config.exceptions import InvalidConfigurationError
from stashmark.stash.markers import DEFAULT_STASH_MARKER

# Highest priority first
ENV_FILES = [".env.stashmark", ".env"]


class StashmarkConfig(BaseSettings):
    """Configuration for stashmark."""

    # Stash entry ownership
    stash_marker: str = Field(
        default=DEFAULT_STASH_MARKER,
        description="Literal sentinel embedded in the message of stash entries created by this application",
    )

    # Git invocation
    git_executable: str = Field(
        default="git",
        description="Path or name of the git binary",
    )
    sign_moved_entries: bool = Field(
        default=False,
        description="Let git GPG-sign the commit created when moving a stash entry",
    )

    # CLI defaults
    default_include_untracked: bool = Field(
        default=True,
        description="Stage untracked files before creating a stash entry",
    )

    model_config = SettingsConfigDict(
        # Later files override earlier ones
        env_file=list(reversed(ENV_FILES)),
        env_file_encoding="utf-8",
        env_prefix="STASHMARK_",
        case_sensitive=False,
        extra="ignore",
    )

    def __init__(self, env_file: str | Path | None = None, **values: Any) -> None:
        """Load configuration from the environment and env files.

        Args:
            env_file: Env file read instead of the default ones
            **values: Explicit values, which win over every other source

        Raises:
            InvalidConfigurationError: If env_file does not exist
        """
        if env_file is None:
            super().__init__(**values)
            return

        path = Path(env_file)
        if not path.is_file():
            raise InvalidConfigurationError(f"Environment file not found: {env_file}")
        super().__init__(_env_file=path, **values)

    @field_validator("stash_marker")
    @classmethod
    def validate_stash_marker(cls, v: str) -> str:
        """Reject markers that would break the `<marker><branch>` grammar.

        Args:
            v: Marker value

        Returns:
            The marker, stripped of surrounding whitespace

        Raises:
            InvalidConfigurationError: If the marker is blank or contains angle brackets
        """
        marker = v.strip()
        if not marker:
            raise InvalidConfigurationError("Stash marker must not be empty")
        if "<" in marker or ">" in marker:
            raise InvalidConfigurationError(f"Stash marker must not contain '<' or '>': {v!r}")
        return marker

    @field_validator("git_executable")
    @classmethod
    def validate_git_executable(cls, v: str) -> str:
        """Ensure a git binary was named.

        Raises:
            InvalidConfigurationError: If the value is blank
        """
        if not v.strip():
            raise InvalidConfigurationError("git_executable must not be empty")
        return v.strip()

    @staticmethod
    def find_env_file() -> Path | None:
        """Find the environment file being used.

        Checks for .env.stashmark and .env in current directory in that order.

        Returns:
            Path to the env file if found, None otherwise
        """
        for env_file in ENV_FILES:
            path = Path(env_file)
            if path.exists():
                return path.absolute()
        return None
