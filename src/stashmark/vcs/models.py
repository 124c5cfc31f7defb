"""Models for git command execution."""

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from stashmark.vcs.errors import GitErrorKind


class GitResult(BaseModel):
    """Outcome of a single git invocation that the caller allowed to finish."""

    model_config = ConfigDict(frozen=True)

    args: list[str] = Field(description="Arguments passed to git (without the executable)")
    path: Path = Field(description="Working directory the command ran in")
    operation: str = Field(description="Label of the logical operation")
    exit_code: int = Field(description="Process exit code")
    stdout: str = Field(default="", description="Captured standard output, untrimmed")
    stderr: str = Field(default="", description="Captured standard error")
    error: GitErrorKind | None = Field(
        default=None,
        description="Failure category detected from stderr or stdout, if any",
    )

    @property
    def succeeded(self) -> bool:
        """Check if git exited with code 0.

        Returns:
            True if the exit code was 0
        """
        return self.exit_code == 0
