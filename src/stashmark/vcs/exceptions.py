"""VCS exceptions for stashmark.

These carry enough context (command, exit code, output) for callers to
reconstruct what failed without re-running anything.
"""

from collections.abc import Sequence
from pathlib import Path


class VCSError(Exception):
    """Base exception for all VCS-related errors."""


class NotARepositoryError(VCSError):
    """Raised when a directory is not a valid repository."""


class VCSOperationError(VCSError):
    """Raised when a VCS operation fails."""


class GitCommandFailedError(VCSOperationError):
    """Raised when git exits with a code the caller did not allow."""

    def __init__(
        self,
        args: Sequence[str],
        path: Path,
        operation: str,
        exit_code: int,
        stdout: str = "",
        stderr: str = "",
    ) -> None:
        """Initialize command failure.

        Args:
            args: Arguments passed to git (without the executable)
            path: Working directory the command ran in
            operation: Label of the logical operation (e.g. 'popStashEntry')
            exit_code: Exit code reported by git
            stdout: Captured standard output
            stderr: Captured standard error
        """
        self.args_list = list(args)
        self.path = path
        self.operation = operation
        self.exit_code = exit_code
        self.stdout = stdout
        self.stderr = stderr
        super().__init__(self._format_message())

    @property
    def command(self) -> str:
        """Get the failed command as a printable string.

        Returns:
            Command line starting with 'git'
        """
        return " ".join(["git", *self.args_list])

    def _format_message(self) -> str:
        message = f"[{self.operation}] `{self.command}` exited with code {self.exit_code}"
        detail = self.stderr.strip() or self.stdout.strip()
        if detail:
            message += f": {detail}"
        return message
