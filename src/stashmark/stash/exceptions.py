"""Stash-specific exceptions."""

from stashmark.stash.models import MoveState
from stashmark.vcs.exceptions import GitCommandFailedError, VCSError
from stashmark.vcs.models import GitResult


class StashError(VCSError):
    """Base exception for stash errors."""


class StashParseError(StashError):
    """The stash reflog output could not be parsed."""


class StashCommandError(StashError):
    """A git command issued on behalf of a stash operation failed.

    Keeps the command context of the underlying failure.
    """

    def __init__(
        self,
        message: str,
        command: str | None = None,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize command error.

        Args:
            message: Error message
            command: Failed command line, if one was run
            exit_code: Exit code reported by git, if one was run
            stderr: Captured standard error
        """
        super().__init__(message)
        self.command = command
        self.exit_code = exit_code
        self.stderr = stderr

    @classmethod
    def from_command_failure(cls, error: GitCommandFailedError, message: str | None = None) -> "StashCommandError":
        """Build an error from a failed git invocation.

        Args:
            error: The executor failure
            message: Optional message to use instead of the failure's own

        Returns:
            New error carrying the command, exit code and stderr
        """
        return cls(
            message or str(error),
            command=error.command,
            exit_code=error.exit_code,
            stderr=error.stderr,
        )

    @classmethod
    def from_result(cls, result: GitResult, message: str) -> "StashCommandError":
        """Build an error from a git invocation that ran but is treated as failed.

        Args:
            result: The allowed-but-failed result
            message: Error message

        Returns:
            New error carrying the command, exit code and stderr
        """
        return cls(
            message,
            command=" ".join(["git", *result.args]),
            exit_code=result.exit_code,
            stderr=result.stderr,
        )


class StashReadError(StashCommandError):
    """Listing or inspecting stash entries failed."""


class StashMutationError(StashCommandError):
    """Creating, moving, popping or dropping a stash entry failed."""


class StashMoveError(StashMutationError):
    """Moving a stash entry stopped part way.

    `state` is the last step that completed, so a caller can tell an
    unreachable leftover commit (COMMIT_CREATED) from a duplicated stash
    entry (STORED).
    """

    def __init__(
        self,
        message: str,
        state: MoveState,
        commit_sha: str | None = None,
        command: str | None = None,
        exit_code: int | None = None,
        stderr: str = "",
    ) -> None:
        """Initialize move error.

        Args:
            message: Error message
            state: Last completed step
            commit_sha: Commit created in the first step, if it completed
            command: Failed command line
            exit_code: Exit code reported by git
            stderr: Captured standard error
        """
        super().__init__(message, command=command, exit_code=exit_code, stderr=stderr)
        self.state = state
        self.commit_sha = commit_sha
