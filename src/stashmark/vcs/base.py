"""Abstract base classes for the version control collaborators.

The stash layer never starts processes or touches the index itself; it
talks to git through the interfaces defined here.
"""

from abc import ABC, abstractmethod
from collections.abc import Collection, Sequence
from pathlib import Path

from stashmark.models import Repository, WorkingDirectoryFileChange
from stashmark.vcs.errors import GitErrorKind
from stashmark.vcs.models import GitResult

DEFAULT_SUCCESS_EXIT_CODES: frozenset[int] = frozenset({0})


class VCSExecutor(ABC):
    """Runs git commands against a repository path."""

    @abstractmethod
    def run(
        self,
        args: Sequence[str],
        path: Path,
        operation: str,
        *,
        success_exit_codes: Collection[int] = DEFAULT_SUCCESS_EXIT_CODES,
        expected_errors: Collection[GitErrorKind] = frozenset(),
    ) -> GitResult:
        """Run git and wait for it to exit.

        Args:
            args: Arguments to pass to git (without the executable)
            path: Working directory to run in
            operation: Label of the logical operation, used in logs and errors
            success_exit_codes: Exit codes that are returned instead of raising
            expected_errors: Failure categories that are returned instead of raising

        Returns:
            Result with exit code and captured output

        Raises:
            GitCommandFailedError: If git exits with a code outside success_exit_codes
                and the failure is not one of expected_errors
            VCSOperationError: If git could not be started
        """


class FileStager(ABC):
    """Marks working-directory changes as included in the next snapshot."""

    @abstractmethod
    def stage(self, repository: Repository, files: Sequence[WorkingDirectoryFileChange]) -> None:
        """Stage the given files.

        Args:
            repository: Repository the files belong to
            files: File changes to stage

        Raises:
            VCSOperationError: If staging fails
        """
