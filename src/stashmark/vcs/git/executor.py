"""Git command execution backed by GitPython."""

import logging
from collections.abc import Collection, Sequence
from pathlib import Path

import git

from stashmark.vcs.base import DEFAULT_SUCCESS_EXIT_CODES, VCSExecutor
from stashmark.vcs.errors import GitErrorKind, detect_error
from stashmark.vcs.exceptions import GitCommandFailedError, VCSOperationError
from stashmark.vcs.models import GitResult

logger = logging.getLogger(__name__)


class GitExecutor(VCSExecutor):
    """Runs git through `git.Git.execute` and applies exit code allow-lists."""

    def __init__(self, git_executable: str = "git") -> None:
        """Initialize executor.

        Args:
            git_executable: Name or path of the git binary
        """
        self.git_executable = git_executable

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

        Output is returned untrimmed so callers can compare it exactly.

        Args:
            args: Arguments to pass to git (without the executable)
            path: Working directory to run in
            operation: Label of the logical operation, used in logs and errors
            success_exit_codes: Exit codes that are returned instead of raising
            expected_errors: Failure categories that are returned instead of raising

        Returns:
            Result with exit code and captured output

        Raises:
            GitCommandFailedError: If the exit code is not allowed and the failure is unexpected
            VCSOperationError: If git could not be started
        """
        command = [self.git_executable, *args]
        logger.debug(f"[{operation}] running {' '.join(command)} in {path}")

        try:
            exit_code, stdout, stderr = git.Git(str(path)).execute(
                command,
                with_extended_output=True,
                with_exceptions=False,
                strip_newline_in_stdout=False,
            )
        except git.GitCommandNotFound as e:
            msg = f"Git executable not found: {self.git_executable}"
            raise VCSOperationError(msg) from e
        except git.GitError as e:
            msg = f"Git error: {e}"
            raise VCSOperationError(msg) from e

        # git prints merge conflicts on stdout and most other failures on stderr
        error = (detect_error(stderr) or detect_error(stdout)) if exit_code != 0 else None
        result = GitResult(
            args=list(args),
            path=path,
            operation=operation,
            exit_code=exit_code,
            stdout=stdout,
            stderr=stderr,
            error=error,
        )

        if exit_code in success_exit_codes:
            return result

        if error is not None and error in expected_errors:
            logger.debug(f"[{operation}] git exited with {exit_code}, expected error: {error.display_name}")
            return result

        raise GitCommandFailedError(
            args,
            path,
            operation,
            exit_code,
            stdout=stdout,
            stderr=stderr,
        )
