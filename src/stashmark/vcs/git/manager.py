"""Git repository inspection."""

from pathlib import Path

import git

from stashmark.models import Branch, FileStatus, Repository, WorkingDirectoryFileChange
from stashmark.vcs.exceptions import NotARepositoryError, VCSOperationError


class GitManager:
    """Reads repository state needed to drive stash operations."""

    def __init__(self, repo_path: str | Path | None = None) -> None:
        """Initialize Git manager.

        Args:
            repo_path: Path to Git repository (default: current directory)

        Raises:
            NotARepositoryError: If path is not a Git repository
        """
        self.repo_path = Path(repo_path or Path.cwd())

        try:
            self.repo = git.Repo(self.repo_path, search_parent_directories=True)
        except (git.InvalidGitRepositoryError, git.NoSuchPathError) as e:
            msg = f"Not a Git repository: {self.repo_path}"
            raise NotARepositoryError(msg) from e
        except git.GitError as e:
            msg = f"Git error: {e}"
            raise VCSOperationError(msg) from e

    @property
    def repository(self) -> Repository:
        """Get the repository value object for the working directory root.

        Returns:
            Repository pointing at the working tree root

        Raises:
            NotARepositoryError: If the repository is bare
        """
        if self.repo.working_tree_dir is None:
            msg = f"Bare repositories have no working directory: {self.repo_path}"
            raise NotARepositoryError(msg)
        return Repository(path=Path(self.repo.working_tree_dir))

    def get_current_branch(self) -> Branch:
        """Get the current branch.

        Returns:
            Current branch

        Raises:
            VCSOperationError: If HEAD is detached or unborn
        """
        if self.repo.head.is_detached:
            msg = "Repository is in detached HEAD state"
            raise VCSOperationError(msg)

        try:
            head = self.repo.active_branch
            return Branch(name=head.name, tip_sha=head.commit.hexsha)
        except ValueError:
            # Unborn branch: HEAD names a ref with no commit yet
            return Branch(name=self.repo.active_branch.name)
        except Exception as e:
            msg = f"Unable to get current branch: {e}"
            raise VCSOperationError(msg) from e

    def get_untracked_files(self) -> list[WorkingDirectoryFileChange]:
        """Get untracked (new, not ignored) files in the working directory.

        Returns:
            File changes for each untracked file
        """
        return [
            WorkingDirectoryFileChange(path=path, status=FileStatus.UNTRACKED)
            for path in self.repo.untracked_files
        ]
