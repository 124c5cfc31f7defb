"""Tests for Git manager."""

from pathlib import Path
from unittest.mock import PropertyMock, patch

import git
import pytest

from stashmark.models import FileStatus
from stashmark.vcs.exceptions import NotARepositoryError, VCSOperationError
from stashmark.vcs.git.manager import GitManager


class TestGitManagerInit:
    """Tests for GitManager initialization."""

    def test_init_with_git_repo(self, git_repo: Path) -> None:
        """Test initialization in a Git repository."""
        manager = GitManager(git_repo)

        assert manager.repo_path == git_repo
        assert manager.repository.path.resolve() == git_repo.resolve()

    def test_init_with_current_directory(self, git_repo: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        """Test initialization with current directory."""
        monkeypatch.chdir(git_repo)

        manager = GitManager()

        assert manager.repository.path.resolve() == git_repo.resolve()

    def test_init_from_subdirectory(self, git_repo: Path) -> None:
        """Test the repository root is found from a subdirectory."""
        subdir = git_repo / "src" / "pkg"
        subdir.mkdir(parents=True)

        manager = GitManager(subdir)

        assert manager.repository.path.resolve() == git_repo.resolve()

    def test_init_with_non_git_directory(self, tmp_path: Path) -> None:
        """Test initialization fails for non-Git directory."""
        non_git_dir = tmp_path / "not_a_repo"
        non_git_dir.mkdir()

        with (
            patch("stashmark.vcs.git.manager.git.Repo", side_effect=git.InvalidGitRepositoryError(str(non_git_dir))),
            pytest.raises(NotARepositoryError, match="Not a Git repository"),
        ):
            GitManager(non_git_dir)

    def test_init_with_missing_path(self, tmp_path: Path) -> None:
        """Test initialization fails for a path that does not exist."""
        with pytest.raises(NotARepositoryError, match="Not a Git repository"):
            GitManager(tmp_path / "missing")

    def test_bare_repository_has_no_working_directory(self, tmp_path: Path) -> None:
        """Test bare repositories are rejected when a working directory is needed."""
        git.Repo.init(tmp_path / "bare.git", bare=True)
        manager = GitManager(tmp_path / "bare.git")

        with pytest.raises(NotARepositoryError, match="Bare repositories"):
            _ = manager.repository


class TestGitManagerState:
    """Tests for reading repository state."""

    def test_get_current_branch(self, git_repo: Path) -> None:
        """Test the current branch and its tip are returned."""
        manager = GitManager(git_repo)

        branch = manager.get_current_branch()

        assert branch.name in ["master", "main"]
        assert branch.tip_sha == manager.repo.head.commit.hexsha

    def test_get_current_branch_unborn(self, tmp_path: Path) -> None:
        """Test a branch without commits has no tip."""
        git.Repo.init(tmp_path)

        branch = GitManager(tmp_path).get_current_branch()

        assert branch.name in ["master", "main"]
        assert branch.tip_sha is None

    def test_get_current_branch_detached(self, git_repo: Path) -> None:
        """Test a detached HEAD is an error."""
        manager = GitManager(git_repo)
        manager.repo.git.checkout("--detach")

        with pytest.raises(VCSOperationError, match="detached HEAD"):
            manager.get_current_branch()

    def test_get_current_branch_failure(self, git_repo: Path) -> None:
        """Test unexpected failures are wrapped."""
        manager = GitManager(git_repo)

        with (
            patch.object(type(manager.repo), "active_branch", new_callable=PropertyMock) as active_branch,
            pytest.raises(VCSOperationError, match="Unable to get current branch"),
        ):
            active_branch.side_effect = TypeError("broken")
            manager.get_current_branch()

    def test_get_untracked_files(self, git_repo: Path) -> None:
        """Test untracked files are reported with the untracked status."""
        (git_repo / "new.txt").write_text("new\n")
        (git_repo / "docs").mkdir()
        (git_repo / "docs" / "notes.md").write_text("notes\n")

        files = GitManager(git_repo).get_untracked_files()

        assert sorted(f.path for f in files) == ["docs/notes.md", "new.txt"]
        assert all(f.status == FileStatus.UNTRACKED for f in files)
        assert not any(f.include_all for f in files)
