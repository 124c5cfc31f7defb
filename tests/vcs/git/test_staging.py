"""Tests for staging files with git update-index."""

import logging
from pathlib import Path

import git
import pytest
from git_fakes import ScriptedExecutor

from stashmark.models import FileStatus, Repository, WorkingDirectoryFileChange
from stashmark.vcs.exceptions import GitCommandFailedError
from stashmark.vcs.git.executor import GitExecutor
from stashmark.vcs.git.staging import GitFileStager


def _change(path: str, include_all: bool = True) -> WorkingDirectoryFileChange:
    return WorkingDirectoryFileChange(path=path, status=FileStatus.UNTRACKED, include_all=include_all)


class TestGitFileStager:
    """Tests for GitFileStager."""

    def test_stages_selected_files(self, executor: ScriptedExecutor, repository: Repository) -> None:
        """Test fully selected files are passed to update-index."""
        executor.on("update-index")

        GitFileStager(executor).stage(repository, [_change("a.txt"), _change("dir/b.txt")])

        assert executor.calls == [["update-index", "--add", "--remove", "--replace", "--", "a.txt", "dir/b.txt"]]

    def test_skips_partially_selected_files(
        self,
        executor: ScriptedExecutor,
        repository: Repository,
        caplog: pytest.LogCaptureFixture,
    ) -> None:
        """Test files without all changes selected are left alone."""
        caplog.set_level(logging.DEBUG, logger="stashmark.vcs.git.staging")
        executor.on("update-index")

        GitFileStager(executor).stage(repository, [_change("a.txt"), _change("b.txt", include_all=False)])

        assert executor.calls == [["update-index", "--add", "--remove", "--replace", "--", "a.txt"]]
        assert "Skipping 1 file(s)" in caplog.text

    def test_nothing_to_stage(self, executor: ScriptedExecutor, repository: Repository) -> None:
        """Test git is not run when no file is selected."""
        GitFileStager(executor).stage(repository, [_change("a.txt", include_all=False)])

        assert executor.calls == []

    def test_failure_propagates(self, executor: ScriptedExecutor, repository: Repository) -> None:
        """Test update-index failures are raised to the caller."""
        executor.on("update-index", exit_code=128, stderr="fatal: Unable to create 'index.lock': File exists.")

        with pytest.raises(GitCommandFailedError) as exc_info:
            GitFileStager(executor).stage(repository, [_change("a.txt")])

        assert exc_info.value.operation == "stageFiles"

    def test_stages_untracked_file_in_real_repo(self, git_repo: Path) -> None:
        """Test an untracked file ends up in the index."""
        (git_repo / "new.txt").write_text("new\n")

        GitFileStager(GitExecutor()).stage(Repository(path=git_repo), [_change("new.txt")])

        repo = git.Repo(git_repo)
        assert ("new.txt", 0) in repo.index.entries
        assert "new.txt" not in repo.untracked_files
