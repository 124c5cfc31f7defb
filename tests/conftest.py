"""Shared fixtures for stashmark tests."""

from pathlib import Path

import git
import pytest
from git_fakes import RecordingStager, ScriptedExecutor

from stashmark.models import Repository


@pytest.fixture
def executor() -> ScriptedExecutor:
    """Create an executor with no scripted output.

    Returns:
        Empty scripted executor
    """
    return ScriptedExecutor()


@pytest.fixture
def stager() -> RecordingStager:
    """Create a stager that records staged files.

    Returns:
        Recording stager
    """
    return RecordingStager()


@pytest.fixture
def repository(tmp_path: Path) -> Repository:
    """Create a repository value object pointing at a temporary directory.

    Args:
        tmp_path: Pytest temporary directory fixture

    Returns:
        Repository for tmp_path
    """
    return Repository(path=tmp_path)


@pytest.fixture
def git_repo(tmp_path: Path) -> Path:
    """Create a temporary Git repository with one commit.

    Args:
        tmp_path: Pytest temporary directory fixture

    Returns:
        Path to the temporary Git repository
    """
    repo = git.Repo.init(tmp_path)

    # git stash and commit-tree need an identity
    with repo.config_writer() as writer:
        writer.set_value("user", "name", "Stash Tester")
        writer.set_value("user", "email", "tester@example.com")
        writer.set_value("commit", "gpgsign", "false")

    test_file = tmp_path / "test.py"
    test_file.write_text("print('hello')\n")
    repo.index.add(["test.py"])
    repo.index.commit("Initial commit")

    return tmp_path
