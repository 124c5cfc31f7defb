"""Staging of working-directory files before a snapshot."""

import logging
from collections.abc import Sequence

from stashmark.models import Repository, WorkingDirectoryFileChange
from stashmark.vcs.base import FileStager, VCSExecutor

logger = logging.getLogger(__name__)


class GitFileStager(FileStager):
    """Stages whole files with `git update-index`."""

    def __init__(self, executor: VCSExecutor) -> None:
        """Initialize stager.

        Args:
            executor: Executor used to run git
        """
        self.executor = executor

    def stage(self, repository: Repository, files: Sequence[WorkingDirectoryFileChange]) -> None:
        """Stage every change in the files that have all changes selected.

        `--add` picks up untracked files, `--remove` records deletions and
        `--replace` lets a file replace a directory (or the reverse).

        Args:
            repository: Repository the files belong to
            files: File changes to stage

        Raises:
            GitCommandFailedError: If git rejects the update
        """
        paths = [f.path for f in files if f.include_all]
        skipped = len(files) - len(paths)
        if skipped:
            logger.debug(f"Skipping {skipped} file(s) without all changes selected")

        if not paths:
            return

        self.executor.run(
            ["update-index", "--add", "--remove", "--replace", "--", *paths],
            repository.path,
            "stageFiles",
        )
