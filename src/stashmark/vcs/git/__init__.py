"""Git implementations of the VCS collaborators."""

from stashmark.vcs.git.executor import GitExecutor
from stashmark.vcs.git.manager import GitManager
from stashmark.vcs.git.staging import GitFileStager

__all__ = [
    "GitExecutor",
    "GitFileStager",
    "GitManager",
]
