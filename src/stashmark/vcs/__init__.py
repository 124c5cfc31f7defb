"""Version control collaborators for stashmark.

This module provides the executor and staging interfaces the stash layer
depends on, plus their git implementations.
"""

from stashmark.vcs.base import FileStager, VCSExecutor
from stashmark.vcs.errors import GitErrorKind, detect_error
from stashmark.vcs.exceptions import (
    GitCommandFailedError,
    NotARepositoryError,
    VCSError,
    VCSOperationError,
)
from stashmark.vcs.models import GitResult

__all__ = [
    "FileStager",
    "GitCommandFailedError",
    "GitErrorKind",
    "GitResult",
    "NotARepositoryError",
    "VCSError",
    "VCSExecutor",
    "VCSOperationError",
    "detect_error",
]
