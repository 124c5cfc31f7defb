"""Classification of git failures from their stderr output.

Git reports most failures with exit code 1 or 128, so the category of a
failure has to be recovered from the text it prints.
"""

import re
from enum import Enum


class GitErrorKind(str, Enum):
    """Known categories of git failures."""

    MERGE_CONFLICTS = "merge-conflicts"
    LOCAL_CHANGES_OVERWRITTEN = "local-changes-overwritten"
    UNTRACKED_FILES_OVERWRITTEN = "untracked-files-overwritten"
    NOT_A_REPOSITORY = "not-a-repository"
    BAD_REVISION = "bad-revision"
    INDEX_LOCKED = "index-locked"
    NOT_A_STASH_COMMIT = "not-a-stash-commit"

    @property
    def display_name(self) -> str:
        """Get human-readable description.

        Returns:
            Description of the failure category
        """
        return {
            GitErrorKind.MERGE_CONFLICTS: "Merge conflicts",
            GitErrorKind.LOCAL_CHANGES_OVERWRITTEN: "Local changes would be overwritten",
            GitErrorKind.UNTRACKED_FILES_OVERWRITTEN: "Untracked files would be overwritten",
            GitErrorKind.NOT_A_REPOSITORY: "Not a git repository",
            GitErrorKind.BAD_REVISION: "Bad revision",
            GitErrorKind.INDEX_LOCKED: "Index is locked by another process",
            GitErrorKind.NOT_A_STASH_COMMIT: "Not a stash entry",
        }[self]


# Checked in order; the first match wins
_ERROR_PATTERNS: list[tuple[GitErrorKind, re.Pattern[str]]] = [
    (
        GitErrorKind.MERGE_CONFLICTS,
        re.compile(r"^CONFLICT \(.+\): |Automatic merge failed; fix conflicts", re.MULTILINE),
    ),
    (
        GitErrorKind.LOCAL_CHANGES_OVERWRITTEN,
        re.compile(r"error: Your local changes to the following files would be overwritten"),
    ),
    (
        GitErrorKind.UNTRACKED_FILES_OVERWRITTEN,
        re.compile(r"error: The following untracked working tree files would be (?:overwritten|removed)"),
    ),
    (
        GitErrorKind.NOT_A_REPOSITORY,
        re.compile(r"fatal: not a git repository", re.IGNORECASE),
    ),
    (
        GitErrorKind.INDEX_LOCKED,
        re.compile(r"Unable to create '.+\.lock': File exists"),
    ),
    (
        GitErrorKind.NOT_A_STASH_COMMIT,
        re.compile(r"is not a stash-like commit|is not a valid reference|No stash entries found"),
    ),
    (
        GitErrorKind.BAD_REVISION,
        re.compile(r"fatal: (?:bad revision|ambiguous argument|bad object) '?[^'\n]+'?"),
    ),
]


def detect_error(output: str) -> GitErrorKind | None:
    """Detect the category of a git failure.

    Args:
        output: Standard error or standard output of a git invocation

    Returns:
        Matching GitErrorKind, or None if the output is not recognised
    """
    if not output:
        return None

    for kind, pattern in _ERROR_PATTERNS:
        if pattern.search(output):
            return kind

    return None
