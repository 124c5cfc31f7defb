"""Parsing of `--raw --numstat -z` diff output into file changes."""

import re

from stashmark.models import CommittedFileChange, FileStatus
from stashmark.stash.exceptions import StashParseError

_NUMSTAT_RE = re.compile(r"^(\d+|-)\t(\d+|-)\t(.*)$", re.DOTALL)


def _count(value: str) -> int | None:
    return None if value == "-" else int(value)


def parse_raw_numstat(output: str, commitish: str, parent_commitish: str) -> list[CommittedFileChange]:
    """Parse raw and numstat records printed with `-z`.

    Raw records come first, one per file::

        :100644 100644 <src-sha> <dst-sha> M\\0path\\0
        :100644 100644 <src-sha> <dst-sha> R087\\0old\\0new\\0

    followed by one numstat record per file, in the same order::

        <added>\\t<deleted>\\tpath\\0
        <added>\\t<deleted>\\t\\0old\\0new\\0

    Args:
        output: Raw stdout of the diff command
        commitish: Commit the changes belong to
        parent_commitish: Commit the changes are compared against

    Returns:
        File changes in the order git printed them

    Raises:
        StashParseError: If a record is malformed
    """
    tokens = output.split("\0")
    raw: list[dict[str, str | int | None]] = []
    numstat_index = 0
    i = 0

    def next_token(what: str) -> str:
        nonlocal i
        i += 1
        if i >= len(tokens):
            raise StashParseError(f"Missing {what} in diff output")
        return tokens[i]

    while i < len(tokens):
        token = tokens[i].lstrip("\n")

        if not token:
            i += 1
            continue

        if token.startswith(":"):
            parts = token.split()
            if len(parts) < 5:
                raise StashParseError(f"Invalid raw diff record: {token!r}")
            status_code = parts[-1]
            try:
                status = FileStatus.from_code(status_code)
            except ValueError as e:
                raise StashParseError(f"Unknown file status {status_code!r}") from e

            old_path = next_token("old path") if status in (FileStatus.RENAMED, FileStatus.COPIED) else None
            path = next_token("path")
            raw.append({"path": path, "old_path": old_path, "status": status, "additions": None, "deletions": None})
        else:
            match = _NUMSTAT_RE.match(token)
            if match is None:
                raise StashParseError(f"Invalid numstat record: {token!r}")
            if numstat_index >= len(raw):
                raise StashParseError(f"Numstat record without a matching raw record: {token!r}")

            added, deleted, path = match.groups()
            entry = raw[numstat_index]
            entry["additions"] = _count(added)
            entry["deletions"] = _count(deleted)
            if not path:
                # Renames and copies list both paths as separate tokens
                i += 2
            numstat_index += 1

        i += 1

    return [
        CommittedFileChange(
            commitish=commitish,
            parent_commitish=parent_commitish,
            **entry,  # type: ignore[arg-type]
        )
        for entry in raw
    ]
