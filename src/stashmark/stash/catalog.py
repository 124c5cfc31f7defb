"""Read access to the stash list of a repository."""

import logging

from stashmark.models import Branch, CommittedFileChange, Repository
from stashmark.stash.exceptions import StashReadError
from stashmark.stash.markers import DEFAULT_MARKER, StashMarker
from stashmark.stash.models import StashEntry, StashListing
from stashmark.stash.numstat import parse_raw_numstat
from stashmark.stash.parser import StashLogParser, count_entries
from stashmark.vcs.base import VCSExecutor
from stashmark.vcs.exceptions import GitCommandFailedError

logger = logging.getLogger(__name__)

STASH_REF = "refs/stash"

# `git log -g` exits with 128 when refs/stash has no reflog (no stash yet)
NO_REFLOG_EXIT_CODE = 128


class StashCatalog:
    """Lists stash entries and picks out the ones owned by this application.

    Nothing is cached: every query reads the live stash list, because entry
    names (`stash@{N}`) shift whenever an entry is added or removed.
    """

    def __init__(self, executor: VCSExecutor, marker: StashMarker = DEFAULT_MARKER) -> None:
        """Initialize the catalog.

        Args:
            executor: Executor used to run git
            marker: Marker grammar identifying owned entries
        """
        self.executor = executor
        self.marker = marker
        self.parser = StashLogParser()

    def list_entries(self, repository: Repository) -> StashListing:
        """Get the owned stash entries and the total number of entries.

        Entries keep the reflog order, which is last-created-first.

        Args:
            repository: Repository to read

        Returns:
            Owned entries and total entry count

        Raises:
            StashReadError: If git fails for any reason other than a missing stash reflog
            StashParseError: If the reflog output is malformed
        """
        args = ["log", "-g", *self.parser.format_args, STASH_REF]
        try:
            result = self.executor.run(
                args,
                repository.path,
                "getStashEntries",
                success_exit_codes={0, NO_REFLOG_EXIT_CODE},
            )
        except GitCommandFailedError as e:
            raise StashReadError.from_command_failure(e) from e

        if result.exit_code == NO_REFLOG_EXIT_CODE:
            # No refs/stash reflog, or not a repository at all; either way
            # there is nothing to list
            logger.debug(f"No stash reflog in {repository.path}")
            return StashListing(owned_entries=[], total_entry_count=0)

        records = self.parser.parse(result.stdout)
        owned_entries: list[StashEntry] = []

        for record in records:
            if record.is_trailer:
                continue
            branch_name = self.marker.extract_branch(record.message)
            if branch_name is None:
                continue
            owned_entries.append(
                StashEntry(
                    name=record.name,
                    stash_sha=record.stash_sha,
                    branch_name=branch_name,
                    tree=record.tree,
                    parents=record.parent_list,
                )
            )

        total = count_entries(records)
        logger.debug(f"Found {len(owned_entries)} owned of {total} stash entries in {repository.path}")
        return StashListing(owned_entries=owned_entries, total_entry_count=total)

    def find_owned_by_sha(self, repository: Repository, stash_sha: str) -> StashEntry | None:
        """Find the owned entry with the given commit hash.

        Args:
            repository: Repository to read
            stash_sha: Commit hash of the entry

        Returns:
            Matching entry with its current name, or None
        """
        listing = self.list_entries(repository)
        return next((e for e in listing.owned_entries if e.stash_sha == stash_sha), None)

    def find_latest_owned_for_branch(self, repository: Repository, branch: Branch | str) -> StashEntry | None:
        """Find the most recently created owned entry for a branch.

        Args:
            repository: Repository to read
            branch: Branch or branch name

        Returns:
            Most recent matching entry, or None
        """
        branch_name = branch if isinstance(branch, str) else branch.name
        listing = self.list_entries(repository)

        # Entries are last-created-first, so the first match is the latest
        return next((e for e in listing.owned_entries if e.branch_name == branch_name), None)

    def list_changed_files(self, repository: Repository, stash_sha: str) -> list[CommittedFileChange]:
        """Get the files changed by a stash entry, compared with its first parent.

        Args:
            repository: Repository to read
            stash_sha: Commit hash of the entry

        Returns:
            Changed files

        Raises:
            StashReadError: If git fails
            StashParseError: If the diff output is malformed
        """
        args = [
            "stash",
            "show",
            stash_sha,
            "--raw",
            "--numstat",
            "-z",
            "--format=format:",
            "--no-show-signature",
            "--",
        ]
        try:
            result = self.executor.run(args, repository.path, "getStashedFiles")
        except GitCommandFailedError as e:
            raise StashReadError.from_command_failure(e) from e

        return parse_raw_numstat(result.stdout, stash_sha, f"{stash_sha}^")

    def load_files(self, repository: Repository, entry: StashEntry) -> StashEntry:
        """Return a copy of the entry with its changed files loaded.

        Args:
            repository: Repository to read
            entry: Entry to load files for

        Returns:
            Entry in the loaded state
        """
        return entry.with_files(self.list_changed_files(repository, entry.stash_sha))
