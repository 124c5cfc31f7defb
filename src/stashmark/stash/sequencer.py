"""Mutating stash operations: create, move, pop and drop.

Every operation that needs an entry's name resolves it from the commit hash
right before use. Names are positions in the stash reflog and shift after
each push, pop or drop, so a name obtained earlier is never reused.
"""

import logging
import re
from collections.abc import Sequence

from stashmark.models import Branch, Repository, WorkingDirectoryFileChange
from stashmark.stash.catalog import StashCatalog
from stashmark.stash.exceptions import (
    StashCommandError,
    StashError,
    StashMoveError,
    StashMutationError,
)
from stashmark.stash.markers import StashMarker
from stashmark.stash.models import (
    CreateOutcome,
    CreateResult,
    DropOutcome,
    MoveResult,
    MoveState,
    PopOutcome,
    PopResult,
    StashEntry,
)
from stashmark.vcs.base import FileStager, VCSExecutor
from stashmark.vcs.errors import GitErrorKind
from stashmark.vcs.exceptions import GitCommandFailedError

logger = logging.getLogger(__name__)

# Printed on stdout by `git stash push`, which still exits 0
NO_LOCAL_CHANGES_OUTPUT = "No local changes to save\n"

# Any stderr line starting with `error: ` means the stash was not created
ERROR_PREFIX_RE = re.compile(r"^error: ", re.MULTILINE)

# Exit code 1 is overloaded by `git stash push` and `git stash pop`
STASH_SUCCESS_EXIT_CODES = frozenset({0, 1})

# Left for the conflict resolution flow; not escalated here
POP_EXPECTED_ERRORS = frozenset({GitErrorKind.MERGE_CONFLICTS})


def _branch_name(branch: Branch | str) -> str:
    return branch if isinstance(branch, str) else branch.name


class StashSequencer:
    """Runs multi-step stash mutations against one repository at a time."""

    def __init__(
        self,
        executor: VCSExecutor,
        catalog: StashCatalog,
        stager: FileStager,
        marker: StashMarker | None = None,
        sign_moved_entries: bool = False,
    ) -> None:
        """Initialize the sequencer.

        Args:
            executor: Executor used to run git
            catalog: Catalog used to resolve entries by commit hash
            stager: Collaborator that stages files before a stash is created
            marker: Marker grammar for new entries (default: the catalog's)
            sign_moved_entries: Let git sign the commit created by move
        """
        self.executor = executor
        self.catalog = catalog
        self.stager = stager
        self.marker = marker or catalog.marker
        self.sign_moved_entries = sign_moved_entries

    def create_entry(
        self,
        repository: Repository,
        branch: Branch | str,
        untracked_files_to_stage: Sequence[WorkingDirectoryFileChange] = (),
    ) -> CreateResult:
        """Stash the working directory changes for a branch.

        Untracked files are staged first so they end up in the entry.

        Args:
            repository: Repository to stash in
            branch: Branch the entry belongs to
            untracked_files_to_stage: Untracked files to include

        Returns:
            Outcome of the stash

        Raises:
            StashMutationError: If staging fails or git reports an error
        """
        fully_selected = [f.with_include_all(True) for f in untracked_files_to_stage]
        if fully_selected:
            try:
                self.stager.stage(repository, fully_selected)
            except GitCommandFailedError as e:
                raise StashMutationError.from_command_failure(e) from e

        message = self.marker.create_message(_branch_name(branch))
        args = ["stash", "push", "-m", message]

        try:
            result = self.executor.run(
                args,
                repository.path,
                "createStashEntry",
                success_exit_codes=STASH_SUCCESS_EXIT_CODES,
            )
        except GitCommandFailedError as e:
            raise StashMutationError.from_command_failure(e) from e

        outcome = CreateOutcome.CREATED

        if result.exit_code == 1:
            if ERROR_PREFIX_RE.search(result.stderr):
                raise StashMutationError.from_result(
                    result,
                    f"Failed to create stash entry: {result.stderr.strip()}",
                )

            # No error lines: git created a valid entry and only printed warnings
            logger.info(
                f"[createStashEntry] a stash was created but exit code {result.exit_code} was reported. "
                f"stderr: {result.stderr}"
            )
            outcome = CreateOutcome.CREATED_WITH_WARNINGS

        if result.stdout == NO_LOCAL_CHANGES_OUTPUT:
            logger.debug(f"No local changes to stash in {repository.path}")
            return CreateResult(outcome=CreateOutcome.NO_CHANGES, stderr=result.stderr)

        return CreateResult(outcome=outcome, stderr=result.stderr)

    def create(
        self,
        repository: Repository,
        branch: Branch | str,
        untracked_files_to_stage: Sequence[WorkingDirectoryFileChange] = (),
    ) -> bool:
        """Stash the working directory changes for a branch.

        Returns:
            True if an entry was created, False if there was nothing to stash

        Raises:
            StashMutationError: If staging fails or git reports an error
        """
        return self.create_entry(repository, branch, untracked_files_to_stage).created

    def move(self, repository: Repository, entry: StashEntry, branch: Branch | str) -> MoveResult:
        """Move a stash entry to another branch.

        A new commit with the entry's tree and parents is created, stored as
        a stash entry tagged for the new branch, and the original entry is
        dropped. Git offers no way to do this atomically.

        Args:
            repository: Repository the entry lives in
            entry: Entry to move
            branch: Destination branch

        Returns:
            Result naming the new entry

        Raises:
            StashMoveError: If a step fails; `state` is the last completed step
        """
        branch_name = _branch_name(branch)
        message = f"On {branch_name}: {self.marker.create_message(branch_name)}"
        parent_args = [arg for parent in entry.parents for arg in ("-p", parent)]

        commit_args = ["commit-tree", *parent_args, "-m", message]
        if not self.sign_moved_entries:
            commit_args.append("--no-gpg-sign")
        commit_args.append(entry.tree)

        try:
            result = self.executor.run(commit_args, repository.path, "moveStashEntryToBranch")
        except GitCommandFailedError as e:
            raise StashMoveError(
                f"Failed to create commit for stash entry {entry.stash_sha}: {e}",
                state=MoveState.START,
                command=e.command,
                exit_code=e.exit_code,
                stderr=e.stderr,
            ) from e

        commit_sha = result.stdout.strip()
        if not commit_sha:
            raise StashMoveError(
                f"git commit-tree printed no commit id for stash entry {entry.stash_sha}",
                state=MoveState.START,
                command=" ".join(["git", *commit_args]),
                exit_code=result.exit_code,
                stderr=result.stderr,
            )

        try:
            self.executor.run(
                ["stash", "store", "-m", message, commit_sha],
                repository.path,
                "moveStashEntryToBranch",
            )
        except GitCommandFailedError as e:
            # The new commit is unreachable and will be garbage collected
            raise StashMoveError(
                f"Failed to store moved stash entry {commit_sha}: {e}",
                state=MoveState.COMMIT_CREATED,
                commit_sha=commit_sha,
                command=e.command,
                exit_code=e.exit_code,
                stderr=e.stderr,
            ) from e

        try:
            outcome = self.drop(repository, entry.stash_sha)
        except StashError as e:
            logger.warning(
                f"Stash entry {entry.stash_sha} was stored for {branch_name} as {commit_sha} "
                "but the original could not be dropped; both entries are now in the stash list"
            )
            context = e if isinstance(e, StashCommandError) else None
            raise StashMoveError(
                f"Duplicated stash entry: stored {commit_sha} but failed to drop {entry.stash_sha}: {e}",
                state=MoveState.STORED,
                commit_sha=commit_sha,
                command=context.command if context else None,
                exit_code=context.exit_code if context else None,
                stderr=context.stderr if context else "",
            ) from e

        if outcome is DropOutcome.NOT_FOUND:
            logger.warning(f"Original stash entry {entry.stash_sha} was already gone after moving it")

        logger.debug(f"Moved stash entry {entry.stash_sha} to {branch_name} as {commit_sha}")
        return MoveResult(
            state=MoveState.DROPPED,
            stash_sha=commit_sha,
            original_sha=entry.stash_sha,
            branch_name=branch_name,
        )

    def pop(self, repository: Repository, stash_sha: str) -> PopResult:
        """Apply an owned stash entry and remove it from the stash list.

        Args:
            repository: Repository the entry lives in
            stash_sha: Commit hash of the entry

        Returns:
            Outcome of the pop

        Raises:
            StashMutationError: If the changes could not be applied safely
        """
        entry = self.catalog.find_owned_by_sha(repository, stash_sha)
        if entry is None:
            logger.debug(f"No owned stash entry {stash_sha} to pop")
            return PopResult(outcome=PopOutcome.NOT_FOUND, stash_sha=stash_sha)

        args = ["stash", "pop", "--quiet", entry.name]
        try:
            result = self.executor.run(
                args,
                repository.path,
                "popStashEntry",
                success_exit_codes=STASH_SUCCESS_EXIT_CODES,
                expected_errors=POP_EXPECTED_ERRORS,
            )
        except GitCommandFailedError as e:
            raise StashMutationError.from_command_failure(e) from e

        if result.exit_code == 0:
            return PopResult(outcome=PopOutcome.POPPED, stash_sha=stash_sha)

        # Anything on stderr means the changes were not applied safely, even
        # when conflicts were reported alongside it
        if result.stderr:
            raise StashMutationError.from_result(
                result,
                f"Failed to pop stash entry {stash_sha}: {result.stderr.strip()}",
            )

        # A pop that leaves conflicts applies the changes but keeps the
        # entry, so it has to be dropped here
        logger.info(f"[popStashEntry] a stash was popped but exit code {result.exit_code} was reported.")
        self.drop(repository, stash_sha)
        return PopResult(outcome=PopOutcome.POPPED_WITH_CONFLICTS, stash_sha=stash_sha)

    def drop(self, repository: Repository, stash_sha: str) -> DropOutcome:
        """Remove an owned stash entry if it exists.

        Args:
            repository: Repository the entry lives in
            stash_sha: Commit hash of the entry

        Returns:
            DROPPED, or NOT_FOUND if no owned entry has that hash

        Raises:
            StashMutationError: If git fails to drop the entry
        """
        entry = self.catalog.find_owned_by_sha(repository, stash_sha)
        if entry is None:
            logger.debug(f"No owned stash entry {stash_sha} to drop")
            return DropOutcome.NOT_FOUND

        try:
            self.executor.run(["stash", "drop", entry.name], repository.path, "dropStashEntry")
        except GitCommandFailedError as e:
            raise StashMutationError.from_command_failure(e) from e

        return DropOutcome.DROPPED
