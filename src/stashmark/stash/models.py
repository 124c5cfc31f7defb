"""Models for stash entries and stash operation outcomes."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field

from stashmark.models import CommittedFileChange


class StashedChangesLoadState(str, Enum):
    """Whether the file list of a stash entry has been read."""

    NOT_LOADED = "not-loaded"
    LOADED = "loaded"


class StashedFiles(BaseModel):
    """Lazily loaded file changes of a stash entry."""

    model_config = ConfigDict(frozen=True)

    kind: StashedChangesLoadState = StashedChangesLoadState.NOT_LOADED
    files: list[CommittedFileChange] = Field(default_factory=list)


NOT_LOADED = StashedFiles()


class RawStashRecord(BaseModel):
    """One record of stash reflog output, before ownership is decided."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Reflog selector (e.g. 'stash@{0}')")
    stash_sha: str = Field(description="Commit hash of the stash entry")
    message: str = Field(description="Reflog subject")
    tree: str = Field(description="Tree hash of the stash commit")
    parents: str = Field(description="Space separated parent hashes")
    is_trailer: bool = Field(
        default=False,
        description="True for the empty record following the last delimiter",
    )

    @property
    def parent_list(self) -> list[str]:
        """Split the parents field.

        Returns:
            Parent hashes in order (empty for a root commit)
        """
        return self.parents.split()


class StashEntry(BaseModel):
    """A stash entry created by this application."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(description="Reflog selector; only valid until the stash list changes")
    stash_sha: str = Field(description="Commit hash; stable identity of the entry")
    branch_name: str = Field(min_length=1, description="Branch the entry belongs to")
    tree: str = Field(description="Tree hash of the stash commit")
    parents: list[str] = Field(default_factory=list, description="Parent commit hashes")
    files: StashedFiles = Field(default=NOT_LOADED, description="Changed files, once loaded")

    def with_files(self, files: list[CommittedFileChange]) -> "StashEntry":
        """Return a copy with the file list loaded."""
        return self.model_copy(update={"files": StashedFiles(kind=StashedChangesLoadState.LOADED, files=files)})


class StashListing(BaseModel):
    """Result of reading the stash list."""

    model_config = ConfigDict(frozen=True)

    owned_entries: list[StashEntry] = Field(
        default_factory=list,
        description="Entries created by this application, most recent first",
    )
    total_entry_count: int = Field(
        default=0,
        ge=0,
        description="Number of stash entries, owned or not",
    )

    @property
    def foreign_entry_count(self) -> int:
        """Count entries created outside this application.

        Returns:
            Total entries minus owned entries
        """
        return self.total_entry_count - len(self.owned_entries)


class CreateOutcome(str, Enum):
    """Non-failing outcomes of creating a stash entry."""

    CREATED = "created"
    CREATED_WITH_WARNINGS = "created-with-warnings"
    NO_CHANGES = "no-changes"


class CreateResult(BaseModel):
    """Result of creating a stash entry."""

    outcome: CreateOutcome
    stderr: str = Field(default="", description="Warnings printed by git, if any")

    @property
    def created(self) -> bool:
        """Check if a stash entry was created.

        Returns:
            False only when there were no local changes to save
        """
        return self.outcome is not CreateOutcome.NO_CHANGES


class PopOutcome(str, Enum):
    """Non-failing outcomes of popping a stash entry."""

    POPPED = "popped"
    POPPED_WITH_CONFLICTS = "popped-with-conflicts"
    NOT_FOUND = "not-found"


class PopResult(BaseModel):
    """Result of popping a stash entry."""

    outcome: PopOutcome
    stash_sha: str

    @property
    def has_conflicts(self) -> bool:
        """Check if applying the entry left conflicts in the working directory.

        Returns:
            True if the working directory needs conflict resolution
        """
        return self.outcome is PopOutcome.POPPED_WITH_CONFLICTS


class DropOutcome(str, Enum):
    """Outcomes of dropping a stash entry."""

    DROPPED = "dropped"
    NOT_FOUND = "not-found"


class MoveState(str, Enum):
    """Last completed step of moving a stash entry to another branch."""

    START = "start"
    COMMIT_CREATED = "commit-created"
    STORED = "stored"
    DROPPED = "dropped"


class MoveResult(BaseModel):
    """Result of moving a stash entry to another branch."""

    state: MoveState
    stash_sha: str = Field(description="Commit hash of the new stash entry")
    original_sha: str = Field(description="Commit hash of the entry that was moved")
    branch_name: str = Field(description="Branch the entry now belongs to")
