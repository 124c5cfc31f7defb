"""Tests for shared value objects and stash models."""

from pathlib import Path

import pytest
from pydantic import ValidationError

from stashmark.models import Branch, CommittedFileChange, FileStatus, Repository, WorkingDirectoryFileChange
from stashmark.stash.models import (
    NOT_LOADED,
    CreateOutcome,
    CreateResult,
    PopOutcome,
    PopResult,
    RawStashRecord,
    StashedChangesLoadState,
    StashEntry,
    StashListing,
)


class TestFileStatus:
    """Tests for FileStatus."""

    @pytest.mark.parametrize(
        ("code", "expected"),
        [
            ("M", FileStatus.MODIFIED),
            ("A", FileStatus.ADDED),
            ("D", FileStatus.DELETED),
            ("R087", FileStatus.RENAMED),
            ("C100", FileStatus.COPIED),
            ("T", FileStatus.TYPE_CHANGED),
            ("U", FileStatus.UNMERGED),
        ],
    )
    def test_from_code(self, code: str, expected: FileStatus) -> None:
        """Test only the leading letter of a code is significant."""
        assert FileStatus.from_code(code) == expected

    def test_from_empty_code(self) -> None:
        """Test an empty code is rejected."""
        with pytest.raises(ValueError, match="Empty file status code"):
            FileStatus.from_code("")

    def test_from_unknown_code(self) -> None:
        """Test unknown letters are rejected."""
        with pytest.raises(ValueError):
            FileStatus.from_code("Z")


class TestRepositoryModels:
    """Tests for Repository, Branch and file changes."""

    def test_repository_name(self) -> None:
        """Test the repository name is the directory basename."""
        assert Repository(path=Path("/work/my-project")).name == "my-project"

    def test_repository_is_frozen(self) -> None:
        """Test repositories are immutable."""
        repository = Repository(path=Path("/work/a"))

        with pytest.raises(ValidationError):
            repository.path = Path("/work/b")  # type: ignore[misc]

    def test_branch_requires_name(self) -> None:
        """Test an empty branch name is rejected."""
        with pytest.raises(ValidationError):
            Branch(name="")

    def test_with_include_all(self) -> None:
        """Test selecting all changes returns a new object."""
        change = WorkingDirectoryFileChange(path="a.txt", status=FileStatus.UNTRACKED)

        selected = change.with_include_all(True)

        assert selected.include_all is True
        assert change.include_all is False
        assert selected.path == "a.txt"

    def test_committed_change_binary(self) -> None:
        """Test a change without line counts is binary."""
        binary = CommittedFileChange(path="a.png", status=FileStatus.MODIFIED, commitish="x", parent_commitish="x^")
        text = CommittedFileChange(
            path="a.py",
            status=FileStatus.MODIFIED,
            additions=0,
            deletions=3,
            commitish="x",
            parent_commitish="x^",
        )

        assert binary.is_binary is True
        assert text.is_binary is False


class TestStashModels:
    """Tests for stash models."""

    def test_raw_record_parent_list(self) -> None:
        """Test the parents field is split on whitespace."""
        record = RawStashRecord(name="stash@{0}", stash_sha="a", message="m", tree="t", parents="p1 p2 p3")

        assert record.parent_list == ["p1", "p2", "p3"]
        assert RawStashRecord(name="n", stash_sha="a", message="", tree="t", parents="").parent_list == []

    def test_entry_starts_not_loaded(self) -> None:
        """Test entries are created without files."""
        entry = StashEntry(name="stash@{0}", stash_sha="a", branch_name="main", tree="t")

        assert entry.files == NOT_LOADED
        assert entry.files.kind == StashedChangesLoadState.NOT_LOADED

    def test_entry_requires_branch_name(self) -> None:
        """Test an owned entry always names a branch."""
        with pytest.raises(ValidationError):
            StashEntry(name="stash@{0}", stash_sha="a", branch_name="", tree="t")

    def test_with_files(self) -> None:
        """Test loading files keeps the identity of the entry."""
        entry = StashEntry(name="stash@{0}", stash_sha="a", branch_name="main", tree="t", parents=["p"])
        change = CommittedFileChange(path="f", status=FileStatus.ADDED, commitish="a", parent_commitish="a^")

        loaded = entry.with_files([change])

        assert loaded.files.kind == StashedChangesLoadState.LOADED
        assert loaded.files.files == [change]
        assert loaded.stash_sha == entry.stash_sha
        assert loaded.parents == ["p"]

    def test_listing_counts(self) -> None:
        """Test foreign entries are the total minus the owned ones."""
        entry = StashEntry(name="stash@{0}", stash_sha="a", branch_name="main", tree="t")

        listing = StashListing(owned_entries=[entry], total_entry_count=4)

        assert listing.foreign_entry_count == 3

    def test_listing_rejects_negative_total(self) -> None:
        """Test the total count cannot be negative."""
        with pytest.raises(ValidationError):
            StashListing(total_entry_count=-1)

    @pytest.mark.parametrize(
        ("outcome", "created"),
        [
            (CreateOutcome.CREATED, True),
            (CreateOutcome.CREATED_WITH_WARNINGS, True),
            (CreateOutcome.NO_CHANGES, False),
        ],
    )
    def test_create_result(self, outcome: CreateOutcome, created: bool) -> None:
        """Test only NO_CHANGES means nothing was created."""
        assert CreateResult(outcome=outcome).created is created

    def test_pop_result_conflicts(self) -> None:
        """Test conflicts are reported for the conflict outcome only."""
        assert PopResult(outcome=PopOutcome.POPPED_WITH_CONFLICTS, stash_sha="a").has_conflicts is True
        assert PopResult(outcome=PopOutcome.POPPED, stash_sha="a").has_conflicts is False
