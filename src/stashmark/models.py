"""Top-level value objects shared by the VCS and stash layers."""

from enum import Enum
from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field


class FileStatus(str, Enum):
    """Change status of a file, using git's single-letter codes."""

    ADDED = "A"
    MODIFIED = "M"
    DELETED = "D"
    RENAMED = "R"
    COPIED = "C"
    TYPE_CHANGED = "T"
    UNMERGED = "U"
    UNTRACKED = "?"

    @classmethod
    def from_code(cls, code: str) -> "FileStatus":
        """Parse a status code from `git diff --raw` output.

        Renames and copies carry a similarity score (e.g. ``R087``);
        only the leading letter is significant.

        Args:
            code: Raw status code

        Returns:
            Matching FileStatus

        Raises:
            ValueError: If the code is empty or unknown
        """
        if not code:
            raise ValueError("Empty file status code")
        return cls(code[0])


class Repository(BaseModel):
    """A git repository on disk."""

    model_config = ConfigDict(frozen=True)

    path: Path = Field(description="Path to the repository working directory")

    @property
    def name(self) -> str:
        """Get the repository name (working directory basename).

        Returns:
            Repository name
        """
        return self.path.name


class Branch(BaseModel):
    """A local branch."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(min_length=1, description="Short branch name (e.g. 'main')")
    tip_sha: str | None = Field(default=None, description="Commit the branch points at")


class WorkingDirectoryFileChange(BaseModel):
    """A file with uncommitted changes in the working directory."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Path relative to the repository root")
    status: FileStatus = Field(description="Change status")
    include_all: bool = Field(
        default=False,
        description="Whether every change in the file is selected for the next snapshot",
    )

    def with_include_all(self, include: bool) -> "WorkingDirectoryFileChange":
        """Return a copy with all changes (de)selected."""
        return self.model_copy(update={"include_all": include})


class CommittedFileChange(BaseModel):
    """A file changed by a commit, as reported by `--raw --numstat`."""

    model_config = ConfigDict(frozen=True)

    path: str = Field(description="Path after the change")
    status: FileStatus = Field(description="Change status")
    old_path: str | None = Field(default=None, description="Path before a rename or copy")
    additions: int | None = Field(default=None, description="Lines added (None for binary files)")
    deletions: int | None = Field(default=None, description="Lines deleted (None for binary files)")
    commitish: str = Field(description="Commit the change belongs to")
    parent_commitish: str = Field(description="Commit the change is compared against")

    @property
    def is_binary(self) -> bool:
        """Check whether git reported the file as binary.

        Returns:
            True if no line counts are available
        """
        return self.additions is None and self.deletions is None
