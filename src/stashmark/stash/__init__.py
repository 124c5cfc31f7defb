"""Stash entry catalog and mutations."""

from stashmark.stash.catalog import StashCatalog
from stashmark.stash.exceptions import (
    StashCommandError,
    StashError,
    StashMoveError,
    StashMutationError,
    StashParseError,
    StashReadError,
)
from stashmark.stash.markers import (
    DEFAULT_STASH_MARKER,
    StashMarker,
    create_stash_message,
    extract_branch_from_message,
)
from stashmark.stash.models import (
    CreateOutcome,
    CreateResult,
    DropOutcome,
    MoveResult,
    MoveState,
    PopOutcome,
    PopResult,
    StashedChangesLoadState,
    StashedFiles,
    StashEntry,
    StashListing,
)
from stashmark.stash.sequencer import StashSequencer

__all__ = [
    "DEFAULT_STASH_MARKER",
    "CreateOutcome",
    "CreateResult",
    "DropOutcome",
    "MoveResult",
    "MoveState",
    "PopOutcome",
    "PopResult",
    "StashCatalog",
    "StashCommandError",
    "StashEntry",
    "StashError",
    "StashListing",
    "StashMarker",
    "StashMoveError",
    "StashMutationError",
    "StashParseError",
    "StashReadError",
    "StashSequencer",
    "StashedChangesLoadState",
    "StashedFiles",
    "create_stash_message",
    "extract_branch_from_message",
]
