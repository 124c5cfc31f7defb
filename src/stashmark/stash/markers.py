"""Recognition of stash entries created by this application.

Owned entries carry a marker in their message with the following format:
`<marker><branch>`, e.g. `!!Stashmark<main>`. Git may prefix the message
with its own `On <branch>: `, so the marker is matched at the end of the
message rather than at the start.
"""

import re

DEFAULT_STASH_MARKER = "!!Stashmark"


class StashMarker:
    """Marker grammar for one marker literal."""

    def __init__(self, marker: str = DEFAULT_STASH_MARKER) -> None:
        """Initialize marker grammar.

        Args:
            marker: Literal sentinel preceding the bracketed branch name

        Raises:
            ValueError: If the marker is empty or contains angle brackets
        """
        if not marker:
            raise ValueError("Stash marker must not be empty")
        if "<" in marker or ">" in marker:
            raise ValueError(f"Stash marker must not contain '<' or '>': {marker!r}")

        self.marker = marker
        self.pattern = re.compile(re.escape(marker) + r"<(.+)>$")

    def create_message(self, branch_name: str) -> str:
        """Create a stash message that marks the entry as owned.

        Args:
            branch_name: Branch the entry belongs to

        Returns:
            Marker message
        """
        return f"{self.marker}<{branch_name}>"

    def extract_branch(self, message: str) -> str | None:
        """Extract the owning branch from a stash message.

        Args:
            message: Stash reflog subject

        Returns:
            Branch name, or None if the message has no marker or an empty one
        """
        match = self.pattern.search(message)
        if match is None or not match.group(1):
            return None
        return match.group(1)

    def is_owned(self, message: str) -> bool:
        """Check if a stash message carries a valid marker.

        Returns:
            True if a branch name can be extracted
        """
        return self.extract_branch(message) is not None

    def __repr__(self) -> str:
        return f"StashMarker({self.marker!r})"


DEFAULT_MARKER = StashMarker()


def create_stash_message(branch_name: str) -> str:
    """Create a stash message with the default marker."""
    return DEFAULT_MARKER.create_message(branch_name)


def extract_branch_from_message(message: str) -> str | None:
    """Extract the owning branch from a message using the default marker."""
    return DEFAULT_MARKER.extract_branch(message)
