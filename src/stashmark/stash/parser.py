"""Parsing of `git log -g refs/stash` output.

Each record is rendered with a custom `--format` whose fields are separated
by the ASCII unit separator and terminated by the ASCII record separator.
Splitting on the record separator therefore always leaves one trailing
chunk after the last terminator (only the newline git appends, or nothing
at all for an empty log). That chunk is kept as a trailer record, so the
number of stash entries is `len(records) - 1`.
"""

from stashmark.stash.exceptions import StashParseError
from stashmark.stash.models import RawStashRecord

FIELD_SEPARATOR = "\x1f"
RECORD_SEPARATOR = "\x1e"

# Field name -> git pretty-format placeholder, in output order
STASH_LOG_FIELDS: dict[str, str] = {
    "name": "%gD",
    "stash_sha": "%H",
    "message": "%gs",
    "tree": "%T",
    "parents": "%P",
}

_REQUIRED_FIELDS = ("name", "stash_sha", "tree")


class StashLogParser:
    """Builds the log format arguments and parses the matching output."""

    fields = STASH_LOG_FIELDS

    @property
    def format_args(self) -> list[str]:
        """Get the `git log` arguments that produce parseable output.

        Returns:
            Arguments to pass before the ref
        """
        placeholders = "%x1f".join(self.fields.values())
        return [f"--format={placeholders}%x1e"]

    def parse(self, output: str) -> list[RawStashRecord]:
        """Parse log output into records, trailer included.

        Args:
            output: Raw stdout of `git log -g` run with format_args

        Returns:
            Records in log order (most recent first), followed by the trailer

        Raises:
            StashParseError: If a record is malformed or the output is truncated
        """
        chunks = output.split(RECORD_SEPARATOR)
        *bodies, trailer = chunks

        if trailer.strip():
            raise StashParseError(f"Unterminated stash record at end of output: {trailer[:80]!r}")

        records = [self._parse_record(body, index) for index, body in enumerate(bodies)]
        records.append(self._trailer())
        return records

    def _parse_record(self, body: str, index: int) -> RawStashRecord:
        # Every record after the first starts with the newline git printed
        # after the previous one
        values = body.lstrip("\n").split(FIELD_SEPARATOR)

        if len(values) != len(self.fields):
            raise StashParseError(
                f"Stash record {index} has {len(values)} fields, expected {len(self.fields)}: {body[:80]!r}"
            )

        record = dict(zip(self.fields, values, strict=True))
        missing = [name for name in _REQUIRED_FIELDS if not record.get(name)]
        if missing:
            raise StashParseError(f"Stash record {index} is missing {', '.join(missing)}: {body[:80]!r}")

        return RawStashRecord(**record)

    def _trailer(self) -> RawStashRecord:
        return RawStashRecord(name="", stash_sha="", message="", tree="", parents="", is_trailer=True)


def count_entries(records: list[RawStashRecord]) -> int:
    """Count stash entries in parsed output, excluding the trailer.

    Args:
        records: Output of StashLogParser.parse

    Returns:
        Number of stash entries
    """
    return max(len(records) - 1, 0)
