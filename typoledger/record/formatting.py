"""Serialization of corrections to the durable record format."""

from collections.abc import Iterable, Iterator

from typoledger.core.types import Candidate
from typoledger.record.parsing import is_count_token, split_token


def format_record_line(misspelling: str, corrected: str, manual_count: int, auto_count: int) -> str:
    """Render one fully qualified record line.

    Ignore candidates (empty corrected text) render without a trailing space,
    e.g. "word 0 0".

    Returns:
        The line including its trailing newline
    """
    if corrected:
        return f"{misspelling} {manual_count} {auto_count} {corrected}\n"
    return f"{misspelling} {manual_count} {auto_count}\n"


def needs_qualified_form(corrected: str) -> bool:
    """Return True if a bare line would be misread for this corrected text.

    The parser treats a leading count-like token as a count, so corrected
    text such as "42" or "2 apples" has to be written with explicit counts.
    """
    first_token, _ = split_token(corrected)
    return not corrected or is_count_token(first_token)


def format_live_line(misspelling: str, corrected: str) -> str:
    """Render the line appended for one live manual correction.

    Uses the bare "misspelling corrected" form whenever it parses back to the
    same record, and the four-field form otherwise.
    """
    if needs_qualified_form(corrected):
        return format_record_line(misspelling, corrected, 1, 0)
    return f"{misspelling} {corrected}\n"


def serialize_entries(entries: Iterable[tuple[str, list[Candidate]]]) -> Iterator[str]:
    """Render entries as fully qualified record lines.

    Entries are emitted sorted by misspelling so rewrites produce stable diffs;
    candidates keep their insertion order.

    Args:
        entries: (misspelling, candidates) pairs

    Yields:
        One line per candidate
    """
    for misspelling, candidates in sorted(entries, key=lambda entry: entry[0]):
        for candidate in candidates:
            yield format_record_line(
                misspelling, candidate.corrected, candidate.manual_count, candidate.auto_count
            )
