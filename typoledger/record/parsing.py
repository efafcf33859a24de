"""Parsing of the durable correction record.

Each line has the shape::

    misspelling [manualCount autoCount] correctedText

The count pair is optional, so the live recorder can append bare
``misspelling corrected`` lines while a compacting rewrite emits fully
qualified ones. There is no escaping: the token after the misspelling is a
count only if it looks like one (see ``is_count_token``). Corrected text that
itself starts with a count-like token is therefore ambiguous in the bare form;
writers avoid that by emitting the four-field form (see ``formatting``).
"""

from collections.abc import Iterable, Iterator
from pathlib import Path

from loguru import logger

from typoledger.core.types import ParsedRecord
from typoledger.utils.constants import Constants


def is_count_token(token: str) -> bool:
    """Return True if token is accepted as a manual or auto count.

    A count is a run of ASCII digits that is either nonzero or exactly "0".
    Zero-padded zeros such as "00" are treated as text.

    Args:
        token: Whitespace-delimited token to inspect

    Returns:
        True if the token is a count
    """
    if not token or not token.isascii() or not token.isdigit():
        return False
    return int(token) != 0 or token == "0"


def split_token(text: str) -> tuple[str, str]:
    """Split off the first whitespace-delimited token.

    Returns:
        Tuple of (token, remainder); the remainder starts at the next token
    """
    parts = text.split(None, 1)
    if not parts:
        return "", ""
    if len(parts) == 1:
        return parts[0], ""
    return parts[0], parts[1]


def parse_record_line(line: str) -> ParsedRecord | None:
    """Parse a single record line.

    Args:
        line: One line of the record, with or without its newline

    Returns:
        (misspelling, corrected, manual_count, auto_count), or None if the line
        is malformed
    """
    misspelling, rest = split_token(line.rstrip("\r\n"))
    if not misspelling:
        return None

    token, remainder = split_token(rest)
    if not is_count_token(token):
        # Bare form: everything after the misspelling is the correction
        if not rest:
            return None
        return (
            misspelling,
            rest,
            Constants.BARE_LINE_MANUAL_COUNT,
            Constants.BARE_LINE_AUTO_COUNT,
        )

    auto_token, corrected = split_token(remainder)
    if not is_count_token(auto_token):
        return None

    # Empty corrected text here is the ignore marker, e.g. "word 0 0"
    return misspelling, corrected, int(token), int(auto_token)


def parse_records(
    lines: Iterable[str | bytes], source: str = "<record>"
) -> Iterator[ParsedRecord]:
    """Lazily parse record lines, skipping malformed ones.

    Byte lines are decoded one at a time, so a line with invalid bytes is
    skipped like any other malformed line.

    Args:
        lines: Iterable of text or raw byte lines
        source: Name used in log messages

    Yields:
        Parsed records in file order
    """
    for line_number, line in enumerate(lines, start=1):
        if isinstance(line, bytes):
            try:
                line = line.decode(Constants.RECORD_ENCODING, errors="strict")
            except UnicodeDecodeError as e:
                logger.warning(f"{source}:{line_number}: skipping undecodable line ({e.reason})")
                continue
        record = parse_record_line(line)
        if record is None:
            if line.strip():
                logger.debug(f"{source}:{line_number}: skipping malformed line {line.rstrip()!r}")
            continue
        yield record


class RecordReader:
    """Restartable view over the records stored in a file.

    Every iteration re-opens the file, so the reader always reflects the
    current on-disk contents. A missing file yields no records. The file is
    read as bytes and decoded per line by ``parse_records``.
    """

    def __init__(self, path: str | Path) -> None:
        self.path = Path(path)

    def __iter__(self) -> Iterator[ParsedRecord]:
        try:
            f = open(self.path, "rb")
        except FileNotFoundError:
            return
        with f:
            yield from parse_records(f, source=str(self.path))

    def __repr__(self) -> str:
        return f"RecordReader({str(self.path)!r})"
