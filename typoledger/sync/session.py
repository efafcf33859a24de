"""Reload-before-save coordination against the shared durable record.

The record is an append-mostly log: live corrections are appended as single
lines and a save compacts it with a full rewrite. Several processes may do
both at once. There is no locking; convergence comes from the additive merge
in CorrectionStore. The one unsafe window is between the reload at the start
of save() and the rewrite that follows it: a line appended by another process
in that window is lost.
"""

import os
import tempfile
from pathlib import Path

from loguru import logger

from typoledger.core.types import PromotionEvent
from typoledger.record.formatting import serialize_entries
from typoledger.record.parsing import RecordReader
from typoledger.store.correction_store import CorrectionStore
from typoledger.utils.constants import Constants

# (st_mtime_ns, st_size, st_ino) of the record as last observed
FileStamp = tuple[int, int, int]


def _stamp_of(stat: os.stat_result) -> FileStamp:
    return stat.st_mtime_ns, stat.st_size, stat.st_ino


def _stamp(path: Path) -> FileStamp | None:
    try:
        return _stamp_of(path.stat())
    except FileNotFoundError:
        return None


class SessionSynchronizer:
    """Keep one process's CorrectionStore convergent with the shared record.

    The record already contains every line this process has appended, so a
    reload rebuilds the store from scratch through CorrectionStore.rebuild
    rather than merging on top of existing counts. Removals cannot be
    expressed as appended lines, so callers persist them with
    ``save(reload=False)`` right after removing from a freshly reloaded store.

    Attributes:
        path: Location of the durable record
        store: The store kept in sync
    """

    def __init__(self, path: str | Path, store: CorrectionStore) -> None:
        self.path = Path(path)
        self.store = store
        self.reader = RecordReader(self.path)
        self._last_stamp: FileStamp | None = None

    def ensure_record_file(self) -> None:
        """Create an empty record (and its parent directories) if missing."""
        if self.path.exists():
            return
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.touch()
        logger.info(f"Created empty correction record at {self.path}")

    def is_stale(self) -> bool:
        """Return True if the record changed since it was last observed."""
        return _stamp(self.path) != self._last_stamp

    def reload(self, force: bool = False) -> list[PromotionEvent] | None:
        """Rebuild the store from the record if it changed on disk.

        Args:
            force: Reload even if the record looks unchanged

        Returns:
            How the active set changed, or None if the record was not re-read
        """
        self.ensure_record_file()
        if not force and not self.is_stale():
            return None

        stamp = _stamp(self.path)
        merged = self.store.rebuild(self.reader)
        events = self.store.engine.synchronize(self.store.entries())
        self._last_stamp = stamp

        logger.info(f"Loaded {merged} record(s), {len(self.store)} misspelling(s) from {self.path}")
        return events

    def append(self, line: str) -> None:
        """Append one complete, newline-terminated line to the record.

        The line goes out in a single write so concurrent readers never see a
        partial record.
        """
        if not line.endswith("\n") or "\n" in line[:-1]:
            raise ValueError(f"expected exactly one newline-terminated line, got {line!r}")
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding=Constants.RECORD_ENCODING) as f:
            f.write(line)

    def save(self, reload: bool = True) -> None:
        """Reload, then rewrite the full record from the merged store.

        The rewrite goes to a temporary file in the same directory and is
        moved over the record, so readers see either the old or the new
        contents. The stamp is taken from the temporary file before the move
        (a rename keeps inode, size and mtime), so a line appended right
        after the move still marks the record as stale.
        """
        if reload:
            self.reload()

        self.path.parent.mkdir(parents=True, exist_ok=True)
        fd, tmp_name = tempfile.mkstemp(prefix=f".{self.path.name}.", dir=self.path.parent)
        try:
            with os.fdopen(fd, "w", encoding=Constants.RECORD_ENCODING) as f:
                f.writelines(serialize_entries(self.store.entries()))
                f.flush()
                stamp = _stamp_of(os.fstat(f.fileno()))
            os.replace(tmp_name, self.path)
        except BaseException:
            Path(tmp_name).unlink(missing_ok=True)
            raise

        self._last_stamp = stamp
        logger.info(f"Saved {len(self.store)} misspelling(s) to {self.path}")
